"""Assignment engine: the accept / revoke / reject state machine.

A candidacy is either pending or accepted. Accepting one candidacy clears
every other acceptance on the same proposal, so each proposal holds at most
one accepted candidacy.

When the student already holds an accepted candidacy ranked worse than the
one just accepted, the worst of those is reported as a stolen assignment.
The report is informational: the displaced candidacy keeps its flag until
its advisors revoke it. The notification is sent after the transaction and
its failure does not affect the acceptance.
"""

from __future__ import annotations

import logging
from uuid import UUID

from thesis_proposals.core.config import settings
from thesis_proposals.core.constants import MANAGE_PROPOSAL_PATH
from thesis_proposals.db.store import ThesisProposalsStore
from thesis_proposals.models.candidacy import Candidacy, by_preference
from thesis_proposals.models.events import StolenAssignmentEvent
from thesis_proposals.models.proposal import Proposal
from thesis_proposals.services.identity import IdentityResolver
from thesis_proposals.services.notifications import (
    NotificationSink,
    dispatch,
    render_stolen_message,
)

logger = logging.getLogger(__name__)


def find_displaced(candidacies: list[Candidacy], accepted: Candidacy) -> Candidacy | None:
    """Worst-ranked accepted candidacy strictly below ``accepted``.

    Walks the student's candidacies in (preference, arrival) order and keeps
    the last match, i.e. the maximum preference number; among equal numbers
    the latest arrival wins.
    """
    displaced: Candidacy | None = None
    for candidacy in sorted(candidacies, key=by_preference):
        if (
            candidacy.id != accepted.id
            and candidacy.accepted_by_advisor
            and candidacy.preference_number > accepted.preference_number
        ):
            displaced = candidacy
    return displaced


class AssignmentEngine:
    """Mutates ``accepted_by_advisor``; nothing else does."""

    def __init__(
        self,
        store: ThesisProposalsStore,
        identity: IdentityResolver,
        notifier: NotificationSink,
    ) -> None:
        self.store = store
        self.identity = identity
        self.notifier = notifier

    def accept(
        self,
        candidacy_id: UUID,
        actor: str | None = None,
    ) -> StolenAssignmentEvent | None:
        """Accept ``candidacy_id`` as the match of its proposal.

        Returns the stolen-assignment event when the acceptance pulls the
        student out of a weaker accepted match, otherwise None.
        """
        with self.store.transaction():
            candidacy = self.store.get_candidacy(candidacy_id)

            for other in self.store.candidacies_of_proposal(candidacy.proposal_id):
                other.accepted_by_advisor = False
            candidacy.accepted_by_advisor = True

            displaced = find_displaced(
                self.store.candidacies_of_student(candidacy.student_id),
                candidacy,
            )

            event = None
            if displaced is not None:
                event = self._stolen_event(displaced, candidacy, actor)

        logger.info(
            "candidacy_accepted",
            extra={
                "candidacy_id": str(candidacy_id),
                "proposal_id": str(candidacy.proposal_id),
                "student_id": str(candidacy.student_id),
            },
        )

        if event is not None:
            logger.info(
                "stolen_assignment_detected",
                extra={
                    "student_id": str(event.student_id),
                    "old_candidacy_id": str(event.old_candidacy_id),
                    "new_candidacy_id": str(event.new_candidacy_id),
                },
            )
            dispatch(self.notifier, render_stolen_message(event))

        return event

    def revoke(self, candidacy_id: UUID) -> None:
        """Withdraw the advisor's acceptance. ``reject`` is the same operation."""
        with self.store.transaction():
            candidacy = self.store.get_candidacy(candidacy_id)
            candidacy.accepted_by_advisor = False

        logger.info(
            "candidacy_revoked",
            extra={"candidacy_id": str(candidacy_id)},
        )

    reject = revoke

    def _stolen_event(
        self,
        old: Candidacy,
        new: Candidacy,
        actor: str | None,
    ) -> StolenAssignmentEvent:
        old_proposal = self.store.get_proposal(old.proposal_id)
        new_proposal = self.store.get_proposal(new.proposal_id)
        student = self.store.get_student(new.student_id)

        student_profile = self.identity.resolve(student.user_id)
        link = settings.APPLICATION_URL.rstrip("/") + MANAGE_PROPOSAL_PATH.format(
            proposal_id=old_proposal.id,
        )

        return StolenAssignmentEvent(
            student_id=student.id,
            student_name=student_profile.display_name if student_profile else student.user_id,
            old_candidacy_id=old.id,
            new_candidacy_id=new.id,
            old_proposal_id=old_proposal.id,
            new_proposal_id=new_proposal.id,
            old_proposal_identifier=old_proposal.identifier,
            old_proposal_title=old_proposal.title,
            new_proposal_title=new_proposal.title,
            old_preference_number=old.preference_number,
            new_preference_number=new.preference_number,
            new_advisor_name=self._advisor_name(new_proposal),
            recipients=self._participant_emails(old_proposal),
            link=link,
            actor=actor or settings.SYSTEM_SENDER_NAME,
        )

    def _advisor_name(self, proposal: Proposal) -> str | None:
        participant = proposal.representative_participant()
        if participant is None:
            return None
        profile = self.identity.resolve(participant.user_id)
        return profile.display_name if profile else participant.user_id

    def _participant_emails(self, proposal: Proposal) -> set[str]:
        emails: set[str] = set()
        for participant in proposal.participants:
            profile = self.identity.resolve(participant.user_id)
            if profile is None:
                logger.warning(
                    "participant_profile_missing",
                    extra={
                        "proposal_id": str(proposal.id),
                        "user_id": participant.user_id,
                    },
                )
                continue
            emails.add(profile.email)
        return emails
