"""Read-side queries over candidacies for advisors and coordinators.

Nothing here mutates the graph. Each query runs inside a store transaction
so it sees a consistent snapshot, and returns copies of the stored
entities; changing a result never changes the graph.
"""

from __future__ import annotations

import logging
from uuid import UUID

from thesis_proposals.db.store import ThesisProposalsStore
from thesis_proposals.models.candidacy import Candidacy, by_creation, by_preference
from thesis_proposals.models.proposal import Proposal
from thesis_proposals.services.identity import IdentityResolver

logger = logging.getLogger(__name__)


class PreferenceResolver:
    """Reporting queries: best matches, coordinator views, proposal filters."""

    def __init__(
        self,
        store: ThesisProposalsStore,
        identity: IdentityResolver | None = None,
    ) -> None:
        self.store = store
        self.identity = identity

    def _best_accepted_of_student(self, student_id: UUID) -> Candidacy | None:
        best: Candidacy | None = None
        for candidacy in sorted(self.store.candidacies_of_student(student_id), key=by_preference):
            if candidacy.accepted_by_advisor:
                best = candidacy
                break
        return best

    def best_accepted(self, proposal_id: UUID) -> dict[UUID, Candidacy]:
        """For each student applying to the proposal, their best accepted candidacy.

        The search spans all of the student's candidacies, not only the ones
        on ``proposal_id``. Students with no accepted candidacy are omitted.
        """
        result: dict[UUID, Candidacy] = {}
        with self.store.transaction():
            for candidacy in self.store.candidacies_of_proposal(proposal_id):
                if candidacy.student_id in result:
                    continue
                best = self._best_accepted_of_student(candidacy.student_id)
                if best is not None:
                    result[candidacy.student_id] = best.model_copy()
        return result

    def can_advisor_still_accept_better_candidacy(self, proposal_id: UUID) -> bool:
        """Whether accepting some candidacy here would still upgrade its student."""
        with self.store.transaction():
            for candidacy in self.store.candidacies_of_proposal(proposal_id):
                best = self._best_accepted_of_student(candidacy.student_id)
                if best is None or best.preference_number > candidacy.preference_number:
                    return True
        return False

    def coordinator_view(self, configuration_id: UUID) -> dict[UUID, list[Candidacy]]:
        """Candidacies under a configuration grouped by student, ranked."""
        grouped: dict[UUID, list[Candidacy]] = {}
        with self.store.transaction():
            for proposal in self.store.proposals_of_configuration(configuration_id):
                for candidacy in self.store.candidacies_of_proposal(proposal.id):
                    grouped.setdefault(candidacy.student_id, []).append(candidacy.model_copy())
        return {
            student_id: sorted(candidacies, key=by_preference)
            for student_id, candidacies in grouped.items()
        }

    def is_accepted(self, proposal_id: UUID) -> bool:
        with self.store.transaction():
            return any(
                c.accepted_by_advisor
                for c in self.store.candidacies_of_proposal(proposal_id)
            )

    def candidacies_by_creation(self, proposal_id: UUID) -> list[Candidacy]:
        with self.store.transaction():
            ordered = sorted(self.store.candidacies_of_proposal(proposal_id), key=by_creation)
            return [c.model_copy() for c in ordered]

    def coordinator_proposals(
        self,
        configuration_id: UUID,
        is_visible: bool | None = None,
        is_attributed: bool | None = None,
        has_candidacy: bool | None = None,
    ) -> list[Proposal]:
        """Proposals of a configuration, each filter applied only when not None."""
        selected: list[Proposal] = []
        with self.store.transaction():
            for proposal in self.store.proposals_of_configuration(configuration_id):
                candidacies = self.store.candidacies_of_proposal(proposal.id)
                if is_visible is not None and is_visible != (not proposal.hidden):
                    continue
                if has_candidacy is not None and has_candidacy != bool(candidacies):
                    continue
                if is_attributed is not None and is_attributed != any(
                    c.accepted_by_advisor for c in candidacies
                ):
                    continue
                selected.append(proposal.model_copy(deep=True))
        return selected

    def proposal_candidates(self, proposal_id: UUID) -> list[str]:
        """One label per candidacy: ``"<name> (<user id>) - preference: <n>"``."""
        labels: list[str] = []
        with self.store.transaction():
            for candidacy in self.store.candidacies_of_proposal(proposal_id):
                student = self.store.get_student(candidacy.student_id)
                profile = self.identity.resolve(student.user_id) if self.identity else None
                name = profile.display_name if profile else student.user_id
                labels.append(
                    f"{name} ({student.user_id}) - preference: {candidacy.preference_number}"
                )
        return labels
