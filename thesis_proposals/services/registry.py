"""Candidacy registry: creation and deletion of candidacies.

Creation checks the candidacy period and the per-student quota; deletion is
blocked for accepted candidacies and once the candidacy period has closed.
Each operation runs in a single store transaction, so the quota check and
the insertion cannot interleave with another ``create`` for the same
student.

Callers are expected not to submit two candidacies for the same
(student, proposal) pair nor to reuse a preference number; neither is
enforced here because preference numbers come from the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from thesis_proposals.core.exceptions import (
    DeletionBlockedError,
    OutOfPeriodError,
    QuotaExceededError,
)
from thesis_proposals.db.store import ThesisProposalsStore
from thesis_proposals.models.candidacy import Candidacy, by_preference
from thesis_proposals.models.period import utc_now
from thesis_proposals.services.configurations import ConfigurationLookup

logger = logging.getLogger(__name__)


class CandidacyRegistry:
    """Owns the candidacy set and its creation/deletion rules."""

    def __init__(
        self,
        store: ThesisProposalsStore,
        configurations: ConfigurationLookup,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.configurations = configurations
        self.clock = clock

    def create(
        self,
        student_id: UUID,
        preference_number: int,
        proposal_id: UUID,
    ) -> Candidacy:
        """Create a pending candidacy and return a copy of it.

        Acceptance state lives in the store; re-read it through the store
        rather than through the returned object.

        Raises
        ------
        ConfigurationMismatchError
            The proposal does not resolve to a single configuration.
        OutOfPeriodError
            ``now`` is outside the configuration's candidacy period.
        QuotaExceededError
            The student already holds ``max_candidacies_per_student``.
        """
        with self.store.transaction():
            configuration = self.configurations.configuration_for(proposal_id)
            now = self.clock()

            if not configuration.candidacy_period.contains(now):
                logger.info(
                    "candidacy_rejected_out_of_period",
                    extra={
                        "student_id": str(student_id),
                        "proposal_id": str(proposal_id),
                    },
                )
                raise OutOfPeriodError(configuration.id)

            count = self.store.count_candidacies(student_id)
            if configuration.candidacy_quota_reached(count):
                logger.info(
                    "candidacy_rejected_quota",
                    extra={
                        "student_id": str(student_id),
                        "count": count,
                        "limit": configuration.max_candidacies_per_student,
                    },
                )
                raise QuotaExceededError(
                    student_id, configuration.max_candidacies_per_student
                )

            candidacy = self.store.insert_candidacy(
                Candidacy(
                    student_id=student_id,
                    proposal_id=proposal_id,
                    preference_number=preference_number,
                    created_at=now,
                )
            )

        logger.info(
            "candidacy_created",
            extra={
                "candidacy_id": str(candidacy.id),
                "student_id": str(student_id),
                "proposal_id": str(proposal_id),
                "preference_number": preference_number,
            },
        )
        return candidacy.model_copy()

    def delete(self, candidacy_id: UUID) -> None:
        """Remove a candidacy that is neither accepted nor past its period."""
        with self.store.transaction():
            candidacy = self.store.get_candidacy(candidacy_id)

            if candidacy.accepted_by_advisor:
                raise DeletionBlockedError(candidacy_id, "accepted by advisor")

            configuration = self.configurations.configuration_for(candidacy.proposal_id)
            if not configuration.candidacy_period.contains(self.clock()):
                raise DeletionBlockedError(candidacy_id, "candidacy period is closed")

            self.store.remove_candidacy(candidacy_id)

        logger.info(
            "candidacy_deleted",
            extra={"candidacy_id": str(candidacy_id)},
        )

    def candidacies_of_student(self, student_id: UUID) -> list[Candidacy]:
        """The student's ranked list, most preferred first."""
        with self.store.transaction():
            ranked = sorted(self.store.candidacies_of_student(student_id), key=by_preference)
            return [c.model_copy() for c in ranked]
