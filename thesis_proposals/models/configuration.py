"""Pydantic model for one candidacy round.

A configuration is read-only while a core operation runs: the candidacy
window plus the two quota limits, where ``-1`` means unlimited.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from thesis_proposals.core.constants import UNLIMITED
from thesis_proposals.models.period import TimeWindow


class CandidacyConfiguration(BaseModel):
    """Time windows and quotas governing a round of proposals/candidacies."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    candidacy_period: TimeWindow
    proposal_period: TimeWindow | None = None
    max_candidacies_per_student: int = Field(default=UNLIMITED, ge=UNLIMITED)
    max_proposals_per_participant: int = Field(default=UNLIMITED, ge=UNLIMITED)

    def is_equivalent(self, other: CandidacyConfiguration) -> bool:
        """Two configurations are interchangeable when their periods match."""
        return (
            self.candidacy_period == other.candidacy_period
            and self.proposal_period == other.proposal_period
        )

    def candidacy_quota_reached(self, current_count: int) -> bool:
        limit = self.max_candidacies_per_student
        return limit != UNLIMITED and current_count >= limit

    def proposal_quota_reached(self, current_count: int) -> bool:
        limit = self.max_proposals_per_participant
        return limit != UNLIMITED and current_count >= limit
