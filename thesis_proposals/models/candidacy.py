"""Pydantic model for student candidacies and their sort orders.

``preference_number`` ranks a candidacy inside the student's list (lower is
more preferred). ``sequence`` is the insertion order assigned by the store
and breaks ties in every ordering.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import AwareDatetime, BaseModel, Field

from thesis_proposals.models.enums import CandidacyState


class Candidacy(BaseModel):
    """A student's application to a single proposal."""

    id: UUID = Field(default_factory=uuid4)
    student_id: UUID
    proposal_id: UUID
    preference_number: int = Field(ge=1)
    accepted_by_advisor: bool = False
    created_at: AwareDatetime
    sequence: int = 0

    @property
    def state(self) -> CandidacyState:
        if self.accepted_by_advisor:
            return CandidacyState.accepted
        return CandidacyState.pending


def by_preference(candidacy: Candidacy) -> tuple[int, int]:
    """Sort key: preference number ascending, then arrival order."""
    return (candidacy.preference_number, candidacy.sequence)


def by_creation(candidacy: Candidacy) -> tuple[datetime, int]:
    """Sort key: creation timestamp ascending, then arrival order."""
    return (candidacy.created_at, candidacy.sequence)
