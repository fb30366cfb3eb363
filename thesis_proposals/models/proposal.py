"""Pydantic model for thesis proposals as seen by the candidacy core."""

from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from thesis_proposals.models.people import Participant


class Proposal(BaseModel):
    """A thesis proposal offered under one or more configurations."""
    id: UUID = Field(default_factory=uuid4)
    identifier: str
    title: str
    participants: list[Participant] = []
    configuration_ids: list[UUID] = []
    hidden: bool = False

    def representative_participant(self) -> Participant | None:
        """Participant with the highest share; the first one listed wins ties."""
        best: Participant | None = None
        for participant in self.participants:
            if best is None or participant.percentage > best.percentage:
                best = participant
        return best
