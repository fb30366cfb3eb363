"""Pydantic models for the people around a proposal.

Profiles come from the identity collaborator; students and participants only
carry the ``user_id`` used to resolve them.
"""

from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """Display data resolved from a user id."""
    user_id: str
    display_name: str
    email: str


class Student(BaseModel):
    """A student registration able to apply to proposals."""
    id: UUID = Field(default_factory=uuid4)
    user_id: str


class Participant(BaseModel):
    """An advisor taking part in a proposal with a weighted share."""
    user_id: str
    participant_type: str = "advisor"
    percentage: int = Field(default=100, ge=0, le=100)
