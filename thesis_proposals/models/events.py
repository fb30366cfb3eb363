"""Pydantic models for notification payloads.

``StolenAssignmentEvent`` is returned by ``accept`` and is informational:
building it never changes candidacy state.
"""

from uuid import UUID

from pydantic import BaseModel


class StolenAssignmentEvent(BaseModel):
    """A student left a weaker accepted match for a more preferred one."""
    student_id: UUID
    student_name: str
    old_candidacy_id: UUID
    new_candidacy_id: UUID
    old_proposal_id: UUID
    new_proposal_id: UUID
    old_proposal_identifier: str
    old_proposal_title: str
    new_proposal_title: str
    old_preference_number: int
    new_preference_number: int
    new_advisor_name: str | None = None
    recipients: set[str] = set()
    link: str
    actor: str


class NotificationMessage(BaseModel):
    """What the notification sink receives."""
    recipients: set[str]
    subject: str
    body: str
