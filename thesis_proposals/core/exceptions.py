"""Typed failures raised by the candidacy core.

All of them are recoverable by the caller; the core never retries.
"""

from __future__ import annotations

from uuid import UUID


class ThesisProposalsError(Exception):
    """Base class for every failure surfaced by the core."""


class OutOfPeriodError(ThesisProposalsError):
    """Raised when a candidacy is created outside the candidacy period."""

    def __init__(self, configuration_id: UUID) -> None:
        self.configuration_id = configuration_id
        super().__init__(
            f"Candidacy period of configuration {configuration_id} is not open"
        )


class QuotaExceededError(ThesisProposalsError):
    """Raised when a student already holds the maximum number of candidacies."""

    def __init__(self, student_id: UUID, limit: int) -> None:
        self.student_id = student_id
        self.limit = limit
        super().__init__(
            f"Student {student_id} already has the maximum of {limit} candidacies"
        )


class DeletionBlockedError(ThesisProposalsError):
    """Raised when deleting an accepted candidacy or after the period closed."""

    def __init__(self, candidacy_id: UUID, reason: str) -> None:
        self.candidacy_id = candidacy_id
        self.reason = reason
        super().__init__(f"Candidacy {candidacy_id} cannot be deleted: {reason}")


class ConfigurationMismatchError(ThesisProposalsError):
    """Raised when a proposal does not resolve to a single configuration."""

    def __init__(
        self,
        proposal_id: UUID,
        base_id: UUID | None = None,
        other_id: UUID | None = None,
    ) -> None:
        self.proposal_id = proposal_id
        self.base_id = base_id
        self.other_id = other_id
        if base_id is None:
            message = f"Proposal {proposal_id} has no configuration"
        else:
            message = (
                f"Proposal {proposal_id} spans configurations {base_id} and "
                f"{other_id}, which are not equivalent"
            )
        super().__init__(message)


class NotFoundError(ThesisProposalsError):
    """Raised when an id does not match any loaded entity."""

    def __init__(self, kind: str, entity_id: UUID) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")
