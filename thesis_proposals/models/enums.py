"""Enum types shared by the candidacy models."""

from enum import Enum


class CandidacyState(str, Enum):
    """Advisor decision on a candidacy."""
    pending = "pending"
    accepted = "accepted"
