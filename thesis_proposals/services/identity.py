"""Identity resolution capability.

The core only needs display names and emails; the directory that owns user
accounts lives outside of it.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from thesis_proposals.models.people import UserProfile


class IdentityResolver(Protocol):
    def resolve(self, user_id: str) -> UserProfile | None: ...


class InMemoryDirectory:
    """Dictionary-backed resolver, used when profiles are loaded up front."""

    def __init__(self, profiles: Iterable[UserProfile] = ()) -> None:
        self._profiles: dict[str, UserProfile] = {p.user_id: p for p in profiles}

    def add(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile

    def resolve(self, user_id: str) -> UserProfile | None:
        return self._profiles.get(user_id)
