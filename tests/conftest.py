"""Shared test fixtures.

Provides a controllable clock, a directory of user profiles, a store loaded
with one configuration, one student and two proposals, and a service wired
to a mock notification sink.
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from thesis_proposals.db.store import ThesisProposalsStore
from thesis_proposals.models.configuration import CandidacyConfiguration
from thesis_proposals.models.people import Participant, Student, UserProfile
from thesis_proposals.models.period import TimeWindow
from thesis_proposals.models.proposal import Proposal
from thesis_proposals.services.identity import InMemoryDirectory

PERIOD_START = datetime(2026, 3, 1, tzinfo=timezone.utc)
PERIOD_END = datetime(2026, 3, 31, 23, 59, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock whose instant tests can move."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    """Clock set inside the candidacy period."""
    return FakeClock(datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture()
def candidacy_period() -> TimeWindow:
    return TimeWindow(start=PERIOD_START, end=PERIOD_END)


@pytest.fixture()
def directory() -> InMemoryDirectory:
    return InMemoryDirectory(
        [
            UserProfile(user_id="ist1001", display_name="Ana Silva", email="ana@example.org"),
            UserProfile(user_id="ist1002", display_name="Rui Costa", email="rui@example.org"),
            UserProfile(user_id="prof.alves", display_name="Prof. Alves", email="alves@example.org"),
            UserProfile(user_id="prof.brito", display_name="Prof. Brito", email="brito@example.org"),
            UserProfile(user_id="prof.cunha", display_name="Prof. Cunha", email="cunha@example.org"),
        ]
    )


@pytest.fixture()
def world(candidacy_period: TimeWindow) -> SimpleNamespace:
    """A store with one configuration, two students and two proposals.

    Proposal A is advised by Alves (70%) and Cunha (30%); proposal B by
    Brito alone.
    """
    store = ThesisProposalsStore()
    configuration = CandidacyConfiguration(
        candidacy_period=candidacy_period,
        max_candidacies_per_student=2,
    )
    store.add_configuration(configuration)

    student = Student(user_id="ist1001")
    other_student = Student(user_id="ist1002")
    store.add_student(student)
    store.add_student(other_student)

    proposal_a = Proposal(
        identifier="P-A",
        title="Graph Neural Networks for Timetabling",
        participants=[
            Participant(user_id="prof.cunha", percentage=30),
            Participant(user_id="prof.alves", percentage=70),
        ],
        configuration_ids=[configuration.id],
    )
    proposal_b = Proposal(
        identifier="P-B",
        title="Formal Verification of Smart Contracts",
        participants=[Participant(user_id="prof.brito", percentage=100)],
        configuration_ids=[configuration.id],
    )
    store.add_proposal(proposal_a)
    store.add_proposal(proposal_b)

    return SimpleNamespace(
        store=store,
        configuration=configuration,
        student=student,
        other_student=other_student,
        proposal_a=proposal_a,
        proposal_b=proposal_b,
    )


@pytest.fixture()
def notifier() -> Generator[MagicMock, None, None]:
    """Mock notification sink."""
    yield MagicMock()


@pytest.fixture()
def service(world, directory, notifier, clock):
    """ThesisProposalsService over ``world``."""
    from thesis_proposals.services.thesis_proposals import ThesisProposalsService

    return ThesisProposalsService(world.store, directory, notifier=notifier, clock=clock)
