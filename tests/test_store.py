"""Unit tests for the in-memory candidacy/proposal graph."""

from __future__ import annotations

import threading
from uuid import uuid4

import pytest

from thesis_proposals.core.exceptions import NotFoundError
from thesis_proposals.models.candidacy import Candidacy
from thesis_proposals.models.proposal import Proposal


def _candidacy(world, student=None, proposal=None, preference: int = 1) -> Candidacy:
    return Candidacy(
        student_id=(student or world.student).id,
        proposal_id=(proposal or world.proposal_a).id,
        preference_number=preference,
        created_at=world.configuration.candidacy_period.start,
    )


class TestLoading:
    def test_proposals_indexed_by_configuration(self, world) -> None:
        proposals = world.store.proposals_of_configuration(world.configuration.id)
        assert [p.id for p in proposals] == [world.proposal_a.id, world.proposal_b.id]

    def test_re_adding_proposal_moves_it_between_configurations(
        self, world, candidacy_period
    ) -> None:
        from thesis_proposals.models.configuration import CandidacyConfiguration

        target = CandidacyConfiguration(candidacy_period=candidacy_period)
        world.store.add_configuration(target)
        moved = world.proposal_a.model_copy(update={"configuration_ids": [target.id]})

        world.store.add_proposal(moved)

        remaining = world.store.proposals_of_configuration(world.configuration.id)
        assert [p.id for p in remaining] == [world.proposal_b.id]
        assert world.store.proposals_of_configuration(target.id) == [moved]
        assert world.store.get_proposal(moved.id) is moved

    def test_re_adding_proposal_keeps_its_position(self, world) -> None:
        world.store.add_proposal(world.proposal_a)

        proposals = world.store.proposals_of_configuration(world.configuration.id)
        assert [p.id for p in proposals] == [world.proposal_a.id, world.proposal_b.id]

    def test_proposal_with_unknown_configuration_rejected(self, world) -> None:
        proposal = Proposal(identifier="X", title="x", configuration_ids=[uuid4()])
        with pytest.raises(NotFoundError):
            world.store.add_proposal(proposal)
        assert proposal.id not in world.store.proposals

    @pytest.mark.parametrize(
        "getter", ["get_student", "get_proposal", "get_configuration", "get_candidacy"]
    )
    def test_unknown_ids_raise_not_found(self, world, getter: str) -> None:
        missing = uuid4()
        with pytest.raises(NotFoundError) as exc_info:
            getattr(world.store, getter)(missing)
        assert exc_info.value.entity_id == missing


class TestCandidacyArena:
    def test_insert_stamps_increasing_sequence(self, world) -> None:
        first = world.store.insert_candidacy(_candidacy(world))
        second = world.store.insert_candidacy(_candidacy(world, proposal=world.proposal_b, preference=2))
        assert 0 < first.sequence < second.sequence

    def test_insert_updates_both_indices(self, world) -> None:
        candidacy = world.store.insert_candidacy(_candidacy(world))
        assert world.store.candidacies_of_student(world.student.id) == [candidacy]
        assert world.store.candidacies_of_proposal(world.proposal_a.id) == [candidacy]
        assert world.store.count_candidacies(world.student.id) == 1

    def test_insert_for_unknown_student_rejected(self, world) -> None:
        candidacy = Candidacy(
            student_id=uuid4(),
            proposal_id=world.proposal_a.id,
            preference_number=1,
            created_at=world.configuration.candidacy_period.start,
        )
        with pytest.raises(NotFoundError):
            world.store.insert_candidacy(candidacy)
        assert world.store.candidacies == {}

    def test_remove_detaches_everywhere(self, world) -> None:
        candidacy = world.store.insert_candidacy(_candidacy(world))
        world.store.remove_candidacy(candidacy.id)
        assert world.store.candidacies_of_student(world.student.id) == []
        assert world.store.candidacies_of_proposal(world.proposal_a.id) == []
        with pytest.raises(NotFoundError):
            world.store.get_candidacy(candidacy.id)


class TestTransaction:
    def test_transaction_is_reentrant(self, world) -> None:
        with world.store.transaction():
            with world.store.transaction() as store:
                assert store is world.store

    def test_transaction_excludes_other_threads(self, world) -> None:
        entered = threading.Event()
        acquired: list[bool] = []

        def other() -> None:
            with world.store.transaction():
                acquired.append(True)

        with world.store.transaction():
            worker = threading.Thread(target=other)
            worker.start()
            entered.wait(0.05)
            assert acquired == []
        worker.join(timeout=2)
        assert acquired == [True]
