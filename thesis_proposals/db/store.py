"""In-memory candidacy/proposal graph.

Entities live in per-kind arenas keyed by UUID. Cross references are kept in
index maps (proposal -> candidacies, student -> candidacies, configuration ->
proposals) so no entity points at another object.

Writers and readers take ``transaction()``, a single re-entrant lock over the
whole graph: one logical transaction at a time.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from thesis_proposals.core.exceptions import NotFoundError
from thesis_proposals.models.candidacy import Candidacy
from thesis_proposals.models.configuration import CandidacyConfiguration
from thesis_proposals.models.people import Student
from thesis_proposals.models.proposal import Proposal

logger = logging.getLogger(__name__)


class ThesisProposalsStore:
    """Owns every entity of the graph and the indices between them."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sequence = itertools.count(1)

        self.students: dict[UUID, Student] = {}
        self.proposals: dict[UUID, Proposal] = {}
        self.configurations: dict[UUID, CandidacyConfiguration] = {}
        self.candidacies: dict[UUID, Candidacy] = {}

        self._by_proposal: dict[UUID, list[UUID]] = {}
        self._by_student: dict[UUID, list[UUID]] = {}
        self._by_configuration: dict[UUID, list[UUID]] = {}

    @contextmanager
    def transaction(self) -> Iterator[ThesisProposalsStore]:
        """Hold the graph lock for the duration of one operation."""
        with self._lock:
            yield self

    # -----------------------------------------------------------------------
    # Loading (collaborator-owned entities)
    # -----------------------------------------------------------------------

    def add_configuration(self, configuration: CandidacyConfiguration) -> None:
        with self._lock:
            self.configurations[configuration.id] = configuration
            self._by_configuration.setdefault(configuration.id, [])

    def add_student(self, student: Student) -> None:
        with self._lock:
            self.students[student.id] = student
            self._by_student.setdefault(student.id, [])

    def add_proposal(self, proposal: Proposal) -> None:
        """Register a proposal under every configuration it lists.

        Re-adding a known proposal replaces it; configurations it no longer
        lists stop indexing it.
        """
        with self._lock:
            for configuration_id in proposal.configuration_ids:
                self.get_configuration(configuration_id)
            self.proposals[proposal.id] = proposal
            self._by_proposal.setdefault(proposal.id, [])
            for configuration_id, proposal_ids in self._by_configuration.items():
                if configuration_id in proposal.configuration_ids:
                    continue
                if proposal.id in proposal_ids:
                    proposal_ids.remove(proposal.id)
            for configuration_id in proposal.configuration_ids:
                proposal_ids = self._by_configuration[configuration_id]
                if proposal.id not in proposal_ids:
                    proposal_ids.append(proposal.id)

    # -----------------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------------

    def get_student(self, student_id: UUID) -> Student:
        try:
            return self.students[student_id]
        except KeyError:
            raise NotFoundError("Student", student_id) from None

    def get_proposal(self, proposal_id: UUID) -> Proposal:
        try:
            return self.proposals[proposal_id]
        except KeyError:
            raise NotFoundError("Proposal", proposal_id) from None

    def get_configuration(self, configuration_id: UUID) -> CandidacyConfiguration:
        try:
            return self.configurations[configuration_id]
        except KeyError:
            raise NotFoundError("Configuration", configuration_id) from None

    def get_candidacy(self, candidacy_id: UUID) -> Candidacy:
        try:
            return self.candidacies[candidacy_id]
        except KeyError:
            raise NotFoundError("Candidacy", candidacy_id) from None

    def candidacies_of_student(self, student_id: UUID) -> list[Candidacy]:
        """Student's candidacies in insertion order."""
        self.get_student(student_id)
        return [self.candidacies[cid] for cid in self._by_student[student_id]]

    def candidacies_of_proposal(self, proposal_id: UUID) -> list[Candidacy]:
        """Proposal's candidacies in insertion order."""
        self.get_proposal(proposal_id)
        return [self.candidacies[cid] for cid in self._by_proposal[proposal_id]]

    def proposals_of_configuration(self, configuration_id: UUID) -> list[Proposal]:
        self.get_configuration(configuration_id)
        return [self.proposals[pid] for pid in self._by_configuration[configuration_id]]

    def count_candidacies(self, student_id: UUID) -> int:
        self.get_student(student_id)
        return len(self._by_student[student_id])

    # -----------------------------------------------------------------------
    # Candidacy arena
    # -----------------------------------------------------------------------

    def insert_candidacy(self, candidacy: Candidacy) -> Candidacy:
        """Store a new candidacy and stamp its arrival order."""
        with self._lock:
            self.get_student(candidacy.student_id)
            self.get_proposal(candidacy.proposal_id)
            candidacy.sequence = next(self._sequence)
            self.candidacies[candidacy.id] = candidacy
            self._by_student[candidacy.student_id].append(candidacy.id)
            self._by_proposal[candidacy.proposal_id].append(candidacy.id)
            return candidacy

    def remove_candidacy(self, candidacy_id: UUID) -> Candidacy:
        """Detach a candidacy from both indices and drop it from the arena."""
        with self._lock:
            candidacy = self.get_candidacy(candidacy_id)
            self._by_student[candidacy.student_id].remove(candidacy_id)
            self._by_proposal[candidacy.proposal_id].remove(candidacy_id)
            del self.candidacies[candidacy_id]
            logger.debug(
                "candidacy_detached",
                extra={"candidacy_id": str(candidacy_id)},
            )
            return candidacy
