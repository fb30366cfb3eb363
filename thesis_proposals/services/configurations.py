"""Configuration lookup capability.

Resolves the single configuration that governs a proposal's candidacies and
answers the quota/period questions that depend on it. A proposal listed under
several configurations is accepted only when all of them are equivalent.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from thesis_proposals.core.exceptions import ConfigurationMismatchError
from thesis_proposals.db.store import ThesisProposalsStore
from thesis_proposals.models.configuration import CandidacyConfiguration
from thesis_proposals.models.period import utc_now

logger = logging.getLogger(__name__)


class ConfigurationLookup:
    """Maps proposals to their applicable configuration."""

    def __init__(
        self,
        store: ThesisProposalsStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.clock = clock

    def configuration_for(self, proposal_id: UUID) -> CandidacyConfiguration:
        """Return the configuration governing candidacies to ``proposal_id``.

        Raises ``ConfigurationMismatchError`` when the proposal has none, or
        when any of its configurations is not equivalent to the first one.
        """
        proposal = self.store.get_proposal(proposal_id)
        if not proposal.configuration_ids:
            raise ConfigurationMismatchError(proposal_id)

        configurations = [
            self.store.get_configuration(cid) for cid in proposal.configuration_ids
        ]
        base = configurations[0]
        for other in configurations[1:]:
            if not base.is_equivalent(other):
                logger.warning(
                    "configuration_mismatch",
                    extra={
                        "proposal_id": str(proposal_id),
                        "base_id": str(base.id),
                        "other_id": str(other.id),
                    },
                )
                raise ConfigurationMismatchError(proposal_id, base.id, other.id)
        return base

    def current_configurations(self) -> list[CandidacyConfiguration]:
        """Configurations whose proposal period is open, newest first."""
        now = self.clock()
        with self.store.transaction():
            current = [
                c for c in self.store.configurations.values()
                if c.proposal_period is not None and c.proposal_period.contains(now)
            ]
        return sorted(current, key=lambda c: c.proposal_period.start, reverse=True)

    def participant_quota_reached(self, user_id: str, configuration_id: UUID) -> bool:
        """Whether ``user_id`` already takes part in the allowed number of proposals."""
        with self.store.transaction():
            configuration = self.store.get_configuration(configuration_id)
            count = sum(
                1
                for proposal in self.store.proposals_of_configuration(configuration_id)
                if any(p.user_id == user_id for p in proposal.participants)
            )
        return configuration.proposal_quota_reached(count)
