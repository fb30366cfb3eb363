"""Id-based entry point used by the service layer.

Wires the registry, the assignment engine and the preference resolver around
one store and exposes their operations with ids in and ids out.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable
from uuid import UUID

from thesis_proposals.db.store import ThesisProposalsStore
from thesis_proposals.models.events import StolenAssignmentEvent
from thesis_proposals.models.period import utc_now
from thesis_proposals.services.assignment import AssignmentEngine
from thesis_proposals.services.configurations import ConfigurationLookup
from thesis_proposals.services.identity import IdentityResolver
from thesis_proposals.services.notifications import (
    NotificationSink,
    build_notification_sink,
)
from thesis_proposals.services.preferences import PreferenceResolver
from thesis_proposals.services.registry import CandidacyRegistry


class ThesisProposalsService:
    def __init__(
        self,
        store: ThesisProposalsStore,
        identity: IdentityResolver,
        notifier: NotificationSink | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.configurations = ConfigurationLookup(store, clock=clock)
        self.registry = CandidacyRegistry(store, self.configurations, clock=clock)
        self.engine = AssignmentEngine(
            store,
            identity,
            notifier if notifier is not None else build_notification_sink(),
        )
        self.resolver = PreferenceResolver(store, identity)

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------

    def create_candidacy(
        self,
        student_id: UUID,
        preference_number: int,
        proposal_id: UUID,
    ) -> UUID:
        return self.registry.create(student_id, preference_number, proposal_id).id

    def delete_candidacy(self, candidacy_id: UUID) -> None:
        self.registry.delete(candidacy_id)

    def accept(
        self,
        candidacy_id: UUID,
        actor: str | None = None,
    ) -> StolenAssignmentEvent | None:
        return self.engine.accept(candidacy_id, actor=actor)

    def revoke(self, candidacy_id: UUID) -> None:
        self.engine.revoke(candidacy_id)

    def reject(self, candidacy_id: UUID) -> None:
        self.engine.reject(candidacy_id)

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def best_accepted(self, proposal_id: UUID) -> dict[UUID, UUID]:
        return {
            student_id: candidacy.id
            for student_id, candidacy in self.resolver.best_accepted(proposal_id).items()
        }

    def coordinator_view(self, configuration_id: UUID) -> dict[UUID, list[UUID]]:
        return {
            student_id: [c.id for c in candidacies]
            for student_id, candidacies in self.resolver.coordinator_view(configuration_id).items()
        }

    def can_advisor_still_accept_better_candidacy(self, proposal_id: UUID) -> bool:
        return self.resolver.can_advisor_still_accept_better_candidacy(proposal_id)

    def is_accepted(self, proposal_id: UUID) -> bool:
        return self.resolver.is_accepted(proposal_id)

    def candidacies_by_creation(self, proposal_id: UUID) -> list[UUID]:
        return [c.id for c in self.resolver.candidacies_by_creation(proposal_id)]

    def coordinator_proposals(
        self,
        configuration_id: UUID,
        is_visible: bool | None = None,
        is_attributed: bool | None = None,
        has_candidacy: bool | None = None,
    ) -> list[UUID]:
        proposals = self.resolver.coordinator_proposals(
            configuration_id,
            is_visible=is_visible,
            is_attributed=is_attributed,
            has_candidacy=has_candidacy,
        )
        return [p.id for p in proposals]
