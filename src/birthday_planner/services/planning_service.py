"""Caller-level entry point tying generation to the result store."""

from __future__ import annotations

from collections.abc import Sequence

from birthday_planner.core.config import DEFAULT_PROFILES, Settings
from birthday_planner.core.structured_logging import StructuredLogger
from birthday_planner.schemas.user_input import UserInput
from birthday_planner.services.ai.exceptions import AggregateFailure
from birthday_planner.services.ai.generation_client import PlanGenerationClient
from birthday_planner.services.ai.interfaces import (
    PlanGenerationService,
    ResultStoreProtocol,
)
from birthday_planner.services.ai.models import AggregateResult
from birthday_planner.services.ai.orchestrator import PlanOrchestrator, build_branches
from birthday_planner.services.result_store import (
    InMemoryResultStore,
    clear_plans,
    save_plans,
)


logger = StructuredLogger(__name__)


class PlanningService:
    """Generate one plan per profile and hand the result to the store.

    On success the ordered plans and the request are stored; when every
    profile fails, previously stored results are cleared and the
    `AggregateFailure` is re-raised.
    """

    def __init__(
        self,
        orchestrator: PlanGenerationService,
        store: ResultStoreProtocol,
        profiles: Sequence[str] = DEFAULT_PROFILES,
    ) -> None:
        self.orchestrator = orchestrator
        self.store = store
        self.profiles = tuple(profiles)

    @classmethod
    def from_settings(
        cls, settings: Settings, store: ResultStoreProtocol | None = None
    ) -> PlanningService:
        profiles = list(settings.PLAN_PROFILES)
        client = PlanGenerationClient.from_settings(settings)
        return cls(
            PlanOrchestrator(client, profiles),
            store if store is not None else InMemoryResultStore(),
            profiles,
        )

    async def generate_plans(self, user_input: UserInput) -> AggregateResult:
        branches = build_branches(user_input, self.profiles)
        try:
            result = await self.orchestrator.run_all(branches)
        except AggregateFailure:
            clear_plans(self.store)
            raise

        save_plans(self.store, result.plans, user_input)
        logger.info(
            "Stored generated plans",
            plan_count=len(result.plans),
            warning_count=len(result.warnings),
        )
        return result
