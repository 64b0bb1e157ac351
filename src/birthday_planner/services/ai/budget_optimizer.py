"""Budget optimization of an already generated plan."""

from __future__ import annotations

import logging

from birthday_planner.schemas.plans import BirthdayPlan
from birthday_planner.schemas.user_input import BudgetPriorities
from birthday_planner.services.ai.exceptions import ParseFailure
from birthday_planner.services.ai.interfaces import GenerationClientProtocol
from birthday_planner.services.ai.json_repair import repair_json_with_diagnostics
from birthday_planner.services.ai.models import OptimizationRequest
from birthday_planner.services.ai.normalizer import normalize_optimized_plan


logger = logging.getLogger(__name__)


class BudgetOptimizer:
    """Single-request counterpart of the orchestrator.

    Failures are raised to the caller (`ProviderFailure`, `ParseFailure`,
    `SchemaShapeFailure`); there are no sibling branches to protect.
    """

    def __init__(self, generation_client: GenerationClientProtocol) -> None:
        self.generation_client = generation_client

    async def optimize(
        self,
        plan: BirthdayPlan,
        priorities: BudgetPriorities,
        numeric_budget: float,
        currency: str,
    ) -> BirthdayPlan:
        request = OptimizationRequest(
            plan=plan,
            priorities=priorities,
            numeric_budget=numeric_budget,
            currency=currency,
        )
        raw = await self.generation_client.optimize_budget(request)

        repaired = repair_json_with_diagnostics(raw)
        if repaired.payload is None:
            raise ParseFailure(f"Budget optimization response unusable ({repaired.status})")

        optimized = normalize_optimized_plan(repaired.payload, plan)
        logger.info("Optimized budget for plan %s", plan.id)
        return optimized
