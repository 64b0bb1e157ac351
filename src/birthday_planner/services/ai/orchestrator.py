"""Concurrent plan generation orchestrator."""

from __future__ import annotations

import asyncio
import re
from collections.abc import Sequence
from uuid import uuid4

from birthday_planner.core.config import DEFAULT_PROFILES
from birthday_planner.core.structured_logging import (
    StructuredLogger,
    set_correlation_id,
)
from birthday_planner.schemas.plans import BirthdayPlan
from birthday_planner.schemas.user_input import UserInput
from birthday_planner.services.ai.exceptions import (
    AggregateFailure,
    AIExtractionError,
    ParseFailure,
    SchemaShapeFailure,
)
from birthday_planner.services.ai.interfaces import (
    GenerationClientProtocol,
    PlanGenerationService,
)
from birthday_planner.services.ai.json_repair import repair_json_with_diagnostics
from birthday_planner.services.ai.models import (
    AggregateResult,
    BranchFailure,
    BranchOutcome,
    BranchSuccess,
    GenerationRequest,
    RequestBranch,
)
from birthday_planner.services.ai.normalizer import (
    PlanIdentity,
    locate_plan_fragment,
    normalize_plan,
    plan_has_content,
)


logger = StructuredLogger(__name__)

_PARSE_MESSAGES = {
    "empty": "Generation returned no text",
    "no_payload": "No JSON payload found in generated text",
    "invalid_payload": "JSON payload found but could not be parsed",
}


def _slug(profile: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", profile.lower()).strip("-") or "plan"


def build_branches(
    user_input: UserInput, profiles: Sequence[str] = DEFAULT_PROFILES
) -> list[RequestBranch]:
    """Create one branch per profile, each with a fresh plan id."""
    return [
        RequestBranch(
            profile=profile,
            plan_id=f"plan-{_slug(profile)}-{uuid4().hex[:8]}",
            user_input=user_input,
        )
        for profile in profiles
    ]


def build_plan_from_text(raw: str | None, identity: PlanIdentity) -> BirthdayPlan:
    """Run repair, fragment location, normalization and the shape check.

    Raises `ParseFailure` or `SchemaShapeFailure`.
    """
    repaired = repair_json_with_diagnostics(raw)
    if repaired.payload is None:
        raise ParseFailure(_PARSE_MESSAGES[repaired.status])

    fragment = locate_plan_fragment(repaired.payload)
    plan = normalize_plan(fragment, identity)
    if not plan_has_content(plan):
        raise SchemaShapeFailure(
            f"Received invalid plan structure for {identity.profile} profile"
        )
    return plan


class PlanOrchestrator(PlanGenerationService):
    """Issue one generation request per branch and aggregate the outcomes.

    Branches run concurrently and are always allowed to settle: a failing
    branch never cancels or blocks its siblings. No retries or timeouts are
    applied here; that policy belongs to the generation client.
    """

    def __init__(
        self,
        generation_client: GenerationClientProtocol,
        profiles: Sequence[str] = DEFAULT_PROFILES,
    ) -> None:
        super().__init__(generation_client)
        self.profile_priority = {profile: rank for rank, profile in enumerate(profiles)}

    def _priority(self, plan: BirthdayPlan) -> int:
        # Unknown profiles sort after every known one
        return self.profile_priority.get(plan.profile, len(self.profile_priority))

    def _failure(self, branch: RequestBranch, detail: str, error_code: str) -> BranchFailure:
        reason = f"Failed to generate plan for {branch.profile} profile: {detail}"
        logger.warning(
            "Plan branch failed",
            profile=branch.profile,
            plan_id=branch.plan_id,
            error_code=error_code,
            detail=detail,
        )
        return BranchFailure(branch=branch, reason=reason, error_code=error_code)

    async def _run_branch(self, branch: RequestBranch) -> BranchOutcome:
        request = GenerationRequest(profile=branch.profile, user_input=branch.user_input)
        try:
            raw = await self.generation_client.generate(request)
        except AIExtractionError as e:
            return self._failure(branch, e.message, e.error_code)
        except Exception as e:
            return self._failure(branch, str(e) or e.__class__.__name__, "provider_error")

        try:
            plan = build_plan_from_text(raw, branch.identity)
        except AIExtractionError as e:
            return self._failure(branch, e.message, e.error_code)
        except Exception as e:  # noqa: BLE001
            return self._failure(
                branch, f"Unexpected processing error: {e}", "unexpected_error"
            )

        logger.info("Plan branch succeeded", profile=branch.profile, plan_id=branch.plan_id)
        return BranchSuccess(branch=branch, plan=plan)

    async def run_all(self, branches: Sequence[RequestBranch]) -> AggregateResult:
        set_correlation_id(str(uuid4()))
        logger.info("Starting plan generation", branch_count=len(branches))

        settled = await asyncio.gather(
            *(self._run_branch(branch) for branch in branches),
            return_exceptions=True,
        )

        outcomes: list[BranchOutcome] = []
        for branch, result in zip(branches, settled, strict=True):
            if isinstance(result, BaseException):
                outcomes.append(
                    self._failure(branch, str(result) or "Cancelled", "unexpected_error")
                )
            else:
                outcomes.append(result)

        plans = [o.plan for o in outcomes if isinstance(o, BranchSuccess)]
        failures = [o for o in outcomes if isinstance(o, BranchFailure)]

        if not plans:
            logger.error("All plan branches failed", failure_count=len(failures))
            raise AggregateFailure(failures)

        if failures:
            logger.warning(
                "Some plan profiles failed to generate",
                failure_count=len(failures),
                success_count=len(plans),
            )

        plans.sort(key=self._priority)
        logger.info("Plan generation finished", success_count=len(plans))
        return AggregateResult(plans=plans, failures=failures)
