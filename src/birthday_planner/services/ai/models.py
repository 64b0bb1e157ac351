"""Contract objects for plan generation orchestration.

* RequestBranch     - one independent generation request (profile + id)
* GenerationRequest - what the generation client receives for a branch
* BranchSuccess / BranchFailure - the settled outcome of exactly one branch
* AggregateResult   - ordered successes plus failure warnings for one call

Keeping these typed prevents ad hoc dict construction between the
orchestrator, the generation client and callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from birthday_planner.schemas.plans import BirthdayPlan
from birthday_planner.schemas.user_input import BudgetPriorities, UserInput
from birthday_planner.services.ai.normalizer import PlanIdentity


@dataclass(frozen=True, slots=True)
class RequestBranch:
    profile: str
    plan_id: str
    user_input: UserInput

    @property
    def identity(self) -> PlanIdentity:
        return PlanIdentity(profile=self.profile, plan_id=self.plan_id)


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    profile: str
    user_input: UserInput


@dataclass(frozen=True, slots=True)
class OptimizationRequest:
    plan: BirthdayPlan
    priorities: BudgetPriorities
    numeric_budget: float
    currency: str

    def __post_init__(self) -> None:
        if self.numeric_budget < 0:
            raise ValueError("numeric_budget must not be negative")
        if not self.currency.strip():
            raise ValueError("currency is required for budget optimization")


@dataclass(frozen=True, slots=True)
class BranchSuccess:
    branch: RequestBranch
    plan: BirthdayPlan
    success: bool = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class BranchFailure:
    branch: RequestBranch
    reason: str
    error_code: str
    success: bool = field(default=False, init=False)


BranchOutcome = BranchSuccess | BranchFailure


@dataclass(slots=True)
class AggregateResult:
    """Successful plans in profile priority order plus non-fatal failures."""

    plans: list[BirthdayPlan]
    failures: list[BranchFailure] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [failure.reason for failure in self.failures]

    @property
    def partial(self) -> bool:
        return bool(self.failures)
