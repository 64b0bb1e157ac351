"""Tests for budget optimization of an existing plan."""

import json

import pytest

from birthday_planner.schemas.plans import BirthdayPlan
from birthday_planner.schemas.user_input import BudgetPriorities
from birthday_planner.services.ai.budget_optimizer import BudgetOptimizer
from birthday_planner.services.ai.exceptions import (
    ParseFailure,
    ProviderFailure,
    SchemaShapeFailure,
)
from birthday_planner.services.ai.normalizer import (
    DEFAULT_OPTIMIZATION_SUMMARY,
    PlanIdentity,
    normalize_plan,
)
from tests.fixtures.plans import CANONICAL_PLAN


@pytest.fixture
def plan() -> BirthdayPlan:
    return normalize_plan(
        CANONICAL_PLAN, PlanIdentity(profile="DIY/Budget", plan_id="plan-diy-budget-1")
    )


@pytest.mark.asyncio
async def test_fenced_optimized_plan_keeps_identity(plan, make_client):
    optimized = {**CANONICAL_PLAN, "name": "Leaner Science Bash"}
    optimized["optimizationSummary"] = "Cut venue spend, doubled snacks."
    raw = "```json\n" + json.dumps({"optimizedPlan": optimized}) + "\n```"
    client = make_client({}, optimization=raw)

    result = await BudgetOptimizer(client).optimize(
        plan, BudgetPriorities(food=5, venue=1), numeric_budget=300, currency="EUR"
    )

    assert result.id == "plan-diy-budget-1"
    assert result.profile == "DIY/Budget"
    assert result.name == "Leaner Science Bash"
    assert result.optimization_summary == "Cut venue spend, doubled snacks."

    request = client.optimization_requests[0]
    assert request.plan is plan
    assert request.priorities.food == 5
    assert request.numeric_budget == 300
    assert request.currency == "EUR"


@pytest.mark.asyncio
async def test_missing_summary_gets_default(plan, make_client):
    raw = json.dumps({"optimizedPlan": {"name": "Same plan"}})
    result = await BudgetOptimizer(make_client({}, optimization=raw)).optimize(
        plan, BudgetPriorities(), 200, "USD"
    )

    assert result.optimization_summary == DEFAULT_OPTIMIZATION_SUMMARY


@pytest.mark.asyncio
async def test_unparseable_response_raises_parse_failure(plan, make_client):
    client = make_client({}, optimization="I could not optimize this plan.")

    with pytest.raises(ParseFailure) as exc_info:
        await BudgetOptimizer(client).optimize(plan, BudgetPriorities(), 200, "USD")

    assert "no_payload" in exc_info.value.message


@pytest.mark.asyncio
async def test_wrong_shape_raises_schema_shape_failure(plan, make_client):
    client = make_client({}, optimization='{"result": "ok"}')

    with pytest.raises(SchemaShapeFailure):
        await BudgetOptimizer(client).optimize(plan, BudgetPriorities(), 200, "USD")


@pytest.mark.asyncio
async def test_provider_failure_propagates(plan, make_client):
    client = make_client({}, optimization=ProviderFailure("quota exceeded"))

    with pytest.raises(ProviderFailure) as exc_info:
        await BudgetOptimizer(client).optimize(plan, BudgetPriorities(), 200, "USD")

    assert exc_info.value.message == "quota exceeded"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("numeric_budget", "currency"), [(300, ""), (300, "   "), (-1, "USD")]
)
async def test_budget_and_currency_are_required(plan, make_client, numeric_budget, currency):
    client = make_client({}, optimization="{}")

    with pytest.raises(ValueError):
        await BudgetOptimizer(client).optimize(
            plan, BudgetPriorities(), numeric_budget, currency
        )

    assert client.optimization_requests == []
