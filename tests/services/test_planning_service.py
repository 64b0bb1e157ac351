"""Tests for the planning service and its result store hand-off."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import patch

import pytest

from birthday_planner.core.config import Settings
from birthday_planner.schemas.user_input import UserInput
from birthday_planner.services.ai.exceptions import AggregateFailure, ProviderFailure
from birthday_planner.services.ai.orchestrator import PlanOrchestrator
from birthday_planner.services.planning_service import PlanningService
from birthday_planner.services.result_store import (
    PLANS_KEY,
    USER_INPUT_KEY,
    InMemoryResultStore,
    load_plans,
    load_user_input,
)
from tests.fixtures.plans import ALIASED_PLAN, CANONICAL_PLAN, plans_response


PROFILES = ("DIY/Budget", "Premium/Convenience", "Unique/Adventure")


def _service(client: Any, store: InMemoryResultStore) -> PlanningService:
    return PlanningService(PlanOrchestrator(client, PROFILES), store, PROFILES)


@pytest.mark.asyncio
async def test_successful_run_stores_plans_and_request(
    user_input: UserInput, make_client: Any
) -> None:
    client = make_client(
        {
            "DIY/Budget": (0.02, plans_response(CANONICAL_PLAN)),
            "Premium/Convenience": (0.01, plans_response(CANONICAL_PLAN)),
            "Unique/Adventure": (0.0, plans_response(ALIASED_PLAN)),
        }
    )
    store = InMemoryResultStore()

    result = await _service(client, store).generate_plans(user_input)

    assert sorted(r.profile for r in client.requests) == sorted(PROFILES)
    assert [p.profile for p in load_plans(store)] == list(PROFILES)
    assert load_plans(store) == result.plans
    assert load_user_input(store) == user_input

    # stored in the camelCase wire form
    stored = json.loads(store.get(PLANS_KEY) or "[]")
    assert "guestEngagement" in stored[0]
    assert json.loads(store.get(USER_INPUT_KEY) or "{}")["guestCount"] == 12


@pytest.mark.asyncio
async def test_partial_run_stores_successes_and_returns_warnings(
    user_input: UserInput, make_client: Any
) -> None:
    client = make_client(
        {
            "DIY/Budget": (0.0, plans_response(CANONICAL_PLAN)),
            "Premium/Convenience": (0.0, ProviderFailure("rate limited")),
            "Unique/Adventure": (0.0, plans_response(ALIASED_PLAN)),
        }
    )
    store = InMemoryResultStore()

    result = await _service(client, store).generate_plans(user_input)

    assert result.warnings == [
        "Failed to generate plan for Premium/Convenience profile: rate limited"
    ]
    assert [p.profile for p in load_plans(store)] == ["DIY/Budget", "Unique/Adventure"]


@pytest.mark.asyncio
async def test_total_failure_clears_previous_results(
    user_input: UserInput, make_client: Any
) -> None:
    store = InMemoryResultStore()
    store.set(PLANS_KEY, "[]")
    store.set(USER_INPUT_KEY, "{}")
    client = make_client({p: (0.0, ProviderFailure("down")) for p in PROFILES})

    with pytest.raises(AggregateFailure):
        await _service(client, store).generate_plans(user_input)

    assert PLANS_KEY not in store
    assert USER_INPUT_KEY not in store
    assert load_plans(store) == []
    assert load_user_input(store) is None


@pytest.mark.asyncio
async def test_from_settings_uses_configured_profiles(
    user_input: UserInput, make_client: Any
) -> None:
    settings = Settings(
        OPENAI_API_KEY="test-key",  # pragma: allowlist secret
        PLAN_PROFILES="Unique/Adventure,DIY/Budget",
    )
    client = make_client(
        {
            "Unique/Adventure": (0.0, plans_response(ALIASED_PLAN)),
            "DIY/Budget": (0.01, plans_response(CANONICAL_PLAN)),
        }
    )
    store = InMemoryResultStore()

    with patch(
        "birthday_planner.services.planning_service.PlanGenerationClient.from_settings",
        return_value=client,
    ):
        service = PlanningService.from_settings(settings, store)

    result = await service.generate_plans(user_input)

    assert service.store is store
    assert service.profiles == ("Unique/Adventure", "DIY/Budget")
    # priority follows the configured order
    assert [p.profile for p in result.plans] == ["Unique/Adventure", "DIY/Budget"]
