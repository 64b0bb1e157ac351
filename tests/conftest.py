"""Shared test fixtures for pytest.

ENVIRONMENT is forced to ``test`` before anything imports the settings so no
``.env`` file is read and the structured logger uses the plain text path.
"""

import asyncio
import os
from collections.abc import Generator, Mapping
from typing import Any

import pytest
from pydantic_ai import models


os.environ["ENVIRONMENT"] = "test"

from birthday_planner.core.config import get_settings
from birthday_planner.schemas.user_input import PartyLocation, UserInput
from birthday_planner.services.ai.models import GenerationRequest, OptimizationRequest


# Block any real model requests in tests
models.ALLOW_MODEL_REQUESTS = False


class FakeGenerationClient:
    """Scripted generation client keyed by profile.

    Each profile maps to ``(delay_seconds, text_or_exception)``. Delays let
    tests control completion order; exceptions are raised after the delay.
    """

    def __init__(
        self,
        script: Mapping[str, tuple[float, str | BaseException]],
        optimization: str | BaseException | None = None,
    ) -> None:
        self.script = dict(script)
        self.optimization = optimization
        self.requests: list[GenerationRequest] = []
        self.optimization_requests: list[OptimizationRequest] = []
        self.completed: list[str] = []

    async def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        delay, outcome = self.script[request.profile]
        await asyncio.sleep(delay)
        self.completed.append(request.profile)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def optimize_budget(self, request: OptimizationRequest) -> str:
        self.optimization_requests.append(request)
        if isinstance(self.optimization, BaseException):
            raise self.optimization
        if self.optimization is None:
            raise AssertionError("No optimization response scripted")
        return self.optimization


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def user_input() -> UserInput:
    return UserInput(
        birthday_person_name="Sam",
        age=8,
        theme="Science",
        guest_count=12,
        budget="moderate",
        location=PartyLocation(city="Portland", country="USA", setting="outdoor"),
        activities=["experiments", "games"],
    )


@pytest.fixture
def make_client() -> Any:
    return FakeGenerationClient
