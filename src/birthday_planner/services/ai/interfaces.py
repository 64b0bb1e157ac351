"""Service interfaces for plan generation.

Protocols for the external collaborators (the generation provider and the
result store) so the orchestrator can be exercised with in-memory fakes and
without environment configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol

from birthday_planner.schemas.invitation import Invitation, InvitationRequest
from birthday_planner.services.ai.models import (
    AggregateResult,
    GenerationRequest,
    OptimizationRequest,
    RequestBranch,
)


class GenerationClientProtocol(Protocol):
    """Protocol for the text generation collaborator.

    Implementations return the raw model text and raise `ProviderFailure`
    (or any other exception) when the provider call fails. Timeouts and
    retries, if any, belong to the implementation.
    """

    async def generate(self, request: GenerationRequest) -> str:
        """Generate raw plan text for one profile."""
        ...

    async def optimize_budget(self, request: OptimizationRequest) -> str:
        """Generate raw text for a budget optimized version of a plan."""
        ...

    async def generate_invitation(self, request: InvitationRequest) -> Invitation:
        """Generate invitation text and image for a plan."""
        ...


class ResultStoreProtocol(Protocol):
    """Protocol for the key/value store plans are handed over through."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class PlanGenerationService(ABC):
    """Abstract base class for plan generation orchestration.

    Coordinates, per branch:
    1. Raw text generation
    2. JSON repair
    3. Schema normalization and shape validation
    and aggregates every branch outcome into one result.
    """

    def __init__(self, generation_client: GenerationClientProtocol) -> None:
        self.generation_client = generation_client

    @abstractmethod
    async def run_all(self, branches: Sequence[RequestBranch]) -> AggregateResult:
        """Run every branch concurrently and aggregate their outcomes."""
        ...
