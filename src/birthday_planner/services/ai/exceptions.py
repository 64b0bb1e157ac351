"""Domain exceptions for the plan generation pipeline.

Every branch failure is expressed with one of these types so the orchestrator
can classify it without inspecting messages. Each exception carries a stable
`error_code` property for log tagging. Only `AggregateFailure` is allowed to
escape an orchestration call; the others are converted into per-branch
failure outcomes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class AIExtractionError(Exception):
    """Base class for plan generation domain errors."""

    message: str
    error_code: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.error_code}: {self.message}"


class ParseFailure(AIExtractionError):
    def __init__(
        self, message: str = "Generated text did not contain a JSON payload"
    ) -> None:
        super().__init__(message=message, error_code="parse_failed")


class SchemaShapeFailure(AIExtractionError):
    def __init__(
        self, message: str = "Generated payload does not look like a plan"
    ) -> None:
        super().__init__(message=message, error_code="invalid_shape")


class ProviderFailure(AIExtractionError):
    def __init__(self, message: str = "Generation provider call failed") -> None:
        super().__init__(message=message, error_code="provider_error")


class AggregateFailure(AIExtractionError):
    """Raised when every branch of an orchestration call failed.

    `failures` holds the individual branch failure outcomes so callers can
    inspect them beyond the concatenated message.
    """

    def __init__(self, failures: Sequence[Any]) -> None:
        reasons = "; ".join(getattr(f, "reason", str(f)) for f in failures)
        super().__init__(
            message=f"Failed to generate any plans. Errors: {reasons}",
            error_code="all_failed",
        )
        self.failures = list(failures)
