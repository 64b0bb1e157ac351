"""Init file for AI services."""

from .json_repair import repair_json, repair_json_with_diagnostics
from .normalizer import PlanIdentity, normalize_plan
from .orchestrator import PlanOrchestrator, build_branches


__all__ = [
    "PlanIdentity",
    "PlanOrchestrator",
    "build_branches",
    "normalize_plan",
    "repair_json",
    "repair_json_with_diagnostics",
]
