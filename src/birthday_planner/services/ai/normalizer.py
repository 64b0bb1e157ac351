"""Normalize untyped plan payloads into `BirthdayPlan` records.

Generated payloads are duck-typed trees: fields go missing, change type, or
appear under near-synonym keys. The functions here are total. They never
raise on content, and every narrowing step is an explicit ``isinstance``
check. Rules:

* scalar string fields fall back to a documented default
* string collections accept a list of strings, wrap a lone string, and
  otherwise fall back to ``[]``; each has one alias key that is consulted
  only when the canonical key is absent
* nested objects recurse with an empty mapping when absent or mistyped
* schedule entries without an activity are dropped
* ``id`` and ``profile`` always come from the requesting branch
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from birthday_planner.schemas.plans import (
    BirthdayPlan,
    Catering,
    GuestEngagement,
    Menu,
    ScheduleItem,
    Venue,
)
from birthday_planner.services.ai.exceptions import SchemaShapeFailure


DEFAULT_PLAN_NAME = "Unnamed Plan"
DEFAULT_OPTIMIZATION_SUMMARY = (
    "Budget optimization applied (summary not provided by AI)."
)

# canonical key -> alias used by the model when the canonical key is absent
VENUE_ALIASES = {"amenities": "features", "venueSearchSuggestions": "searchSuggestions"}
MENU_ALIASES = {
    "appetizers": "starters",
    "mainCourses": "mains",
    "beverages": "drinks",
}
CATERING_ALIASES = {"cateringSearchSuggestions": "searchSuggestions"}
ENGAGEMENT_ALIASES = {
    "icebreakers": "iceBreakers",
    "interactiveElements": "activities",
    "photoOpportunities": "photoOps",
    "partyFavors": "favors",
    "techIntegration": "technology",
    "entertainmentSearchSuggestions": "searchSuggestions",
}
SCHEDULE_ALIAS = "timeline"

# Keys whose presence marks a mapping as a plan object
PLAN_KEYS = frozenset(
    {
        "name",
        "description",
        "venue",
        "schedule",
        SCHEDULE_ALIAS,
        "catering",
        "guestEngagement",
    }
)


@dataclass(frozen=True, slots=True)
class PlanIdentity:
    """Identity a branch requested; authoritative over generated content."""

    profile: str
    plan_id: str


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}


def _string(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    return default


def _optional_string(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    return []


def _pick(data: Mapping[str, Any], key: str, alias: str | None = None) -> Any:
    if key in data:
        return data[key]
    if alias is not None:
        return data.get(alias)
    return None


def _collections(
    data: Mapping[str, Any], aliases: Mapping[str, str]
) -> dict[str, list[str]]:
    return {key: _string_list(_pick(data, key, alias)) for key, alias in aliases.items()}


def normalize_venue(payload: Any) -> Venue:
    data = _as_mapping(payload)
    return Venue.model_validate(
        {
            "name": _string(data.get("name")),
            "description": _string(data.get("description")),
            "costRange": _string(data.get("costRange")),
            "suitability": _string(data.get("suitability")),
            **_collections(data, VENUE_ALIASES),
        }
    )


def normalize_schedule_item(payload: Any) -> ScheduleItem | None:
    """Return a schedule entry, or None when it has no activity text."""
    if not isinstance(payload, Mapping):
        return None
    activity = payload.get("activity")
    if not isinstance(activity, str) or not activity.strip():
        return None
    return ScheduleItem(
        time=_string(payload.get("time")),
        activity=activity,
        description=_optional_string(payload.get("description")),
    )


def normalize_schedule(payload: Any) -> list[ScheduleItem]:
    if not isinstance(payload, list):
        return []
    items = (normalize_schedule_item(entry) for entry in payload)
    return [item for item in items if item is not None]


def _desserts(value: Any) -> str:
    # Older prompts asked for a list of desserts
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ", ".join(value)
    return _string(value)


def normalize_menu(payload: Any) -> Menu:
    data = _as_mapping(payload)
    return Menu.model_validate(
        {"desserts": _desserts(data.get("desserts")), **_collections(data, MENU_ALIASES)}
    )


def normalize_catering(payload: Any) -> Catering:
    data = _as_mapping(payload)
    return Catering.model_validate(
        {
            "menu": normalize_menu(data.get("menu")),
            "estimatedCost": _string(data.get("estimatedCost")),
            "servingStyle": _string(data.get("servingStyle")),
            **_collections(data, CATERING_ALIASES),
        }
    )


def normalize_guest_engagement(payload: Any) -> GuestEngagement:
    data = _as_mapping(payload)
    return GuestEngagement.model_validate(_collections(data, ENGAGEMENT_ALIASES))


def normalize_plan(payload: Any, expected: PlanIdentity) -> BirthdayPlan:
    """Build a complete plan from an arbitrary payload.

    Never raises for content problems: ``None``, lists and scalars are
    treated as an empty object. Identity fields are taken from `expected`.
    """
    data = _as_mapping(payload)
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        name = DEFAULT_PLAN_NAME
    return BirthdayPlan(
        id=expected.plan_id,
        profile=expected.profile,
        name=name,
        description=_string(data.get("description")),
        venue=normalize_venue(data.get("venue")),
        schedule=normalize_schedule(_pick(data, "schedule", SCHEDULE_ALIAS)),
        catering=normalize_catering(data.get("catering")),
        guest_engagement=normalize_guest_engagement(data.get("guestEngagement")),
        optimization_summary=_optional_string(data.get("optimizationSummary")),
    )


def _looks_like_plan(value: Any) -> bool:
    return isinstance(value, Mapping) and any(key in value for key in PLAN_KEYS)


def locate_plan_fragment(payload: Any) -> Mapping[str, Any]:
    """Find the plan object inside a repaired payload.

    Accepts ``{"plans": [plan, ...]}``, a bare plan object, or a list whose
    first element is a plan object.
    """
    if isinstance(payload, Mapping) and "plans" in payload:
        plans = payload["plans"]
        if not isinstance(plans, list) or not plans:
            raise SchemaShapeFailure("Expected a non-empty 'plans' array")
        candidate: Any = plans[0]
    elif isinstance(payload, list):
        if not payload:
            raise SchemaShapeFailure("Generated payload is an empty array")
        candidate = payload[0]
    else:
        candidate = payload

    if not _looks_like_plan(candidate):
        raise SchemaShapeFailure("Generated payload does not contain a plan object")
    return candidate


def plan_has_content(plan: BirthdayPlan) -> bool:
    """Minimal validity check applied after normalization."""
    menu = plan.catering.menu
    return bool(
        plan.schedule
        or plan.venue.name.strip()
        or menu.appetizers
        or menu.main_courses
        or menu.beverages
        or menu.desserts.strip()
    )


def normalize_optimized_plan(payload: Any, original: BirthdayPlan) -> BirthdayPlan:
    """Normalize a budget optimization response against the plan it optimized.

    Accepts ``{"optimizedPlan": {...}}`` or a bare plan object carrying string
    ``id`` and ``name`` values. The original plan's identity is kept.
    """
    if isinstance(payload, Mapping) and isinstance(payload.get("optimizedPlan"), Mapping):
        fragment: Mapping[str, Any] = payload["optimizedPlan"]
    elif (
        isinstance(payload, Mapping)
        and isinstance(payload.get("id"), str)
        and isinstance(payload.get("name"), str)
    ):
        fragment = payload
    else:
        raise SchemaShapeFailure(
            "Expected { optimizedPlan: { ... } } or a plan object"
        )

    plan = normalize_plan(
        fragment, PlanIdentity(profile=original.profile, plan_id=original.id)
    )
    if plan.optimization_summary is None:
        plan = plan.model_copy(
            update={"optimization_summary": DEFAULT_OPTIMIZATION_SUMMARY}
        )
    return plan
