"""Canonical birthday plan schemas.

These models are the normalized output of the generation pipeline. Python
attributes are snake_case while the wire form is camelCase, which is the key
style the generation service is prompted to emit and the style used when
plans are handed to the result store.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, extra="forbid"
)


class Venue(BaseModel):
    """Recommended venue for a plan."""

    name: str = Field(default="", description="Venue name")
    description: str = Field(default="", description="Short venue description")
    cost_range: str = Field(default="", description="Free-form cost range")
    amenities: list[str] = Field(default_factory=list)
    suitability: str = Field(default="", description="Why the venue fits")
    venue_search_suggestions: list[str] = Field(default_factory=list)

    model_config = _WIRE_CONFIG


class ScheduleItem(BaseModel):
    """One entry of the party timeline; ``activity`` is mandatory."""

    time: str = Field(default="", description="Human readable time slot")
    activity: str = Field(..., min_length=1, description="What happens")
    description: str | None = Field(default=None)

    model_config = _WIRE_CONFIG


class Menu(BaseModel):
    appetizers: list[str] = Field(default_factory=list)
    main_courses: list[str] = Field(default_factory=list)
    desserts: str = Field(default="", description="Dessert line, comma separated")
    beverages: list[str] = Field(default_factory=list)

    model_config = _WIRE_CONFIG


class Catering(BaseModel):
    menu: Menu = Field(default_factory=Menu)
    estimated_cost: str = Field(default="")
    serving_style: str = Field(default="")
    catering_search_suggestions: list[str] = Field(default_factory=list)

    model_config = _WIRE_CONFIG


class GuestEngagement(BaseModel):
    icebreakers: list[str] = Field(default_factory=list)
    interactive_elements: list[str] = Field(default_factory=list)
    photo_opportunities: list[str] = Field(default_factory=list)
    party_favors: list[str] = Field(default_factory=list)
    tech_integration: list[str] = Field(default_factory=list)
    entertainment_search_suggestions: list[str] = Field(default_factory=list)

    model_config = _WIRE_CONFIG


class BirthdayPlan(BaseModel):
    """A fully normalized plan for a single profile.

    ``id`` and ``profile`` are identity fields: the normalizer always takes
    them from the requesting branch, never from generated content.
    ``optimization_summary`` is the only field without a default value; it
    is populated by the budget optimizer.
    """

    id: str = Field(..., description="Branch supplied plan id")
    profile: str = Field(..., description="Plan profile label")
    name: str = Field(..., description="Display name of the plan")
    description: str = Field(default="")
    venue: Venue = Field(default_factory=Venue)
    schedule: list[ScheduleItem] = Field(default_factory=list)
    catering: Catering = Field(default_factory=Catering)
    guest_engagement: GuestEngagement = Field(default_factory=GuestEngagement)
    optimization_summary: str | None = Field(default=None)

    model_config = _WIRE_CONFIG
