from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


BudgetLevel = Literal["budget-friendly", "moderate", "premium", "luxury"]
VenueSetting = Literal["indoor", "outdoor", "both"]


class PartyLocation(BaseModel):
    """Where the party takes place."""

    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    setting: VenueSetting = Field(default="both")

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class UserInput(BaseModel):
    """Preferences collected from the planning form."""

    birthday_person_name: str | None = Field(default=None, max_length=100)
    age: int = Field(..., ge=0, le=150)
    theme: str = Field(..., min_length=1, max_length=200)
    guest_count: int = Field(..., ge=1, le=1000)
    budget: BudgetLevel = Field(default="moderate")
    location: PartyLocation
    activities: list[str] = Field(default_factory=list)
    additional_preferences: str | None = Field(default=None, max_length=2000)

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class BudgetPriorities(BaseModel):
    """Relative importance (1-5) of each spending area."""

    venue: int = Field(default=3, ge=1, le=5)
    food: int = Field(default=3, ge=1, le=5)
    activities: int = Field(default=3, ge=1, le=5)
    decorations: int = Field(default=3, ge=1, le=5)
    party_favors: int = Field(default=3, ge=1, le=5)

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )
