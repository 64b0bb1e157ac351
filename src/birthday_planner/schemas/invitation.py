"""Invitation request and result schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from birthday_planner.schemas.plans import BirthdayPlan


InvitationTemplate = Literal["classic", "playful", "themed", "minimalist"]


class InvitationRequest(BaseModel):
    """What an invitation is generated from.

    The plan, template, date and time are all required; a request missing
    any of them is rejected before the provider is called.
    """

    plan: BirthdayPlan
    template: InvitationTemplate
    date: str = Field(..., min_length=1, description="Party date as shown to guests")
    time: str = Field(..., min_length=1, description="Party time as shown to guests")
    birthday_person_name: str | None = Field(default=None, max_length=100)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class Invitation(BaseModel):
    """Generated invitation text plus an optional image URL."""

    text: str
    image_url: str = Field(default="", description="Empty when no image was produced")
    template: InvitationTemplate

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )
