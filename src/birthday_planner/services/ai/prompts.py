"""Prompt text used by the generation client."""

from __future__ import annotations

from birthday_planner.schemas.invitation import InvitationRequest
from birthday_planner.services.ai.models import GenerationRequest, OptimizationRequest


PLAN_SYSTEM_PROMPT = """
You are BirthdayPlannerAI, an expert party planner. You design one complete
birthday plan for the requested plan profile using the preferences provided.

Respond with ONLY a valid JSON object of the form { "plans": [ plan ] } where
plan has these camelCase keys:
- name (string), description (string)
- venue: { name, description, costRange, amenities[], suitability,
  venueSearchSuggestions[] }
- schedule: [ { time, activity, description } ]
- catering: { menu: { appetizers[], mainCourses[], desserts (string),
  beverages[] }, estimatedCost, servingStyle, cateringSearchSuggestions[] }
- guestEngagement: { icebreakers[], interactiveElements[],
  photoOpportunities[], partyFavors[], techIntegration[],
  entertainmentSearchSuggestions[] }

All list entries are plain strings. Do not add commentary outside the JSON.
"""

OPTIMIZER_SYSTEM_PROMPT = """
You are a budget optimization expert for birthday parties. Rebalance the plan
you are given so spending follows the priorities (1 = least important,
5 = most important) while keeping the plan coherent.

Keep every key of the input plan. Add an "optimizationSummary" string that
explains the changes. Return ONLY the valid JSON object
{ "optimizedPlan": { ... } }.
"""

INVITATION_SYSTEM_PROMPT = """
You write short, warm birthday party invitations. Match the requested style
and mention the date, time and venue. Reply with the invitation text only.
"""


def build_plan_prompt(request: GenerationRequest) -> str:
    user_input = request.user_input
    who = user_input.birthday_person_name or "the birthday person"
    location = user_input.location
    preferences = user_input.model_dump_json(by_alias=True, exclude_none=True)
    return (
        f"Generate 1 distinct birthday plan with the '{request.profile}' profile "
        f"for {who}, turning {user_input.age}, in {location.city}, "
        f"{location.country}.\n\n"
        f"Preferences (JSON):\n{preferences}\n\n"
        "Output ONLY the valid JSON object."
    )


def build_optimization_prompt(request: OptimizationRequest) -> str:
    plan_json = request.plan.model_dump_json(by_alias=True, exclude_none=True)
    priorities = request.priorities.model_dump_json(by_alias=True)
    return (
        "Optimize the following birthday plan JSON.\n\n"
        f"Total budget: {request.numeric_budget:g} {request.currency}\n\n"
        f"Priorities (JSON):\n{priorities}\n\n"
        f"Plan (JSON):\n{plan_json}\n\n"
        'Return ONLY the valid JSON object containing the "optimizedPlan", '
        'including an "optimizationSummary" field within it.'
    )


def invitation_guest_of_honor(request: InvitationRequest) -> str:
    return request.birthday_person_name or request.plan.name or "the birthday person"


def build_invitation_prompt(request: InvitationRequest) -> str:
    plan = request.plan
    venue = plan.venue.name or "a venue to be announced"
    return (
        f"Write a {request.template} style invitation for "
        f"{invitation_guest_of_honor(request)}'s birthday party.\n"
        f"Party: {plan.name}. {plan.description}\n"
        f"Venue: {venue}\n"
        f"Date: {request.date}\nTime: {request.time}"
    )


def build_invitation_image_prompt(request: InvitationRequest) -> str:
    return (
        f"A {request.template} style birthday invitation illustration for "
        f"'{request.plan.name}'. {request.plan.description} No text in the image."
    )


def default_invitation_text(request: InvitationRequest) -> str:
    """Used when the provider returns no invitation text."""
    return (
        f"You're invited to celebrate {invitation_guest_of_honor(request)}'s "
        f"birthday on {request.date} at {request.time}!"
    )
