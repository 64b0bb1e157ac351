"""Sample generated payloads used across the AI tests."""

from __future__ import annotations

import json
from copy import deepcopy
from typing import Any


CANONICAL_PLAN: dict[str, Any] = {
    "id": "model-chosen-id",
    "profile": "Model Chosen Profile",
    "name": "Backyard Science Bash",
    "description": "Hands-on experiments in the garden.",
    "venue": {
        "name": "Home backyard",
        "description": "Shaded lawn with a patio",
        "costRange": "$0",
        "amenities": ["Patio", "Power outlets"],
        "suitability": "Plenty of room for experiments",
        "venueSearchSuggestions": ["party tent rental"],
    },
    "schedule": [
        {"time": "2:00 PM", "activity": "Welcome", "description": "Lab coats on"},
        {"time": "2:30 PM", "activity": "Volcano experiment"},
    ],
    "catering": {
        "menu": {
            "appetizers": ["Veggie sticks"],
            "mainCourses": ["Mini pizzas"],
            "desserts": "Galaxy cupcakes",
            "beverages": ["Lemonade"],
        },
        "estimatedCost": "$80",
        "servingStyle": "Buffet",
        "cateringSearchSuggestions": ["bulk cupcakes"],
    },
    "guestEngagement": {
        "icebreakers": ["Element bingo"],
        "interactiveElements": ["Slime station"],
        "photoOpportunities": ["Mad scientist backdrop"],
        "partyFavors": ["Mini magnifying glasses"],
        "techIntegration": ["Shared photo album"],
        "entertainmentSearchSuggestions": ["kids science show"],
    },
}

# Same plan expressed with the alias keys the model sometimes uses
ALIASED_PLAN: dict[str, Any] = {
    "name": "Treetop Adventure",
    "description": "Ropes course followed by a picnic.",
    "venue": {
        "name": "Forest Ropes Park",
        "features": ["Zip lines", "Picnic area"],
        "searchSuggestions": "ropes course near me",
    },
    "timeline": [
        {"time": "10:00 AM", "activity": "Safety briefing"},
        {"time": "10:30 AM", "activity": "Ropes course"},
    ],
    "catering": {
        "menu": {
            "starters": ["Trail mix"],
            "mains": ["Wraps"],
            "desserts": ["Brownies", "Fruit"],
            "drinks": ["Water", "Juice"],
        },
        "searchSuggestions": ["picnic catering"],
    },
    "guestEngagement": {
        "iceBreakers": ["Two truths and a lie"],
        "activities": ["Scavenger hunt"],
        "photoOps": ["Summit selfie"],
        "favors": ["Carabiner keychains"],
        "technology": "GoPro footage",
    },
}


def plans_response(plan: dict[str, Any]) -> str:
    """Model text in the shape the plan prompt asks for."""
    return json.dumps({"plans": [deepcopy(plan)]})


def fenced_response(plan: dict[str, Any]) -> str:
    """Model text wrapped in prose and a Markdown fence."""
    return (
        "Sure! Here is your plan:\n\n```json\n"
        + json.dumps({"plans": [deepcopy(plan)]}, indent=2)
        + "\n```\nLet me know if you want changes."
    )
