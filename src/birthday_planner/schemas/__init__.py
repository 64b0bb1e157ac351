"""Pydantic schemas for birthday planning."""

from .invitation import Invitation, InvitationRequest, InvitationTemplate
from .plans import BirthdayPlan, Catering, GuestEngagement, Menu, ScheduleItem, Venue
from .user_input import BudgetPriorities, PartyLocation, UserInput


__all__ = [
    "BirthdayPlan",
    "BudgetPriorities",
    "Catering",
    "GuestEngagement",
    "Invitation",
    "InvitationRequest",
    "InvitationTemplate",
    "Menu",
    "PartyLocation",
    "ScheduleItem",
    "UserInput",
    "Venue",
]
