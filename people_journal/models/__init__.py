"""
Models module - Pydantic schemas shared by routes and services.
"""
from people_journal.models.briefing import (
    BriefingPayload,
    ConfigResponse,
    ErrorResponse,
    ExtractRequest,
    HealthResponse,
    PrepActionItem,
    PrepRequest,
    ScorePoint,
    TagCount,
)
from people_journal.models.journal import ActionItem, Entry, TeamMember
from people_journal.models.tracker import SprintStats, TrackerTicket

__all__ = [
    "BriefingPayload",
    "ConfigResponse",
    "ErrorResponse",
    "ExtractRequest",
    "HealthResponse",
    "PrepActionItem",
    "PrepRequest",
    "ScorePoint",
    "TagCount",
    "ActionItem",
    "Entry",
    "TeamMember",
    "SprintStats",
    "TrackerTicket",
]
