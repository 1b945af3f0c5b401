"""
Request and Response models for the prep and extract endpoints.

BriefingPayload is also the unit stored in the result cache, serialized
with model_dump_json() and restored with model_validate_json().
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from people_journal.models.tracker import SprintStats, TrackerTicket


class PrepRequest(BaseModel):
    """Request model for POST /api/prep."""
    member_id: str = Field(..., min_length=1, description="Team member to brief on")
    force: bool = Field(default=False, description="Skip the cache and rebuild")


class PrepActionItem(BaseModel):
    """An open action item and the date of the entry it came from."""
    text: str
    date: str


class TagCount(BaseModel):
    tag: str
    count: int


class ScorePoint(BaseModel):
    date: str
    score: int


class BriefingPayload(BaseModel):
    """
    Everything the prep view shows before a 1:1.

    Journal sections are always present (possibly empty). Tracker sections
    are None unless the tracker is configured and returned data; the API
    omits None fields from the response.
    """
    briefing: str = Field(..., description="Narrative briefing or a fixed fallback message")
    open_items_mine: List[PrepActionItem] = Field(default_factory=list)
    open_items_theirs: List[PrepActionItem] = Field(default_factory=list)
    recent_tags: List[TagCount] = Field(default_factory=list)
    unresolved_blockers: List[str] = Field(default_factory=list)
    morale_scores: List[ScorePoint] = Field(default_factory=list)
    growth_scores: List[ScorePoint] = Field(default_factory=list)

    jira_assigned: Optional[List[TrackerTicket]] = None
    jira_completed: Optional[List[TrackerTicket]] = None
    jira_blocked: Optional[List[TrackerTicket]] = None
    jira_sprint_stats: Optional[SprintStats] = None
    jira_board_url: Optional[str] = None


class ExtractRequest(BaseModel):
    """Request model for POST /api/extract."""
    transcript: str = Field(..., min_length=1)
    member_name: str = Field(..., min_length=1)


class ConfigResponse(BaseModel):
    """Response model for GET /api/config."""
    jira_configured: bool
    jira_base_url: Optional[str] = None


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="healthy")
    version: str
    database: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
