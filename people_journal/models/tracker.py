"""
Tracker models - Tickets and sprint statistics derived from the issue tracker.

These are read-only projections of tracker issues. They are never stored
on their own, only inside a cached briefing payload.
"""
from typing import Optional

from pydantic import BaseModel, Field


class TrackerTicket(BaseModel):
    """A single issue as shown in a briefing."""
    key: str = Field(default="", examples=["PROJ-123"])
    summary: str = ""
    status: str = ""
    flagged: bool = False
    epic_name: Optional[str] = Field(default=None, description="Omitted when the issue has no epic")


class SprintStats(BaseModel):
    """
    Story point totals for the currently open sprint.

    carryover is committed minus completed, never negative.
    """
    points_committed: int = 0
    points_completed: int = 0
    carryover: int = 0

    @classmethod
    def from_totals(cls, committed: int, completed: int) -> "SprintStats":
        return cls(
            points_committed=committed,
            points_completed=completed,
            carryover=max(committed - completed, 0),
        )
