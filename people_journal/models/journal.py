"""
Journal models - Team members and 1:1 entries.

These Pydantic models are the read side of the journal store: the
repository converts ORM rows into them inside the session, so services
and routes never touch detached SQLAlchemy instances.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActionItem(BaseModel):
    """A single action item with its completion flag."""
    text: str
    completed: bool = False


class TeamMember(BaseModel):
    """A person the manager holds 1:1s with."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    role: str
    color: str
    jira_account_id: Optional[str] = None
    prep_notes: Optional[str] = None


class Entry(BaseModel):
    """
    A single 1:1 journal entry.

    List fields are never None; rows written before a column existed
    come back as empty lists.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: str
    date: str
    summary: Optional[str] = None
    morale_score: Optional[int] = None
    growth_score: Optional[int] = None
    morale_rationale: Optional[str] = None
    growth_rationale: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    action_items_mine: List[ActionItem] = Field(default_factory=list)
    action_items_theirs: List[ActionItem] = Field(default_factory=list)
    notable_quotes: List[str] = Field(default_factory=list)
    blockers: List[str] = Field(default_factory=list)
    wins: List[str] = Field(default_factory=list)
    private_note: Optional[str] = None
    transcript: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator(
        "tags", "action_items_mine", "action_items_theirs",
        "notable_quotes", "blockers", "wins",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        return value


# ============================================================
# Request models
# ============================================================

class TeamMemberCreate(BaseModel):
    """Request body for POST /api/team."""
    name: str = Field(default="", description="Display name, defaults to 'New Member'")
    role: str = Field(default="", description="Role, defaults to 'Engineer'")
    color: str = Field(default="", description="Avatar color, defaults to #888888")


class TeamMemberUpdate(BaseModel):
    """Request body for PUT /api/team/{id}."""
    name: str
    role: str
    color: str
    jira_account_id: Optional[str] = None


class PrepNotesUpdate(BaseModel):
    """Request body for PUT /api/team/{id}/prep-notes."""
    prep_notes: str = ""


class EntryCreate(BaseModel):
    """Request body for POST /api/entries."""
    id: Optional[str] = None
    member_id: str = Field(..., min_length=1)
    date: Optional[str] = None
    summary: Optional[str] = None
    morale_score: Optional[int] = Field(default=None, ge=1, le=5)
    growth_score: Optional[int] = Field(default=None, ge=1, le=5)
    morale_rationale: Optional[str] = None
    growth_rationale: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    action_items_mine: List[ActionItem] = Field(default_factory=list)
    action_items_theirs: List[ActionItem] = Field(default_factory=list)
    notable_quotes: List[str] = Field(default_factory=list)
    blockers: List[str] = Field(default_factory=list)
    wins: List[str] = Field(default_factory=list)
    private_note: Optional[str] = None
    transcript: Optional[str] = None


class EntryUpdate(BaseModel):
    """
    Request body for PUT /api/entries/{id}.

    Only fields present in the body are written; use
    model_dump(exclude_unset=True) to get the change set.
    """
    summary: Optional[str] = None
    morale_score: Optional[int] = Field(default=None, ge=1, le=5)
    growth_score: Optional[int] = Field(default=None, ge=1, le=5)
    morale_rationale: Optional[str] = None
    growth_rationale: Optional[str] = None
    tags: Optional[List[str]] = None
    action_items_mine: Optional[List[ActionItem]] = None
    action_items_theirs: Optional[List[ActionItem]] = None
    notable_quotes: Optional[List[str]] = None
    blockers: Optional[List[str]] = None
    wins: Optional[List[str]] = None
    private_note: Optional[str] = None
    transcript: Optional[str] = None


class DeleteResponse(BaseModel):
    """Response for delete endpoints."""
    deleted: bool = True


def entry_changes(update: EntryUpdate) -> Dict[str, Any]:
    """Return only the fields the client actually sent, JSON-ready."""
    return update.model_dump(exclude_unset=True, mode="json")
