"""
Team Routes - Team member management.

Endpoints:
- GET    /api/team                  : List members
- POST   /api/team                  : Create a member
- PUT    /api/team/{id}             : Update a member
- PUT    /api/team/{id}/prep-notes  : Update free-form prep notes
- DELETE /api/team/{id}             : Delete a member and their entries
"""
from typing import List

from fastapi import APIRouter, Depends

from people_journal.api.deps import get_repository
from people_journal.core.logging_config import get_logger
from people_journal.database.repository import JournalRepository
from people_journal.models.journal import (
    DeleteResponse,
    PrepNotesUpdate,
    TeamMember,
    TeamMemberCreate,
    TeamMemberUpdate,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/api/team", tags=["Team"])


@router.get("", response_model=List[TeamMember])
def list_team(repo: JournalRepository = Depends(get_repository)) -> List[TeamMember]:
    return repo.list_members()


@router.post("", response_model=TeamMember, status_code=201)
def create_team_member(
    body: TeamMemberCreate,
    repo: JournalRepository = Depends(get_repository),
) -> TeamMember:
    """Create a member; blank fields get defaults."""
    return repo.create_member(name=body.name, role=body.role, color=body.color)


@router.put("/{member_id}", response_model=TeamMember)
def update_team_member(
    member_id: str,
    body: TeamMemberUpdate,
    repo: JournalRepository = Depends(get_repository),
) -> TeamMember:
    """
    Replace a member's fields.

    Setting jira_account_id to null forces the next briefing to resolve
    the tracker identity by name again.
    """
    return repo.update_member(
        member_id,
        name=body.name,
        role=body.role,
        color=body.color,
        jira_account_id=body.jira_account_id,
    )


@router.put("/{member_id}/prep-notes", response_model=PrepNotesUpdate)
def update_prep_notes(
    member_id: str,
    body: PrepNotesUpdate,
    repo: JournalRepository = Depends(get_repository),
) -> PrepNotesUpdate:
    notes = repo.update_prep_notes(member_id, body.prep_notes)
    return PrepNotesUpdate(prep_notes=notes)


@router.delete("/{member_id}", response_model=DeleteResponse)
def delete_team_member(
    member_id: str,
    repo: JournalRepository = Depends(get_repository),
) -> DeleteResponse:
    repo.delete_member(member_id)
    return DeleteResponse(deleted=True)
