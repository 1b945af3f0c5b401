"""
Entry Routes - 1:1 journal entries.

Endpoints:
- GET    /api/entries?member_id=  : List entries, newest first
- GET    /api/entries/{id}        : Get one entry
- POST   /api/entries             : Create an entry
- PUT    /api/entries/{id}        : Partially update an entry
- DELETE /api/entries/{id}        : Delete an entry
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from people_journal.api.deps import get_repository
from people_journal.core.logging_config import get_logger
from people_journal.database.repository import JournalRepository
from people_journal.models.journal import (
    DeleteResponse,
    Entry,
    EntryCreate,
    EntryUpdate,
    entry_changes,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/api/entries", tags=["Entries"])


@router.get("", response_model=List[Entry])
def list_entries(
    member_id: Optional[str] = Query(default=None, description="Only entries for this member"),
    repo: JournalRepository = Depends(get_repository),
) -> List[Entry]:
    return repo.list_entries(member_id)


@router.get("/{entry_id}", response_model=Entry)
def get_entry(entry_id: str, repo: JournalRepository = Depends(get_repository)) -> Entry:
    return repo.get_entry(entry_id)


@router.post("", response_model=Entry, status_code=201)
def create_entry(body: EntryCreate, repo: JournalRepository = Depends(get_repository)) -> Entry:
    # Fails with 404 before the insert would hit the foreign key
    repo.get_member(body.member_id)
    return repo.create_entry(body.model_dump(mode="json"))


@router.put("/{entry_id}", response_model=Entry)
def update_entry(
    entry_id: str,
    body: EntryUpdate,
    repo: JournalRepository = Depends(get_repository),
) -> Entry:
    """Only fields present in the body are changed."""
    return repo.update_entry(entry_id, entry_changes(body))


@router.delete("/{entry_id}", response_model=DeleteResponse)
def delete_entry(entry_id: str, repo: JournalRepository = Depends(get_repository)) -> DeleteResponse:
    repo.delete_entry(entry_id)
    return DeleteResponse(deleted=True)
