"""
Journal Repository - Team member and entry persistence.

All reads convert ORM rows to Pydantic models before the session closes.
SQLAlchemy errors propagate; the API layer turns them into 503 responses.
"""
import time
from typing import Any, Dict, List, Optional

from people_journal.core.exceptions import NotFoundError
from people_journal.core.logging_config import get_logger
from people_journal.database.connection import DatabaseConnection, get_database
from people_journal.database.models import EntryRecord, TeamMemberRecord, utcnow
from people_journal.models.journal import ActionItem, Entry, TeamMember

logger = get_logger(__name__)

# Fields a client may change through PUT /api/entries/{id}
UPDATABLE_ENTRY_FIELDS = (
    "summary", "morale_score", "growth_score", "morale_rationale", "growth_rationale",
    "tags", "action_items_mine", "action_items_theirs", "notable_quotes",
    "blockers", "wins", "private_note", "transcript",
)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}"


def _dump_items(items: List[Any]) -> List[Dict[str, Any]]:
    return [
        item.model_dump() if isinstance(item, ActionItem) else dict(item)
        for item in items
    ]


class JournalRepository:
    """
    Keyed store for team members and their 1:1 entries.

    Example:
        >>> repo = JournalRepository()
        >>> member = repo.get_member("member-1")
        >>> entries = repo.list_recent_entries(member.id, limit=5)
    """

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    # ============================================================
    # Team members
    # ============================================================

    def list_members(self) -> List[TeamMember]:
        with self.db.get_session() as session:
            rows = session.query(TeamMemberRecord).order_by(TeamMemberRecord.id).all()
            return [TeamMember.model_validate(row) for row in rows]

    def get_member(self, member_id: str) -> TeamMember:
        """
        Fetch a member by id.

        Raises:
            NotFoundError: If no member has this id
        """
        with self.db.get_session() as session:
            row = session.get(TeamMemberRecord, member_id)
            if row is None:
                raise NotFoundError("member not found", details=f"member_id={member_id}")
            return TeamMember.model_validate(row)

    def create_member(self, name: str = "", role: str = "", color: str = "") -> TeamMember:
        with self.db.get_session() as session:
            row = TeamMemberRecord(
                id=_new_id("member"),
                name=name or "New Member",
                role=role or "Engineer",
                color=color or "#888888",
            )
            session.add(row)
            session.flush()
            member = TeamMember.model_validate(row)
        logger.info(f"Created team member {member.id} ({member.name})")
        return member

    def update_member(
        self,
        member_id: str,
        name: str,
        role: str,
        color: str,
        jira_account_id: Optional[str],
    ) -> TeamMember:
        with self.db.get_session() as session:
            row = session.get(TeamMemberRecord, member_id)
            if row is None:
                raise NotFoundError("member not found", details=f"member_id={member_id}")
            row.name = name
            row.role = role
            row.color = color
            row.jira_account_id = jira_account_id
            session.flush()
            return TeamMember.model_validate(row)

    def update_prep_notes(self, member_id: str, prep_notes: str) -> str:
        with self.db.get_session() as session:
            row = session.get(TeamMemberRecord, member_id)
            if row is None:
                raise NotFoundError("member not found", details=f"member_id={member_id}")
            # An empty string clears the notes
            row.prep_notes = prep_notes or None
        return prep_notes

    def set_tracker_account_id(self, member_id: str, account_id: str) -> None:
        """Remember a resolved tracker account so later briefings skip resolution."""
        with self.db.get_session() as session:
            row = session.get(TeamMemberRecord, member_id)
            if row is None:
                raise NotFoundError("member not found", details=f"member_id={member_id}")
            row.jira_account_id = account_id

    def delete_member(self, member_id: str) -> None:
        """Delete a member together with all of their entries."""
        with self.db.get_session() as session:
            row = session.get(TeamMemberRecord, member_id)
            if row is None:
                raise NotFoundError("member not found", details=f"member_id={member_id}")
            session.query(EntryRecord).filter(EntryRecord.member_id == member_id).delete()
            session.delete(row)
        logger.info(f"Deleted team member {member_id}")

    # ============================================================
    # Entries
    # ============================================================

    def list_entries(self, member_id: Optional[str] = None) -> List[Entry]:
        """List entries newest first, optionally for a single member."""
        with self.db.get_session() as session:
            query = session.query(EntryRecord)
            if member_id:
                query = query.filter(EntryRecord.member_id == member_id)
            rows = query.order_by(EntryRecord.date.desc(), EntryRecord.created_at.desc()).all()
            return [Entry.model_validate(row) for row in rows]

    def list_recent_entries(self, member_id: str, limit: int) -> List[Entry]:
        """Return at most `limit` entries for a member, newest first."""
        with self.db.get_session() as session:
            rows = (
                session.query(EntryRecord)
                .filter(EntryRecord.member_id == member_id)
                .order_by(EntryRecord.date.desc(), EntryRecord.created_at.desc())
                .limit(limit)
                .all()
            )
            return [Entry.model_validate(row) for row in rows]

    def get_entry(self, entry_id: str) -> Entry:
        with self.db.get_session() as session:
            row = session.get(EntryRecord, entry_id)
            if row is None:
                raise NotFoundError("Entry not found", details=f"entry_id={entry_id}")
            return Entry.model_validate(row)

    def create_entry(self, data: Dict[str, Any]) -> Entry:
        """
        Insert a new entry.

        Args:
            data: Field values; `id` and `date` are generated when missing.
        """
        now = utcnow()
        with self.db.get_session() as session:
            row = EntryRecord(
                id=data.get("id") or _new_id("entry"),
                member_id=data["member_id"],
                date=data.get("date") or now.strftime("%Y-%m-%dT%H:%M:%SZ"),
                summary=data.get("summary"),
                morale_score=data.get("morale_score"),
                growth_score=data.get("growth_score"),
                morale_rationale=data.get("morale_rationale"),
                growth_rationale=data.get("growth_rationale"),
                tags=list(data.get("tags") or []),
                action_items_mine=_dump_items(data.get("action_items_mine") or []),
                action_items_theirs=_dump_items(data.get("action_items_theirs") or []),
                notable_quotes=list(data.get("notable_quotes") or []),
                blockers=list(data.get("blockers") or []),
                wins=list(data.get("wins") or []),
                private_note=data.get("private_note"),
                transcript=data.get("transcript"),
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            entry = Entry.model_validate(row)
        logger.info(f"Created entry {entry.id} for member {entry.member_id}")
        return entry

    def update_entry(self, entry_id: str, changes: Dict[str, Any]) -> Entry:
        """
        Apply a partial update.

        updated_at only moves when at least one allowed field is present,
        so a no-op update does not invalidate cached briefings.
        """
        with self.db.get_session() as session:
            row = session.get(EntryRecord, entry_id)
            if row is None:
                raise NotFoundError("Entry not found", details=f"entry_id={entry_id}")

            applied = [field for field in UPDATABLE_ENTRY_FIELDS if field in changes]
            for field in applied:
                setattr(row, field, changes[field])
            if applied:
                row.updated_at = utcnow()
                session.flush()
                logger.debug(f"Updated entry {entry_id}: {', '.join(applied)}")
            return Entry.model_validate(row)

    def delete_entry(self, entry_id: str) -> None:
        with self.db.get_session() as session:
            deleted = session.query(EntryRecord).filter(EntryRecord.id == entry_id).delete()
            if deleted == 0:
                raise NotFoundError("entry not found", details=f"entry_id={entry_id}")
