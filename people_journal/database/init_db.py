"""
Database Initialization - Create tables and seed the team.

This module creates the journal, team and cache tables and seeds a
placeholder team the first time the database is opened.
"""
from typing import Optional

from people_journal.core.logging_config import get_logger
from people_journal.database.connection import DatabaseConnection, get_database
from people_journal.database.models import Base, TeamMemberRecord

logger = get_logger(__name__)

DEFAULT_MEMBERS = [
    ("member-1", "Engineer 1", "Engineer", "#E07A5F"),
    ("member-2", "Engineer 2", "Engineer", "#3D405B"),
    ("member-3", "Engineer 3", "Engineer", "#81B29A"),
    ("member-4", "Engineer 4", "Engineer", "#F2CC8F"),
]


def init_tables(db: Optional[DatabaseConnection] = None, seed: bool = True) -> bool:
    """
    Create all tables if they don't exist and seed default members.

    Args:
        db: Connection to initialize. Uses the singleton if not provided.
        seed: Insert DEFAULT_MEMBERS when the team table is empty.

    Returns:
        True if tables were created successfully
    """
    db = db or get_database()

    try:
        Base.metadata.create_all(db.engine)
        logger.info("Journal tables initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize journal tables: {e}")
        raise

    if seed:
        _seed_default_members(db)
    return True


def _seed_default_members(db: DatabaseConnection) -> None:
    with db.get_session() as session:
        if session.query(TeamMemberRecord).count() > 0:
            return
        for member_id, name, role, color in DEFAULT_MEMBERS:
            session.add(TeamMemberRecord(id=member_id, name=name, role=role, color=color))
        logger.info(f"Seeded {len(DEFAULT_MEMBERS)} default team members")


if __name__ == "__main__":
    # Allow running directly to create tables
    print("Initializing journal tables...")
    init_tables()
    print("Done!")
