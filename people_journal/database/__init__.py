"""
Database module - Journal store access layer.

This module handles:
- Database connection management
- ORM models for members, entries and the result cache
- Table creation and seeding
- The journal repository
"""
from people_journal.database.connection import DatabaseConnection, get_database, reset_database
from people_journal.database.models import Base, CacheRecord, EntryRecord, TeamMemberRecord
from people_journal.database.init_db import init_tables
from people_journal.database.repository import JournalRepository

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "reset_database",
    # Models
    "Base",
    "CacheRecord",
    "EntryRecord",
    "TeamMemberRecord",
    # Init
    "init_tables",
    # Repository
    "JournalRepository",
]
