"""
Database Models - SQLAlchemy ORM models for persistent storage.

This module defines the database schema for:
- Team members (with cached tracker account id)
- 1:1 journal entries
- The result cache keyed by (fingerprint, category)
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the format every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TeamMemberRecord(Base):
    """
    Model for storing team members.

    jira_account_id is filled lazily the first time a briefing resolves
    the member's tracker identity by display name.
    """
    __tablename__ = "team_members"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    color = Column(String(32), nullable=False)
    jira_account_id = Column(String(128), nullable=True)
    prep_notes = Column(Text, nullable=True)

    entries = relationship(
        "EntryRecord",
        back_populates="member",
        cascade="all, delete-orphan",
    )


class EntryRecord(Base):
    """
    Model for storing a single 1:1 entry.

    List-valued fields are stored as JSON arrays; action items are
    arrays of {"text": str, "completed": bool} objects.
    """
    __tablename__ = "entries"

    id = Column(String(64), primary_key=True)
    member_id = Column(String(64), ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(String(32), nullable=False, index=True)
    summary = Column(Text, nullable=True)
    morale_score = Column(Integer, nullable=True)
    growth_score = Column(Integer, nullable=True)
    morale_rationale = Column(Text, nullable=True)
    growth_rationale = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    action_items_mine = Column(JSON, nullable=True)
    action_items_theirs = Column(JSON, nullable=True)
    notable_quotes = Column(JSON, nullable=True)
    blockers = Column(JSON, nullable=True)
    wins = Column(JSON, nullable=True)
    private_note = Column(Text, nullable=True)
    transcript = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=True)
    updated_at = Column(DateTime, default=utcnow, nullable=True)

    member = relationship("TeamMemberRecord", back_populates="entries")


class CacheRecord(Base):
    """
    Model for the result cache.

    (key, category) is the primary key, so the same fingerprint can hold
    independent values for "extract" and "briefing". created_at is indexed
    for the expiry sweep that runs on every write.
    """
    __tablename__ = "cache"

    key = Column(String(64), primary_key=True)
    category = Column(String(32), primary_key=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
