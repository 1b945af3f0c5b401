"""
Pytest configuration and fixtures.

Environment variables are pinned before any people_journal import so the
cached settings never pick up a developer's .env (python-dotenv does not
override variables that are already set).
"""
import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="people-journal-tests-")

os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_DIR"] = os.path.join(_TEST_DIR, "logs")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'app.db')}"
for _key in ("GROQ_API_KEY", "GOOGLE_API_KEY", "JIRA_BASE_URL", "JIRA_EMAIL", "JIRA_API_TOKEN"):
    os.environ[_key] = ""

from datetime import date, datetime  # noqa: E402
from typing import Generator  # noqa: E402

import pytest  # noqa: E402

from fakes import FakeClock, FakeSession  # noqa: E402
from people_journal.cache.result_cache import ResultCache, reset_result_cache  # noqa: E402
from people_journal.core.config import get_settings  # noqa: E402
from people_journal.database.connection import DatabaseConnection, reset_database  # noqa: E402
from people_journal.database.init_db import init_tables  # noqa: E402
from people_journal.database.repository import JournalRepository  # noqa: E402
from people_journal.llm.client import reset_llm_client  # noqa: E402
from people_journal.services.briefing_service import reset_briefing_service  # noqa: E402
from people_journal.services.extraction_service import reset_extraction_service  # noqa: E402
from people_journal.tracker.client import TrackerClient  # noqa: E402


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Drop cached settings and process-wide instances after each test."""
    yield
    reset_briefing_service()
    reset_extraction_service()
    reset_llm_client()
    reset_result_cache()
    reset_database()
    get_settings.cache_clear()


@pytest.fixture
def db(tmp_path) -> Generator[DatabaseConnection, None, None]:
    """Fresh SQLite database with empty tables."""
    connection = DatabaseConnection(f"sqlite:///{tmp_path / 'journal.db'}")
    init_tables(connection, seed=False)
    yield connection
    connection.close()


@pytest.fixture
def repo(db) -> JournalRepository:
    return JournalRepository(db)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0))


@pytest.fixture
def cache(db, clock) -> ResultCache:
    return ResultCache(db, ttl_days=30, clock=clock)


@pytest.fixture
def today():
    """Mutable calendar day for briefing fingerprints."""
    class _Today:
        value = date(2024, 5, 1)

        def __call__(self) -> date:
            return self.value

    return _Today()


@pytest.fixture
def member(repo):
    """A member with three entries, oldest to newest."""
    created = repo.create_member(name="Jane Doe", role="Engineer", color="#E07A5F")
    repo.create_entry({
        "id": "entry-1",
        "member_id": created.id,
        "date": "2024-04-01",
        "morale_score": 3,
        "growth_score": 2,
        "tags": ["a", "b", "c"],
        "action_items_mine": [{"text": "share roadmap", "completed": True}],
        "action_items_theirs": [{"text": "write RFC", "completed": False}],
        "blockers": ["waiting on infra"],
    })
    repo.create_entry({
        "id": "entry-2",
        "member_id": created.id,
        "date": "2024-04-15",
        "morale_score": 4,
        "tags": ["a", "b"],
        "action_items_mine": [{"text": "intro to staff eng", "completed": False}],
    })
    repo.create_entry({
        "id": "entry-3",
        "member_id": created.id,
        "date": "2024-04-29",
        "morale_score": 5,
        "growth_score": 4,
        "tags": ["a"],
        "blockers": ["flaky CI"],
    })
    return created


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def tracker(fake_session) -> TrackerClient:
    return TrackerClient(
        base_url="https://acme.atlassian.net/",
        email="manager@acme.test",
        api_token="token",
        session=fake_session,
    )

