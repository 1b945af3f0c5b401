"""Tests for logging setup."""
import logging
from datetime import date

import pytest

from people_journal.core.logging_config import (
    QUIET_LOGGERS,
    get_logger,
    log_file_path,
    reset_logging,
    setup_logging,
)


@pytest.fixture
def fresh_logging():
    """Detach handlers from any earlier setup and clean up afterwards."""
    reset_logging()
    yield
    reset_logging()


def test_log_file_is_named_by_day(tmp_path):
    path = log_file_path(tmp_path, date(2024, 5, 1))
    assert path == tmp_path / "journal_20240501.log"


def test_setup_writes_debug_records_to_daily_file(tmp_path, fresh_logging):
    log_dir = tmp_path / "nested" / "logs"
    setup_logging("WARNING", log_dir)

    get_logger("people_journal.tracker.client").debug("[JIRA] resolving Jane Doe")
    for handler in logging.getLogger().handlers:
        handler.flush()

    contents = log_file_path(log_dir).read_text(encoding="utf-8")
    assert "DEBUG" in contents
    assert "people_journal.tracker.client" in contents
    assert "[JIRA] resolving Jane Doe" in contents


def test_console_uses_configured_level(tmp_path, fresh_logging):
    root = setup_logging("warning", tmp_path)
    console = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert [h.level for h in console] == [logging.WARNING]


def test_repeated_setup_adds_no_handlers(tmp_path, fresh_logging):
    before = len(logging.getLogger().handlers)
    setup_logging("INFO", tmp_path)
    after_first = len(logging.getLogger().handlers)
    setup_logging("INFO", tmp_path)

    assert after_first == before + 2
    assert len(logging.getLogger().handlers) == after_first


def test_http_client_loggers_are_quieted(tmp_path, fresh_logging):
    setup_logging("DEBUG", tmp_path)
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_unknown_level_is_rejected(tmp_path, fresh_logging):
    with pytest.raises(ValueError):
        setup_logging("LOUD", tmp_path)
