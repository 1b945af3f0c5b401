"""
Logging setup for the journal service.

setup_logging() runs once when the API module loads. It attaches two
handlers to the root logger:
- console (stdout) at the configured LOG_LEVEL
- journal_YYYYMMDD.log in LOG_DIR, which keeps DEBUG records

Modules log through get_logger(__name__). Tracker and briefing steps
prefix their messages with [JIRA] and [PREP].
"""
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_PREFIX = "journal"

# HTTP clients under the tracker and LLM calls log every request at DEBUG
QUIET_LOGGERS = ("urllib3", "httpx", "httpcore", "groq", "google")

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent.parent / "logs"

_handlers: List[logging.Handler] = []


def log_file_path(log_dir: Union[str, Path], day: Optional[date] = None) -> Path:
    """Daily log file for `day` (today by default) inside `log_dir`."""
    day = day or date.today()
    return Path(log_dir) / f"{LOG_FILE_PREFIX}_{day.strftime('%Y%m%d')}.log"


def _level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    return level


def setup_logging(
    log_level: str = "DEBUG",
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach the console and daily-file handlers to the root logger.

    Repeated calls are no-ops until reset_logging() is called.

    Args:
        log_level: Console verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the daily file. Defaults to 'logs/' beside the package.

    Raises:
        ValueError: If log_level is not a logging level name

    Example:
        >>> from people_journal.core.logging_config import setup_logging
        >>> setup_logging("INFO", "/var/log/people-journal")
    """
    root_logger = logging.getLogger()
    if _handlers:
        return root_logger

    console_level = _level(log_level)
    directory = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_file = log_file_path(directory)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)

    root_logger.setLevel(logging.DEBUG)
    for handler in (console_handler, file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _handlers.append(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.debug(f"Logging configured: level={log_level}, file={log_file}")
    return root_logger


def reset_logging() -> None:
    """Detach and close the handlers added by setup_logging() (for testing)."""
    root_logger = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass __name__."""
    return logging.getLogger(name)
