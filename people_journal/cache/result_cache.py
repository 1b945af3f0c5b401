"""
Result Cache - TTL-bounded key/value store keyed by content fingerprints.

Records live in the `cache` table keyed by (fingerprint, category):
- Reads delete and miss on records older than the TTL
- Writes upsert and sweep every expired record, in every category
- Storage errors are logged and behave like misses; nothing here is
  allowed to fail a request

Concurrent misses for the same key can be serialized with
`single_flight()` so only one caller computes the value.
"""
import hashlib
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Callable, Dict, Generator, Iterable, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from people_journal.core.config import get_settings
from people_journal.core.logging_config import get_logger
from people_journal.database.connection import DatabaseConnection, get_database
from people_journal.database.models import CacheRecord, utcnow

logger = get_logger(__name__)

DEFAULT_TTL_DAYS = 30

# Never appears in UTF-8 encoded text, so part boundaries stay unambiguous
_PART_SEPARATOR = b"\x00"


def fingerprint(parts: Iterable[str]) -> str:
    """
    Compute an order-sensitive SHA-256 digest over a sequence of strings.

    Example:
        >>> fingerprint(["a", "b"]) == fingerprint(["ab"])
        False
    """
    digest = hashlib.sha256()
    for part in parts:
        digest.update(part.encode("utf-8"))
        digest.update(_PART_SEPARATOR)
    return digest.hexdigest()


class _InFlight:
    __slots__ = ("lock", "waiters")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.waiters = 0


class ResultCache:
    """
    Namespaced, TTL-bounded cache backed by the journal database.

    Example:
        >>> cache = ResultCache(db, ttl_days=30)
        >>> key = fingerprint(["member-1", "2024-05-01"])
        >>> cache.set(key, "briefing", '{"briefing": "..."}')
        >>> cache.get(key, "briefing")
        '{"briefing": "..."}'
    """

    def __init__(
        self,
        db: Optional[DatabaseConnection] = None,
        ttl_days: int = DEFAULT_TTL_DAYS,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Args:
            db: Database holding the cache table. Uses the singleton if not provided.
            ttl_days: Age after which a record is treated as absent
            clock: Returns the current naive UTC time
        """
        self.db = db or get_database()
        self.ttl = timedelta(days=ttl_days)
        self._clock = clock

        self._guard = threading.Lock()
        self._inflight: Dict[Tuple[str, str], _InFlight] = {}

        logger.info(f"ResultCache initialized: TTL={ttl_days}d")

    def get(self, key: str, category: str) -> Optional[str]:
        """
        Return the stored value, or None on a miss.

        An expired record is deleted before the miss is returned.
        """
        try:
            with self.db.get_session() as session:
                record = session.get(CacheRecord, (key, category))
                if record is None:
                    return None

                if self._clock() - record.created_at > self.ttl:
                    session.delete(record)
                    logger.debug(f"Cache expired: category={category}, key={key[:12]}")
                    return None

                logger.debug(f"Cache hit: category={category}, key={key[:12]}")
                return record.value
        except SQLAlchemyError as e:
            logger.warning(f"Cache read failed, treating as miss: {e}")
            return None

    def set(self, key: str, category: str, value: str) -> None:
        """
        Upsert a value with the current timestamp and sweep expired records.
        """
        now = self._clock()
        try:
            with self.db.get_session() as session:
                # Sweep before merging so an expired row for this key becomes an INSERT
                swept = (
                    session.query(CacheRecord)
                    .filter(CacheRecord.created_at < now - self.ttl)
                    .delete(synchronize_session=False)
                )
                session.merge(CacheRecord(key=key, category=category, value=value, created_at=now))
            logger.debug(f"Cache set: category={category}, key={key[:12]}, swept={swept}")
        except SQLAlchemyError as e:
            logger.warning(f"Cache write failed, continuing without cache: {e}")

    @contextmanager
    def single_flight(self, key: str, category: str) -> Generator[None, None, None]:
        """
        Serialize computations for one (key, category) pair.

        Callers should re-check `get()` after entering; a caller that
        waited will usually find the value the first one stored.
        """
        slot_key = (key, category)
        with self._guard:
            slot = self._inflight.get(slot_key)
            if slot is None:
                slot = self._inflight[slot_key] = _InFlight()
            slot.waiters += 1

        try:
            with slot.lock:
                yield
        finally:
            with self._guard:
                slot.waiters -= 1
                if slot.waiters == 0:
                    del self._inflight[slot_key]

    def in_flight(self) -> int:
        """Number of keys currently being computed or waited on."""
        with self._guard:
            return len(self._inflight)


# Module-level instance (singleton pattern)
_result_cache: Optional[ResultCache] = None


def get_result_cache() -> ResultCache:
    """Get or create the process-wide result cache."""
    global _result_cache
    if _result_cache is None:
        _result_cache = ResultCache(ttl_days=get_settings().cache_ttl_days)
    return _result_cache


def reset_result_cache() -> None:
    """Drop the singleton (for testing)."""
    global _result_cache
    _result_cache = None
