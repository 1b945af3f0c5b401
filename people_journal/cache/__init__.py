"""
Cache module - Fingerprint-keyed result cache.
"""
from people_journal.cache.result_cache import (
    DEFAULT_TTL_DAYS,
    ResultCache,
    fingerprint,
    get_result_cache,
    reset_result_cache,
)

__all__ = [
    "DEFAULT_TTL_DAYS",
    "ResultCache",
    "fingerprint",
    "get_result_cache",
    "reset_result_cache",
]
