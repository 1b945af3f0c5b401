"""
Tracker module - Issue tracker integration.

- client.py     : REST client (schema discovery, identity, search)
- schema.py     : Field schema derived from tracker metadata
- parsing.py    : Raw issue decoding
- aggregator.py : Classification into briefing buckets and sprint stats
"""
from people_journal.tracker.aggregator import ActivityAggregator, ActivityContext
from people_journal.tracker.client import TrackerClient
from people_journal.tracker.parsing import extract_points, parse_issue
from people_journal.tracker.schema import DEFAULT_SCHEMA, FieldSchema, schema_from_metadata

__all__ = [
    "ActivityAggregator",
    "ActivityContext",
    "TrackerClient",
    "extract_points",
    "parse_issue",
    "DEFAULT_SCHEMA",
    "FieldSchema",
    "schema_from_metadata",
]
