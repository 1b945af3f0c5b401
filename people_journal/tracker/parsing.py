"""
Issue parsing - Decode raw tracker issue records.

Tracker payloads are loosely typed: sub-objects go missing, `flagged`
arrives as either a boolean or a list of flag options, and story points
live under tenant-specific field ids. Each ambiguous field has exactly
one coercion rule here; anything malformed degrades to an empty or
false value instead of failing the record.
"""
from typing import Any, Dict, Iterable, Optional

from people_journal.models.tracker import TrackerTicket
from people_journal.tracker.schema import DEFAULT_EPIC_NAME_FIELD


def _string_field(obj: Any, key: str) -> str:
    if not isinstance(obj, dict):
        return ""
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def _fields(issue: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(issue, dict):
        return None
    fields = issue.get("fields")
    return fields if isinstance(fields, dict) else None


def _coerce_flagged(value: Any) -> bool:
    # Flag options come back as [{"value": "Impediment"}]; an empty list means unflagged
    if isinstance(value, bool):
        return value
    if isinstance(value, list):
        return len(value) > 0
    return False


def parse_issue(issue: Any, epic_field_id: str = DEFAULT_EPIC_NAME_FIELD) -> TrackerTicket:
    """
    Convert a raw search result into a TrackerTicket.

    Args:
        issue: One element of the search response's "issues" list
        epic_field_id: Field id holding the epic name for this tenant
    """
    ticket = TrackerTicket(key=_string_field(issue, "key"))

    fields = _fields(issue)
    if fields is None:
        return ticket

    ticket.summary = _string_field(fields, "summary")
    ticket.status = _string_field(fields.get("status"), "name")
    ticket.flagged = _coerce_flagged(fields.get("flagged"))

    epic_name = _string_field(fields, epic_field_id)
    if epic_name:
        ticket.epic_name = epic_name

    return ticket


def extract_points(issue: Any, candidate_fields: Iterable[str]) -> int:
    """
    Return the first positive numeric value among the candidate fields.

    Candidates are tried in order. Fractional points are truncated, and
    values that are non-numeric or truncate to zero or less are skipped.
    """
    fields = _fields(issue)
    if fields is None:
        return 0

    for field_id in candidate_fields:
        value = fields.get(field_id)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        points = int(value)
        if points > 0:
            return points
    return 0


def is_done(ticket: TrackerTicket) -> bool:
    """Terminal status check, case-insensitive."""
    return ticket.status.lower() == "done"
