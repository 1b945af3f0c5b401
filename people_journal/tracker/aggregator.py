"""
Activity Aggregator - Classify a person's tracker issues for a briefing.

Two searches feed one ActivityContext:
1. Issues assigned in the open sprint. Done issues count toward both
   committed and completed points and are left out of the assigned
   bucket; everything else counts toward committed, goes into the
   assigned bucket, and into the blocked bucket when flagged.
2. Issues resolved since a date, newest first. These go into the
   completed bucket as-is and never add points.

A failed search is logged and treated as empty, so one bad query never
aborts the aggregation.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from people_journal.core.exceptions import ResponseParseError, TrackerRequestError
from people_journal.core.logging_config import get_logger
from people_journal.models.tracker import SprintStats, TrackerTicket
from people_journal.tracker.client import TrackerClient
from people_journal.tracker.parsing import extract_points, is_done, parse_issue
from people_journal.tracker.schema import FieldSchema

logger = get_logger(__name__)

ASSIGNED_JQL = 'assignee = "{account}" AND sprint in openSprints() ORDER BY status ASC, rank ASC'
COMPLETED_JQL = 'assignee = "{account}" AND status = Done AND resolved >= "{since}" ORDER BY resolved DESC'


@dataclass
class ActivityContext:
    """Classified tracker activity for one account."""
    assigned: List[TrackerTicket] = field(default_factory=list)
    completed: List[TrackerTicket] = field(default_factory=list)
    blocked: List[TrackerTicket] = field(default_factory=list)
    # None means neither search returned anything, not zero points
    sprint_stats: Optional[SprintStats] = None

    def has_tickets(self) -> bool:
        return bool(self.assigned or self.completed or self.blocked)


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def jql_date(value: str) -> str:
    """Reduce an entry date (plain date or RFC 3339 timestamp) to yyyy-MM-dd."""
    return value[:10]


class ActivityAggregator:
    """
    Turns raw tracker search results into briefing buckets.

    Example:
        >>> aggregator = ActivityAggregator(client)
        >>> ctx = aggregator.aggregate("5b10ac8d82e05b22cc7d4ef5", "2024-04-01", schema)
        >>> ctx.sprint_stats.carryover
        2
    """

    def __init__(self, client: TrackerClient):
        self.client = client

    def _search_or_empty(self, label: str, jql: str, fields: List[str]) -> List[Dict[str, Any]]:
        try:
            return self.client.search(jql, fields)
        except (TrackerRequestError, ResponseParseError) as e:
            logger.warning(f"[JIRA] Failed to fetch {label} issues: {e.message}")
            return []

    def aggregate(self, account_id: str, since_date: str, schema: FieldSchema) -> ActivityContext:
        """
        Fetch and classify activity for an account.

        Args:
            account_id: Tracker account id
            since_date: Lower bound for the resolved-since search
            schema: Field ids discovered for this tenant

        Returns:
            ActivityContext; sprint_stats is set only if a search returned issues
        """
        ctx = ActivityContext()
        fields = schema.search_fields()
        account = _quote(account_id)

        assigned_issues = self._search_or_empty(
            "assigned", ASSIGNED_JQL.format(account=account), fields
        )

        committed = 0
        completed = 0
        for issue in assigned_issues:
            ticket = parse_issue(issue, schema.epic_name_field)
            points = extract_points(issue, schema.story_point_fields)

            committed += points
            if is_done(ticket):
                completed += points
                continue

            ctx.assigned.append(ticket)
            if ticket.flagged:
                ctx.blocked.append(ticket)

        completed_issues = self._search_or_empty(
            "completed",
            COMPLETED_JQL.format(account=account, since=_quote(jql_date(since_date))),
            fields,
        )
        for issue in completed_issues:
            ctx.completed.append(parse_issue(issue, schema.epic_name_field))

        if assigned_issues or completed_issues:
            ctx.sprint_stats = SprintStats.from_totals(committed, completed)

        logger.info(
            f"[JIRA] Got {len(ctx.assigned)} assigned, {len(ctx.completed)} completed, "
            f"{len(ctx.blocked)} blocked tickets"
        )
        return ctx
