"""Tests for classifying tracker issues into briefing buckets."""
from fakes import FakeResponse, issue
from people_journal.models.tracker import SprintStats
from people_journal.tracker.aggregator import ActivityAggregator, jql_date
from people_journal.tracker.schema import DEFAULT_SCHEMA

SEARCH = ("POST", "/rest/api/3/search/jql")


def test_sprint_points_and_buckets(tracker, fake_session):
    fake_session.routes[SEARCH] = [
        FakeResponse(200, {"issues": [
            issue("P-1", "Done", points=3),
            issue("P-2", "In Progress", points=2, flagged=[{"value": "Impediment"}]),
        ]}),
        FakeResponse(200, {"issues": [issue("P-1", "Done", points=3)]}),
    ]

    ctx = ActivityAggregator(tracker).aggregate("acct-1", "2024-04-01", DEFAULT_SCHEMA)

    assert ctx.sprint_stats == SprintStats(points_committed=5, points_completed=3, carryover=2)
    assert [t.key for t in ctx.assigned] == ["P-2"]
    assert [t.key for t in ctx.blocked] == ["P-2"]
    assert [t.key for t in ctx.completed] == ["P-1"]


def test_completed_query_adds_no_points(tracker, fake_session):
    fake_session.routes[SEARCH] = [
        FakeResponse(200, {"issues": []}),
        FakeResponse(200, {"issues": [issue("P-9", "Done", points=8)]}),
    ]

    ctx = ActivityAggregator(tracker).aggregate("acct-1", "2024-04-01", DEFAULT_SCHEMA)

    assert ctx.sprint_stats == SprintStats(points_committed=0, points_completed=0, carryover=0)
    assert [t.key for t in ctx.completed] == ["P-9"]
    assert ctx.assigned == []


def test_no_issues_means_no_sprint_stats(tracker, fake_session):
    fake_session.routes[SEARCH] = [
        FakeResponse(200, {"issues": []}),
        FakeResponse(200, {"issues": []}),
    ]

    ctx = ActivityAggregator(tracker).aggregate("acct-1", "2024-04-01", DEFAULT_SCHEMA)

    assert ctx.sprint_stats is None
    assert not ctx.has_tickets()


def test_failed_search_is_treated_as_empty(tracker, fake_session):
    fake_session.routes[SEARCH] = [
        FakeResponse(500, text="boom"),
        FakeResponse(200, {"issues": [issue("P-4", "Done")]}),
    ]

    ctx = ActivityAggregator(tracker).aggregate("acct-1", "2024-04-01", DEFAULT_SCHEMA)

    assert ctx.assigned == []
    assert [t.key for t in ctx.completed] == ["P-4"]
    assert ctx.sprint_stats is not None


def test_both_searches_failing_yields_empty_context(tracker, fake_session):
    fake_session.routes[SEARCH] = [FakeResponse(503), FakeResponse(200, {"issues": 7})]

    ctx = ActivityAggregator(tracker).aggregate("acct-1", "2024-04-01", DEFAULT_SCHEMA)

    assert not ctx.has_tickets()
    assert ctx.sprint_stats is None


def test_jql_queries(tracker, fake_session):
    fake_session.routes[SEARCH] = [
        FakeResponse(200, {"issues": []}),
        FakeResponse(200, {"issues": []}),
    ]

    ActivityAggregator(tracker).aggregate('ac"ct', "2024-04-01T10:00:00Z", DEFAULT_SCHEMA)

    assigned_jql, completed_jql = (c["json"]["jql"] for c in fake_session.calls)
    assert assigned_jql == (
        'assignee = "ac\\"ct" AND sprint in openSprints() ORDER BY status ASC, rank ASC'
    )
    assert completed_jql == (
        'assignee = "ac\\"ct" AND status = Done AND resolved >= "2024-04-01" ORDER BY resolved DESC'
    )
    assert fake_session.calls[0]["json"]["fields"] == DEFAULT_SCHEMA.search_fields()


def test_carryover_never_negative():
    assert SprintStats.from_totals(2, 5).carryover == 0


def test_jql_date_keeps_calendar_day():
    assert jql_date("2024-04-01") == "2024-04-01"
    assert jql_date("2024-04-01T23:59:00Z") == "2024-04-01"
