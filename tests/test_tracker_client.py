"""Tests for the tracker REST client, using a fake HTTP session."""
import pytest
import requests

from fakes import FakeResponse, make_settings, tracker_settings
from people_journal.core.exceptions import (
    ConfigurationMissingError,
    NotFoundError,
    ResponseParseError,
    TrackerRequestError,
)
from people_journal.tracker.client import TrackerClient
from people_journal.tracker.schema import DEFAULT_SCHEMA

USER_SEARCH = ("GET", "/rest/api/3/user/search")
FIELDS = ("GET", "/rest/api/3/field")
SEARCH = ("POST", "/rest/api/3/search/jql")


def test_from_settings_requires_configuration():
    with pytest.raises(ConfigurationMissingError):
        TrackerClient.from_settings(make_settings())


def test_from_settings_copies_options():
    client = TrackerClient.from_settings(
        tracker_settings(jira_name_match="strict", jira_timeout_seconds=7)
    )
    assert client.base_url == "https://acme.atlassian.net"
    assert client.auth == ("manager@acme.test", "token")
    assert client.timeout == 7
    assert client.name_match == "strict"


def test_board_url(tracker):
    assert tracker.board_url("abc123") == "https://acme.atlassian.net/jira/people/abc123"


def test_requests_carry_auth_and_timeout(tracker, fake_session):
    fake_session.routes[FIELDS] = FakeResponse(200, [])
    tracker.discover_field_schema()

    call = fake_session.calls[0]
    assert call["url"] == "https://acme.atlassian.net/rest/api/3/field"
    assert call["auth"] == ("manager@acme.test", "token")
    assert call["timeout"] == 15
    assert call["headers"]["Accept"] == "application/json"


class TestResolveIdentity:

    def test_exact_match_beats_earlier_partial_match(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(200, [
            {"accountId": "contractor", "displayName": "Jane Doe (Contractor)", "active": True},
            {"accountId": "jane", "displayName": "jane doe", "active": True},
        ])
        assert tracker.resolve_identity("Jane Doe") == "jane"
        assert fake_session.calls[0]["params"] == {"query": "Jane Doe"}

    def test_lenient_falls_back_to_first_active(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(200, [
            {"accountId": "old", "displayName": "Jane Doe", "active": False},
            {"accountId": "first", "displayName": "Jane D.", "active": True},
            {"accountId": "second", "displayName": "J. Doe", "active": True},
        ])
        assert tracker.resolve_identity("Jane Doe") == "first"

    def test_strict_requires_exact_match(self, fake_session):
        client = TrackerClient("https://acme.atlassian.net", "m@acme.test", "t",
                               name_match="strict", session=fake_session)
        fake_session.routes[USER_SEARCH] = FakeResponse(200, [
            {"accountId": "first", "displayName": "Jane D.", "active": True},
        ])
        with pytest.raises(NotFoundError):
            client.resolve_identity("Jane Doe")

    def test_inactive_users_are_ignored(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(200, [
            {"accountId": "gone", "displayName": "Jane Doe", "active": False},
        ])
        with pytest.raises(NotFoundError):
            tracker.resolve_identity("Jane Doe")

    def test_match_without_account_id(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(200, [
            {"displayName": "Jane Doe", "active": True},
        ])
        with pytest.raises(NotFoundError):
            tracker.resolve_identity("Jane Doe")

    def test_fallback_with_non_string_account_id(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(200, [
            {"accountId": 42, "displayName": "Jane D.", "active": True},
        ])
        with pytest.raises(NotFoundError):
            tracker.resolve_identity("Jane Doe")

    def test_empty_result(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(200, [])
        with pytest.raises(NotFoundError):
            tracker.resolve_identity("Nobody")

    def test_non_list_response(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(200, {"users": []})
        with pytest.raises(ResponseParseError):
            tracker.resolve_identity("Jane Doe")

    def test_http_error(self, tracker, fake_session):
        fake_session.routes[USER_SEARCH] = FakeResponse(401, text="Unauthorized")
        with pytest.raises(TrackerRequestError) as exc_info:
            tracker.resolve_identity("Jane Doe")
        assert exc_info.value.upstream_status == 401
        assert exc_info.value.body == "Unauthorized"
        assert "401" in exc_info.value.message


class TestSearch:

    def test_posts_jql_with_cap(self, tracker, fake_session):
        fake_session.routes[SEARCH] = FakeResponse(200, {"issues": [{"key": "P-1"}]})
        issues = tracker.search("assignee = x", ["summary", "status"])

        assert issues == [{"key": "P-1"}]
        body = fake_session.calls[0]["json"]
        assert body == {"jql": "assignee = x", "fields": ["summary", "status"], "maxResults": 50}
        assert fake_session.calls[0]["headers"]["Content-Type"] == "application/json"

    def test_missing_issues_is_empty(self, tracker, fake_session):
        fake_session.routes[SEARCH] = FakeResponse(200, {"total": 0})
        assert tracker.search("x", []) == []

    def test_issues_of_wrong_type(self, tracker, fake_session):
        fake_session.routes[SEARCH] = FakeResponse(200, {"issues": "nope"})
        with pytest.raises(ResponseParseError):
            tracker.search("x", [])

    def test_invalid_json(self, tracker, fake_session):
        fake_session.routes[SEARCH] = FakeResponse(200, ValueError("bad json"), text="<html>")
        with pytest.raises(ResponseParseError):
            tracker.search("x", [])

    def test_transport_failure(self, tracker, fake_session):
        fake_session.routes[SEARCH] = requests.ConnectionError("refused")
        with pytest.raises(TrackerRequestError) as exc_info:
            tracker.search("x", [])
        assert exc_info.value.upstream_status is None


class TestDiscoverFieldSchema:

    def test_uses_metadata(self, tracker, fake_session):
        fake_session.routes[FIELDS] = FakeResponse(200, [
            {"id": "cf_7", "name": "Story Points"},
            {"id": "cf_8", "name": "Epic Name"},
        ])
        schema = tracker.discover_field_schema()
        assert schema.story_point_fields == ("cf_7",)
        assert schema.epic_name_field == "cf_8"

    def test_http_failure_falls_back_to_default(self, tracker, fake_session):
        fake_session.routes[FIELDS] = FakeResponse(500, text="oops")
        assert tracker.discover_field_schema() == DEFAULT_SCHEMA

    def test_transport_failure_falls_back_to_default(self, tracker, fake_session):
        fake_session.routes[FIELDS] = requests.Timeout("slow")
        assert tracker.discover_field_schema() == DEFAULT_SCHEMA

