"""
Issue Tracker Client - Authenticated REST access to the tracker.

This module wraps the three tracker endpoints the briefing needs:
- GET  /rest/api/3/field        : field metadata for schema discovery
- GET  /rest/api/3/user/search  : identity resolution by display name
- POST /rest/api/3/search/jql   : structured issue search

Requests use basic auth with the configured email/API token and are never
retried; callers decide whether to continue without tracker data.
"""
from typing import Any, Dict, List, Optional

import requests

from people_journal.core.config import Settings, get_settings
from people_journal.core.exceptions import (
    ConfigurationMissingError,
    NotFoundError,
    ResponseParseError,
    TrackerRequestError,
)
from people_journal.core.logging_config import get_logger
from people_journal.tracker.schema import DEFAULT_SCHEMA, FieldSchema, schema_from_metadata

logger = get_logger(__name__)

SEARCH_MAX_RESULTS = 50


def _account_id(user: Dict[str, Any], display_name: str) -> str:
    account_id = user.get("accountId")
    if not isinstance(account_id, str) or not account_id:
        raise NotFoundError(
            f"jira: matched user for {display_name!r} has no account id",
            details=f"display_name={display_name}",
        )
    return account_id


class TrackerClient:
    """
    Client for the issue tracker's REST API.

    Example:
        >>> client = TrackerClient.from_settings()
        >>> schema = client.discover_field_schema()
        >>> account_id = client.resolve_identity("Jane Doe")
        >>> issues = client.search(f'assignee = "{account_id}"', schema.search_fields())
    """

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: int = 15,
        name_match: str = "lenient",
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Tracker site URL, e.g. https://acme.atlassian.net
            email: Basic auth identity
            api_token: Basic auth secret
            timeout: Per-request timeout in seconds
            name_match: 'lenient' falls back to the first active user when no
                display name matches exactly; 'strict' raises NotFoundError
            session: HTTP session to send requests through
        """
        self.base_url = base_url.rstrip("/")
        self.auth = (email, api_token)
        self.timeout = timeout
        self.name_match = name_match
        self.session = session or requests.Session()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> "TrackerClient":
        """
        Build a client from application settings.

        Raises:
            ConfigurationMissingError: If base URL, email or token is missing
        """
        settings = settings or get_settings()
        if not settings.tracker_configured():
            raise ConfigurationMissingError(
                "Tracker integration needs JIRA_BASE_URL, JIRA_EMAIL and JIRA_API_TOKEN"
            )
        return cls(
            base_url=settings.jira_base_url,
            email=settings.jira_email,
            api_token=settings.jira_api_token,
            timeout=settings.jira_timeout_seconds,
            name_match=settings.jira_name_match,
            session=session,
        )

    def board_url(self, account_id: str) -> str:
        """Link to the person's page on the tracker."""
        return f"{self.base_url}/jira/people/{account_id}"

    # ============================================================
    # HTTP
    # ============================================================

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            TrackerRequestError: On transport failure or non-2xx status
            ResponseParseError: If the body is not valid JSON
        """
        headers = {"Accept": "application/json"}
        if json_body is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = self.session.request(
                method=method,
                url=f"{self.base_url}{path}",
                auth=self.auth,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TrackerRequestError(method, path, None, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise TrackerRequestError(method, path, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(
                f"jira: failed to parse {method} {path} response",
                details=str(e),
            ) from e

    # ============================================================
    # Operations
    # ============================================================

    def discover_field_schema(self) -> FieldSchema:
        """
        Map story points and epic name to this tenant's field ids.

        Never raises: a failed fetch or unusable payload yields DEFAULT_SCHEMA.
        """
        try:
            metadata = self._request("GET", "/rest/api/3/field")
        except (TrackerRequestError, ResponseParseError) as e:
            logger.warning(f"[JIRA] Field discovery failed, using default schema: {e.message}")
            return DEFAULT_SCHEMA

        schema = schema_from_metadata(metadata)
        logger.debug(
            f"[JIRA] Field schema: story_points={list(schema.story_point_fields)}, "
            f"epic_name={schema.epic_name_field}"
        )
        return schema

    def resolve_identity(self, display_name: str) -> str:
        """
        Find the account id for a display name.

        Only active users are considered. A case-insensitive exact match
        wins; otherwise the first active user is returned in lenient mode.

        Raises:
            NotFoundError: If no active user matches (or, in strict mode,
                none matches exactly), or the chosen user has no account id
            TrackerRequestError: If the user search fails
            ResponseParseError: If the response is not a JSON list
        """
        users = self._request("GET", "/rest/api/3/user/search", params={"query": display_name})
        if not isinstance(users, list):
            raise ResponseParseError("jira: user search response is not a list")

        active = [u for u in users if isinstance(u, dict) and u.get("active") is True]
        if not active:
            raise NotFoundError(
                f"jira: no active users found for {display_name!r}",
                details=f"display_name={display_name}",
            )

        wanted = display_name.casefold()
        for user in active:
            name = user.get("displayName")
            if isinstance(name, str) and name.casefold() == wanted:
                return _account_id(user, display_name)

        if self.name_match == "strict":
            raise NotFoundError(
                f"jira: no exact display name match for {display_name!r}",
                details=f"candidates={len(active)}",
            )

        fallback = active[0]
        logger.warning(
            f"[JIRA] No exact match for {display_name!r}, "
            f"using first active user {fallback.get('displayName')!r}"
        )
        return _account_id(fallback, display_name)

    def search(self, jql: str, fields: List[str]) -> List[Dict[str, Any]]:
        """
        Run a JQL query and return raw issue records (at most 50).

        Raises:
            TrackerRequestError: On transport failure or non-2xx status
            ResponseParseError: If the response has no issue list
        """
        body = {
            "jql": jql,
            "fields": fields,
            "maxResults": SEARCH_MAX_RESULTS,
        }
        result = self._request("POST", "/rest/api/3/search/jql", json_body=body)

        if not isinstance(result, dict):
            raise ResponseParseError("jira: search response is not an object")

        issues = result.get("issues")
        if issues is None:
            return []
        if not isinstance(issues, list):
            raise ResponseParseError("jira: search response 'issues' is not a list")
        return issues
