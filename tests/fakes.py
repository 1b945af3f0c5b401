"""
Test doubles shared across the suite.

Fakes replace the HTTP session, the LLM client and the clock; the
journal store is always a real SQLite database.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from people_journal.core.config import Settings


class FakeClock:
    """Mutable clock returning naive UTC datetimes."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """
    Stands in for requests.Session.

    Routes are keyed by (method, path); a value may be a FakeResponse,
    an exception to raise, or a list consumed one item per call.
    """

    def __init__(self, routes: Optional[Dict[tuple, Any]] = None):
        self.routes = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, **kwargs):
        path = url.split("://", 1)[-1]
        path = path[path.index("/"):] if "/" in path else ""
        self.calls.append({"method": method, "url": url, "path": path, **kwargs})

        route = self.routes.get((method, path))
        if isinstance(route, list):
            route = route.pop(0) if route else None
        if route is None:
            return FakeResponse(404, text="no route")
        if isinstance(route, Exception):
            raise route
        return route

    def calls_to(self, method: str, path: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


class FakeLLM:
    """Records prompts and returns a canned completion."""

    def __init__(self, reply: str = "**Follow up on**\n- check in", configured: bool = True,
                 error: Optional[Exception] = None):
        self.reply = reply
        self.configured = configured
        self.error = error
        self.prompts: List[str] = []

    def is_configured(self) -> bool:
        return self.configured

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def make_settings(**overrides) -> Settings:
    """Settings with tracker and LLM unset unless overridden."""
    values = dict(
        app_name="PeopleJournal",
        app_env="test",
        log_level="WARNING",
        log_dir=None,
        cors_origins="*",
        database_url="sqlite://",
        groq_api_key="",
        google_api_key="",
        llm_model="llama-3.3-70b-versatile",
        llm_model_fallback="gemini-2.0-flash",
        llm_temperature=0.2,
        llm_max_tokens=1000,
        jira_base_url="",
        jira_email="",
        jira_api_token="",
        jira_name_match="lenient",
        jira_timeout_seconds=15,
        cache_ttl_days=30,
        prep_entry_limit=5,
    )
    values.update(overrides)
    return Settings(**values)


def tracker_settings(**overrides) -> Settings:
    return make_settings(
        jira_base_url="https://acme.atlassian.net",
        jira_email="manager@acme.test",
        jira_api_token="token",
        **overrides,
    )


def issue(key: str, status: str, points: Any = None, flagged: Any = None,
          epic: Optional[str] = None, summary: str = "") -> Dict[str, Any]:
    fields: Dict[str, Any] = {"summary": summary or f"Work on {key}", "status": {"name": status}}
    if points is not None:
        fields["customfield_10016"] = points
    if flagged is not None:
        fields["flagged"] = flagged
    if epic is not None:
        fields["customfield_10014"] = epic
    return {"key": key, "fields": fields}


