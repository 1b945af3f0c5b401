"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- Tracker, cache and narrative failures are caught by the services and
  degrade the briefing instead of reaching the API layer
"""
from typing import Optional


class JournalException(Exception):
    """
    Base exception for all journal backend errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(JournalException):
    """Raised when a member, entry or tracker identity does not exist."""
    status_code = 404
    error_code = "not_found"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, details)


class DatabaseError(JournalException):
    """Raised when the journal store fails."""
    status_code = 503
    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)


class TrackerRequestError(JournalException):
    """
    Raised when the issue tracker answers with a non-success status.

    upstream_status is None when the request never got a response
    (connection refused, timeout, DNS failure).
    """
    status_code = 502
    error_code = "tracker_request_error"

    def __init__(self, method: str, path: str, upstream_status: Optional[int], body: str):
        if upstream_status is None:
            message = f"jira: {method} {path} failed: {body}"
        else:
            message = f"jira: {method} {path} returned {upstream_status}: {body}"
        super().__init__(message, details=f"status={upstream_status}")
        self.method = method
        self.path = path
        self.upstream_status = upstream_status
        self.body = body


class ResponseParseError(JournalException):
    """Raised when an upstream response body cannot be decoded."""
    status_code = 502
    error_code = "response_parse_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, details)


class ConfigurationMissingError(JournalException):
    """Raised when a feature needs credentials that are not configured."""
    status_code = 503
    error_code = "configuration_missing"

    def __init__(self, message: str):
        super().__init__(message)


class LLMError(JournalException):
    """Raised when text generation calls fail."""
    status_code = 503
    error_code = "llm_error"

    def __init__(self, message: str = "LLM service unavailable"):
        super().__init__(message)
