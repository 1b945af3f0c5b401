"""
API module - FastAPI routes and HTTP handling.

This module handles:
- Request validation and parsing
- Response formatting
- Error handling
- Route definitions

The application lives in people_journal.api.main; it is not imported
here so that importing routes or deps does not configure logging.
"""
