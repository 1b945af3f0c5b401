"""
People Journal backend package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, and exceptions
- database/  : SQLAlchemy models and the journal repository
- cache/     : TTL-bounded result cache
- tracker/   : Issue tracker client and activity aggregation
- llm/       : Text generation client and prompt construction
- services/  : Briefing assembly and transcript extraction
- models/    : Pydantic models for request/response schemas
"""
