"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- health.py  : Health check endpoints
- team.py    : Team member management
- entries.py : Journal entries
- prep.py    : Briefings, extraction and client config
"""
from people_journal.api.routes.entries import router as entries_router
from people_journal.api.routes.health import router as health_router
from people_journal.api.routes.prep import router as prep_router
from people_journal.api.routes.team import router as team_router

__all__ = [
    "entries_router",
    "health_router",
    "prep_router",
    "team_router",
]
