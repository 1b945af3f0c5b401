"""
API dependencies for dependency injection.

Routes receive their collaborators through FastAPI's Depends so tests can
swap them with app.dependency_overrides.
"""
from people_journal.core.config import Settings, get_settings
from people_journal.database.repository import JournalRepository
from people_journal.services.briefing_service import BriefingService, get_briefing_service
from people_journal.services.extraction_service import ExtractionService, get_extraction_service


def get_repository() -> JournalRepository:
    """Repository over the default database."""
    return JournalRepository()


def get_app_settings() -> Settings:
    return get_settings()


def get_briefing() -> BriefingService:
    return get_briefing_service()


def get_extraction() -> ExtractionService:
    return get_extraction_service()
