"""
Health Check Routes - System health and monitoring endpoints.
"""
from fastapi import APIRouter

from people_journal.core.logging_config import get_logger
from people_journal.database.connection import get_database
from people_journal.models.briefing import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)

APP_VERSION = "0.1.0"


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
)
def health_check() -> HealthResponse:
    """
    Perform a basic health check.

    Verifies that the API is running; does not touch the database,
    the tracker or the LLM.
    """
    logger.debug("Health check requested")
    return HealthResponse(status="healthy", version=APP_VERSION)


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
)
def readiness_check() -> HealthResponse:
    """Ready when the journal database answers a trivial query."""
    logger.debug("Readiness check requested")
    db_ok = get_database().check_connection()
    return HealthResponse(
        status="ready" if db_ok else "degraded",
        version=APP_VERSION,
        database="ok" if db_ok else "unavailable",
    )
