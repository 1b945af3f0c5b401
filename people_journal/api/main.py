"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. CORS configuration
4. Exception handlers
5. Startup/shutdown events

Run with: uvicorn people_journal.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from people_journal.api.routes import entries_router, health_router, prep_router, team_router
from people_journal.api.routes.health import APP_VERSION
from people_journal.core.config import get_settings
from people_journal.core.exceptions import DatabaseError, JournalException
from people_journal.core.logging_config import get_logger, setup_logging
from people_journal.database.connection import get_database
from people_journal.database.init_db import init_tables


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level, settings.log_dir)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create tables and seed the default team
    - Shutdown: close database connections
    """
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"Tracker configured: {settings.tracker_configured()}")
    logger.info(f"LLM configured: {settings.llm_configured()}")

    init_tables()

    yield  # Application runs here

    logger.info(f"Shutting down {settings.app_name}")
    get_database().close()


app = FastAPI(
    title="People Journal API",
    description="""
    Backend for a manager's 1:1 journal.

    ## Features

    - **Team and entries**: Members and their 1:1 notes, scores and action items
    - **Transcript extraction**: Draft an entry from a meeting transcript
    - **Prep briefings**: Journal history, tracker activity and a narrative summary
    """,
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration
# ============================================================

_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
if "*" in _origins:
    logger.warning("CORS configured to allow all origins")


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(JournalException)
async def journal_exception_handler(request: Request, exc: JournalException):
    """Handle all custom journal exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures surface as 503 with the standard error body."""
    logger.error(f"Database error on {request.url.path}: {exc}")
    error = DatabaseError()
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Detailed error information is only included in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "details": str(exc) if settings.is_development() else None,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(team_router)
app.include_router(entries_router)
app.include_router(prep_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": "People Journal API",
        "version": APP_VERSION,
        "documentation": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "people_journal.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development()
    )
