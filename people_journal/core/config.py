"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

# Values copied verbatim from .env.example count as unset
PLACEHOLDER_VALUES = {"", "your-key-here"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        database_url: SQLAlchemy connection string for the journal store
        groq_api_key: API key for Groq LLM service (empty when unset)
        google_api_key: API key for Google Gemini service (empty when unset)
        llm_model: Groq model identifier
        llm_model_fallback: Gemini model identifier
        jira_base_url: Tracker base URL without trailing slash
        jira_email: Identity used for tracker basic auth
        jira_api_token: Secret used for tracker basic auth
        jira_name_match: 'lenient' or 'strict' identity resolution
        cache_ttl_days: Result cache time-to-live
        prep_entry_limit: Number of journal entries a briefing covers
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_dir: Optional[str]
    cors_origins: str

    # Database settings
    database_url: str

    # LLM settings
    groq_api_key: str
    google_api_key: str
    llm_model: str
    llm_model_fallback: str
    llm_temperature: float
    llm_max_tokens: int

    # Tracker settings
    jira_base_url: str
    jira_email: str
    jira_api_token: str
    jira_name_match: str
    jira_timeout_seconds: int

    # Cache / briefing settings
    cache_ttl_days: int
    prep_entry_limit: int

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"

    def tracker_configured(self) -> bool:
        """Tracker integration needs base URL, identity and secret."""
        return bool(self.jira_base_url and self.jira_email and self.jira_api_token)

    def llm_configured(self) -> bool:
        """Check if at least one text generation provider has a key."""
        return bool(self.groq_api_key or self.google_api_key)


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_secret(key: str) -> str:
    """Get an optional credential, treating placeholders as unset."""
    value = os.environ.get(key, "").strip()
    if value in PLACEHOLDER_VALUES:
        return ""
    return value


def _normalize_database_url(database_url: str) -> str:
    """Select the SQLAlchemy driver for bare postgres:// and mysql:// URLs."""
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    if database_url.startswith("mysql://"):
        database_url = database_url.replace("mysql://", "mysql+pymysql://", 1)
    return database_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    name_match = _get_env("JIRA_NAME_MATCH", "lenient").lower()
    if name_match not in ("lenient", "strict"):
        raise ValueError(
            f"JIRA_NAME_MATCH must be 'lenient' or 'strict', got '{name_match}'"
        )

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "PeopleJournal"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "DEBUG"),
        log_dir=os.environ.get("LOG_DIR") or None,
        cors_origins=_get_env("CORS_ORIGINS", "*"),

        # Database
        database_url=_normalize_database_url(
            _get_env("DATABASE_URL", "sqlite:///./people-journal.db")
        ),

        # LLM
        groq_api_key=_get_secret("GROQ_API_KEY"),
        google_api_key=_get_secret("GOOGLE_API_KEY"),
        llm_model=_get_env("LLM_MODEL", "llama-3.3-70b-versatile"),
        llm_model_fallback=_get_env("LLM_MODEL_FALLBACK", "gemini-2.0-flash"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.2")),
        llm_max_tokens=int(_get_env("LLM_MAX_TOKENS", "1000")),

        # Tracker
        jira_base_url=_get_secret("JIRA_BASE_URL").rstrip("/"),
        jira_email=_get_secret("JIRA_EMAIL"),
        jira_api_token=_get_secret("JIRA_API_TOKEN"),
        jira_name_match=name_match,
        jira_timeout_seconds=int(_get_env("JIRA_TIMEOUT_SECONDS", "15")),

        # Cache / briefing
        cache_ttl_days=int(_get_env("CACHE_TTL_DAYS", "30")),
        prep_entry_limit=int(_get_env("PREP_ENTRY_LIMIT", "5")),
    )
