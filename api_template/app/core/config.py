"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
template runs out of the box; in a real deployment override them via
environment variables (for example from a ``.env`` file loaded by the
process manager or a container orchestrator).
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: str = "") -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


_ENVIRONMENT = os.getenv("ENVIRONMENT", "Development")


def _default_log_level(environment: str) -> str:
    env = environment.lower()
    if env == "development":
        return "DEBUG"
    if env == "production":
        return "WARNING"
    return "INFO"


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "API Template")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    description: str = os.getenv(
        "API_DESCRIPTION",
        "Template for a versioned REST CRUD API with health checks, "
        "structured logging and OpenAPI documentation.",
    )
    contact_name: str = os.getenv("CONTACT_NAME", "")
    contact_email: str = os.getenv("CONTACT_EMAIL", "")
    contact_url: str = os.getenv("CONTACT_URL", "")

    # Deployment environment: ``Development``, ``Staging`` or ``Production``.
    environment: str = _ENVIRONMENT
    log_level: str = os.getenv("LOG_LEVEL", _default_log_level(_ENVIRONMENT))
    # Directory for rotating log files.  Empty disables file logging.
    log_dir: str = os.getenv("LOG_DIR", "")

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "api_template.db")
    # Seconds SQLite waits on a locked database before giving up.
    database_timeout: float = float(_env_int("DATABASE_TIMEOUT", 30))
    seed_sample_data: bool = _env_bool("SEED_SAMPLE_DATA", _ENVIRONMENT.lower() == "development")

    # An empty origin list means "allow any origin".
    cors_allowed_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ALLOWED_ORIGINS"))
    cors_allow_credentials: bool = _env_bool("CORS_ALLOW_CREDENTIALS", False)

    supported_api_versions: List[str] = field(
        default_factory=lambda: _env_list("SUPPORTED_API_VERSIONS", "1.0")
    )

    default_page_size: int = _env_int("DEFAULT_PAGE_SIZE", 10)
    max_page_size: int = _env_int("MAX_PAGE_SIZE", 100)

    health_checks_enabled: bool = _env_bool("HEALTH_CHECKS_ENABLED", True)
    health_database_check_enabled: bool = _env_bool("HEALTH_DATABASE_CHECK_ENABLED", True)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
