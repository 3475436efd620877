"""
Centralized configuration module for application-wide settings.

Every setting is read from environment variables (optionally loaded from a
``.env`` file by ``main.py``). Values are resolved once at import time and
exposed as module-level constants, with ``log_*`` helpers called during
application startup for visibility.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("true", "1", "yes")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY_VALUES


# ===========================
# Environment
# ===========================


def get_environment() -> str:
    """Return the deployment environment name (FLASK_ENV, default development)."""
    return os.getenv("FLASK_ENV", "development")


def is_production() -> bool:
    return get_environment() == "production"


def is_testing() -> bool:
    """True when running under the test suite (TESTING env var)."""
    return _env_flag("TESTING", "false")


# ===========================
# Database Configuration
# ===========================

DEFAULT_DATABASE_URL = "sqlite:///./gym.db"


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL (e.g. postgresql://user:pw@host/gym)
            Default: sqlite:///./gym.db

    Heroku/Render style ``postgres://`` URLs are rewritten to the
    ``postgresql://`` scheme SQLAlchemy expects.
    """
    url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'Europe/Istanbul', 'UTC')
            Default: 'UTC'

    The timezone only affects calendar-day boundaries (for example the
    "visits today" dashboard counter). Timestamps are always stored in UTC.
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


# Global timezone instance - initialized once at import time
APP_TZ = get_app_timezone()


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_today(now: Optional[datetime] = None) -> datetime:
    """Local midnight (in APP_TZ) of the current day, expressed in UTC."""
    local_now = (now or utcnow()).astimezone(APP_TZ)
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


def log_timezone_config():
    """Log the active timezone configuration."""
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )


# ===========================
# Logging Configuration
# ===========================


def get_log_level() -> str:
    default = "INFO" if is_production() else "DEBUG"
    return os.getenv("LOG_LEVEL", default).upper()


def get_log_to_file() -> bool:
    """LOG_TO_FILE=1 writes rotating files under backend/logs (default off)."""
    return _env_flag("LOG_TO_FILE", "false")


def get_log_json() -> bool:
    """JSON console logs; defaults to on in production."""
    return _env_flag("LOG_JSON", "true" if is_production() else "false")


def get_sql_echo() -> bool:
    """SQL_ECHO=1 logs every statement with its duration."""
    return _env_flag("SQL_ECHO", "false")


# ===========================
# Rate Limiting Configuration
# ===========================


def get_rate_limit_enabled() -> bool:
    """
    Whether Flask-Limiter enforces limits.

    Environment Variables:
        RATE_LIMIT_ENABLED: "0" disables limits (used by the test suite)
            Default: '1'
    """
    return _env_flag("RATE_LIMIT_ENABLED", "1")


def get_limiter_storage_uri() -> str:
    return os.getenv("LIMITER_STORAGE_URI", "memory://")
