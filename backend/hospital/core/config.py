"""
Centralized configuration module for application-wide settings.

All settings come from environment variables (optionally loaded from a
``.env`` file by ``main.py``). Values are read through small getter
functions so tests can override the environment before the app is built.
"""

import logging
import os
from datetime import datetime
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")

# ===========================
# Environment
# ===========================


def get_environment() -> str:
    """Return the deployment environment name (``development`` by default)."""
    return os.getenv("FLASK_ENV", "development")


def is_production() -> bool:
    return get_environment() == "production"


def is_testing() -> bool:
    return os.getenv("TESTING", "").lower().strip() in _TRUTHY


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///./hospital.db")


# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'America/Sao_Paulo', 'UTC')
            Default: 'UTC'
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


# Global timezone instance - initialized once at import time
APP_TZ = get_app_timezone()


def now_local() -> datetime:
    """Current wall-clock time in the application timezone, without tzinfo.

    Appointment and record timestamps are stored as local date-times, so
    every "now" comparison in the services goes through this function.
    """
    return datetime.now(APP_TZ).replace(tzinfo=None, microsecond=0)


def log_timezone_config():
    """Log the active timezone configuration at startup."""
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
# Scheduling Configuration
# ===========================


def get_consulta_duracao_minutos() -> int:
    """
    Length of one appointment slot in minutes.

    Environment Variables:
        CONSULTA_DURACAO_MINUTOS: positive integer, default 30
    """
    raw = os.getenv("CONSULTA_DURACAO_MINUTOS", "30")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid CONSULTA_DURACAO_MINUTOS, using 30",
            extra={"context": {"value": raw}},
        )
        return 30
    if value <= 0:
        logger.warning(
            "CONSULTA_DURACAO_MINUTOS must be positive, using 30",
            extra={"context": {"value": raw}},
        )
        return 30
    return value


# ===========================
# Error Reporting Configuration
# ===========================


def get_expose_error_details() -> bool:
    """
    Whether unhandled error messages are included in 500 responses.

    Environment Variables:
        EXPOSE_ERROR_DETAILS: Default 'true' outside production, 'false' in production
    """
    default = "false" if is_production() else "true"
    return os.getenv("EXPOSE_ERROR_DETAILS", default).lower() in _TRUTHY


# ===========================
# Rate Limiting Configuration
# ===========================


def get_rate_limit_enabled() -> bool:
    """Rate limiting is on unless RATE_LIMIT_ENABLED is set to a falsy value."""
    return os.getenv("RATE_LIMIT_ENABLED", "1").lower() in _TRUTHY


def get_rate_limit_default() -> str:
    return os.getenv("RATE_LIMIT_DEFAULT", "200 per hour;50 per minute")


def get_limiter_storage_uri() -> str:
    return os.getenv("LIMITER_STORAGE_URI", "memory://")


# ===========================
# Logging Configuration
# ===========================


def get_log_level() -> str:
    default = "INFO" if is_production() else "DEBUG"
    return os.getenv("LOG_LEVEL", default).upper()


def get_log_to_file() -> bool:
    """LOG_TO_FILE=1 writes rotating log files under ``logs/``; off in tests."""
    default = "0" if is_testing() else "1"
    return os.getenv("LOG_TO_FILE", default).lower() in _TRUTHY


def get_slow_query_threshold_ms() -> int:
    """Statements slower than ALERT_QUERY_MS_THRESHOLD (default 100 ms) are logged."""
    try:
        return int(os.getenv("ALERT_QUERY_MS_THRESHOLD", "100"))
    except ValueError:
        return 100


def get_slow_query_alerts_enabled() -> bool:
    return os.getenv("ALERT_SLOW_QUERY_ENABLED", "1").lower() in _TRUTHY
