"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CODE_GENERATION_ATTEMPTS,
    COOKIE_DOMAIN,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
    DB_RESET,
    DEFAULT_MAX_EDITS,
    DEFAULT_WORD_COUNT,
    GLOBAL_LEADERBOARD_LIMIT,
    SECRET_KEY,
)
from .database import engine, get_session
from .errors import (
    CodeAllocationFailed,
    ContestError,
    NotFound,
    PolicyViolation,
    ValidationFailure,
    register_error_handlers,
)
from .logging import configure_logging
from .time import elapsed_seconds, isoformat_z, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CODE_GENERATION_ATTEMPTS",
    "CodeAllocationFailed",
    "COOKIE_DOMAIN",
    "COOKIE_SAMESITE",
    "COOKIE_SECURE",
    "DB_RESET",
    "DEFAULT_MAX_EDITS",
    "DEFAULT_WORD_COUNT",
    "GLOBAL_LEADERBOARD_LIMIT",
    "SECRET_KEY",
    "ContestError",
    "NotFound",
    "PolicyViolation",
    "ValidationFailure",
    "configure_logging",
    "elapsed_seconds",
    "engine",
    "get_session",
    "isoformat_z",
    "register_error_handlers",
    "utcnow",
]
