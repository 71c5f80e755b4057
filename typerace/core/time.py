"""Time helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_z(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return as_utc(value).replace(tzinfo=None).isoformat() + "Z"


def elapsed_seconds(start: Optional[datetime], now: Optional[datetime] = None) -> int:
    """Whole seconds since ``start``, floored; 0 before the start or without one."""
    if start is None:
        return 0
    delta = as_utc(now or utcnow()) - as_utc(start)
    return max(0, int(delta.total_seconds()))


__all__ = ["as_utc", "elapsed_seconds", "isoformat_z", "utcnow"]
