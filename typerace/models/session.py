"""Database model for contest sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class ContestSession(SQLModel, table=True):
    """One timed contest, joined through its 7-digit code."""

    __tablename__ = "contest_session"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    code: str = ORMField(index=True, unique=True, max_length=7)
    creator_id: int = ORMField(foreign_key="typing_user.id", index=True)
    is_active: bool = True
    challenge_text: Optional[str] = None
    challenge_started: bool = False
    start_time: Optional[datetime] = None
    word_count: Optional[int] = None
    allow_editing: Optional[bool] = None
    max_edits: Optional[int] = None
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["ContestSession"]
