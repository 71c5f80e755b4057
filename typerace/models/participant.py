"""Database model for a user's attempt within a session."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Participant(SQLModel, table=True):
    """Live score and progress of a non-creator user in a session."""

    __table_args__ = (UniqueConstraint("session_id", "user_id"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    session_id: int = ORMField(foreign_key="contest_session.id", index=True)
    user_id: int = ORMField(foreign_key="typing_user.id", index=True)
    score: int = 100
    current_position: int = 0
    is_finished: bool = ORMField(default=False, index=True)
    wpm: Optional[int] = None
    accuracy: Optional[int] = None
    edits_used: Optional[int] = 0
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Participant"]
