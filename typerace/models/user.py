"""Database model for contest users."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class TypingUser(SQLModel, table=True):
    """Contestant identified by display name and training number."""

    __tablename__ = "typing_user"
    __table_args__ = (UniqueConstraint("name", "training_number"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str = ORMField(index=True)
    training_number: str
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["TypingUser"]
