"""Helpers for contest users."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.errors import NotFound, ValidationFailure
from ..core.time import isoformat_z
from ..models import TypingUser

logger = structlog.get_logger(__name__)

MAX_NAME_LENGTH = 40
MAX_TRAINING_NUMBER_LENGTH = 40


def _find_user(db: Session, name: str, training_number: str) -> Optional[TypingUser]:
    return db.exec(
        select(TypingUser).where(
            TypingUser.name == name,
            TypingUser.training_number == training_number,
        )
    ).first()


def resolve_or_create_user(db: Session, name: str, training_number: str) -> TypingUser:
    """Return the user with this name and training number, creating it if needed."""

    name = (name or "").strip()
    training_number = (training_number or "").strip()
    if not name or not training_number:
        raise ValidationFailure("Name and training number are required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationFailure(f"Name must be {MAX_NAME_LENGTH} characters or less")
    if len(training_number) > MAX_TRAINING_NUMBER_LENGTH:
        raise ValidationFailure(
            f"Training number must be {MAX_TRAINING_NUMBER_LENGTH} characters or less"
        )

    user = _find_user(db, name, training_number)
    if user:
        return user

    user = TypingUser(name=name, training_number=training_number)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same pair first.
        db.rollback()
        user = _find_user(db, name, training_number)
        if user is None:
            raise
        return user
    db.refresh(user)
    logger.info("User created", user_id=user.id, name=user.name)
    return user


def get_user(db: Session, user_id: int) -> TypingUser:
    user = db.get(TypingUser, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def user_to_dict(user: TypingUser) -> Dict[str, Any]:
    """Serialise a user model to API-friendly dict."""

    return {
        "id": user.id,
        "name": user.name,
        "training_number": user.training_number,
        "created_at": isoformat_z(user.created_at),
    }


__all__ = ["get_user", "resolve_or_create_user", "user_to_dict"]
