"""Contest session lifecycle: creation, joining, starting and progress."""

from __future__ import annotations

import random
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import structlog
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.config import CODE_GENERATION_ATTEMPTS, DEFAULT_MAX_EDITS, DEFAULT_WORD_COUNT
from ..core.errors import (
    CodeAllocationFailed,
    NotFound,
    PolicyViolation,
    ValidationFailure,
)
from ..core.time import elapsed_seconds, isoformat_z, utcnow
from ..models import ContestSession, Participant, TypingUser
from .progress import UNLIMITED_EDITS, AttemptResult, AttemptTracker, EditPolicy
from .texts import generate_challenge_text
from .users import get_user

logger = structlog.get_logger(__name__)

CODE_LENGTH = 7


def generate_session_code(rng: Optional[random.Random] = None) -> str:
    """Random 7-digit code without a leading zero."""

    chooser = rng or random
    return str(chooser.randint(10 ** (CODE_LENGTH - 1), 10**CODE_LENGTH - 1))


def normalize_code(code: str) -> str:
    normalized = (code or "").strip()
    if len(normalized) != CODE_LENGTH or not normalized.isdigit():
        raise ValidationFailure(f"Session code must be {CODE_LENGTH} digits")
    return normalized


def create_session(
    db: Session,
    creator_id: int,
    word_count: Optional[int] = None,
    allow_editing: bool = True,
    max_edits: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> ContestSession:
    """Open a new session owned by ``creator_id`` under a fresh unique code.

    Code uniqueness is enforced by the unique index on ``code``: a colliding
    insert is rolled back and retried with another code.
    """

    get_user(db, creator_id)

    word_count = DEFAULT_WORD_COUNT if word_count is None else int(word_count)
    if word_count < 1:
        raise ValidationFailure("Word count must be at least 1")

    if not allow_editing:
        max_edits = 0
    elif max_edits is None:
        max_edits = DEFAULT_MAX_EDITS
    if max_edits < UNLIMITED_EDITS:
        raise ValidationFailure("Max edits must be -1 (unlimited) or zero or more")

    for _ in range(CODE_GENERATION_ATTEMPTS):
        code = generate_session_code(rng)
        session = ContestSession(
            code=code,
            creator_id=creator_id,
            word_count=word_count,
            allow_editing=bool(allow_editing),
            max_edits=max_edits,
        )
        db.add(session)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Session code collision, retrying", code=code)
            continue
        db.refresh(session)
        logger.info(
            "Session created",
            session_id=session.id,
            code=session.code,
            creator_id=creator_id,
        )
        return session

    logger.error(
        "Session code allocation failed",
        creator_id=creator_id,
        attempts=CODE_GENERATION_ATTEMPTS,
    )
    raise CodeAllocationFailed("Could not allocate a unique session code, try again")


def get_session_by_id(db: Session, session_id: int) -> ContestSession:
    session = db.get(ContestSession, session_id)
    if not session:
        raise NotFound("Session not found")
    return session


def get_session_by_code(db: Session, code: str) -> ContestSession:
    session = db.exec(
        select(ContestSession).where(ContestSession.code == normalize_code(code))
    ).first()
    if not session:
        raise NotFound("Session not found")
    return session


def get_participant(db: Session, session_id: int, user_id: int) -> Optional[Participant]:
    return db.exec(
        select(Participant).where(
            Participant.session_id == session_id,
            Participant.user_id == user_id,
        )
    ).first()


def join_session(db: Session, code: str, user_id: int) -> ContestSession:
    """Join by code; the creator only observes and repeat joins are no-ops."""

    get_user(db, user_id)
    try:
        session = get_session_by_code(db, code)
    except NotFound:
        raise NotFound("Session not found or inactive") from None
    if not session.is_active:
        raise NotFound("Session not found or inactive")

    if session.creator_id == user_id:
        return session
    if get_participant(db, session.id, user_id):
        return session

    db.add(Participant(session_id=session.id, user_id=user_id, edits_used=0))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return session
    logger.info("Participant joined", session_id=session.id, user_id=user_id)
    return session


def start_challenge(
    db: Session,
    session_id: int,
    user_id: int,
    challenge_text: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ContestSession:
    """Stamp the start time and challenge text; a started session is left as is."""

    session = get_session_by_id(db, session_id)
    if session.creator_id != user_id:
        raise PolicyViolation("Only the session creator can start the challenge")
    if session.challenge_started:
        return session
    if not session.is_active:
        raise PolicyViolation("Session is closed")

    if challenge_text is None:
        challenge_text = generate_challenge_text(session.word_count or DEFAULT_WORD_COUNT)
    if not challenge_text.strip():
        raise ValidationFailure("Challenge text must not be empty")

    session.challenge_text = challenge_text
    session.challenge_started = True
    session.start_time = now or utcnow()
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info(
        "Challenge started",
        session_id=session.id,
        characters=len(challenge_text),
    )
    return session


def close_session(db: Session, session_id: int, user_id: int) -> ContestSession:
    session = get_session_by_id(db, session_id)
    if session.creator_id != user_id:
        raise PolicyViolation("Only the session creator can close the session")
    if session.is_active:
        session.is_active = False
        db.add(session)
        db.commit()
        db.refresh(session)
        logger.info("Session closed", session_id=session.id)
    return session


def record_progress(
    db: Session,
    session_id: int,
    user_id: int,
    score: int,
    position: int,
    finished: bool,
    wpm: Optional[int] = None,
    accuracy: Optional[int] = None,
    edits_used: Optional[int] = None,
) -> Participant:
    """Overwrite the participant row.

    A finished attempt is never reopened or changed, and the edit counter
    only ever grows.
    """

    participant = get_participant(db, session_id, user_id)
    if not participant:
        raise NotFound("Participant not found")
    if participant.is_finished:
        return participant

    participant.score = score
    participant.current_position = position
    participant.is_finished = bool(finished)
    participant.wpm = wpm
    participant.accuracy = accuracy
    if edits_used is not None:
        participant.edits_used = max(participant.edits_used or 0, edits_used)
    participant.updated_at = utcnow()
    db.add(participant)
    db.commit()
    db.refresh(participant)
    if participant.is_finished:
        logger.info(
            "Attempt finished",
            session_id=session_id,
            user_id=user_id,
            score=participant.score,
            wpm=participant.wpm,
            accuracy=participant.accuracy,
        )
    return participant


def submit_attempt(
    db: Session,
    session_id: int,
    user_id: int,
    typed: str,
    now: Optional[datetime] = None,
) -> Tuple[Participant, AttemptResult, EditPolicy]:
    """Score the full text typed so far against the session's challenge."""

    session = get_session_by_id(db, session_id)
    participant = get_participant(db, session_id, user_id)
    if not participant:
        raise NotFound("Participant not found")

    tracker = AttemptTracker.from_participant(participant, session)
    if tracker.finished:
        return participant, tracker.result(), tracker.policy

    try:
        result = tracker.apply_input(typed, elapsed_seconds(session.start_time, now))
    except PolicyViolation as exc:
        logger.warning(
            "Attempt input rejected",
            session_id=session_id,
            user_id=user_id,
            reason=exc.message,
        )
        raise

    participant = record_progress(
        db,
        session_id,
        user_id,
        score=result.score,
        position=result.position,
        finished=result.finished,
        wpm=result.wpm,
        accuracy=result.accuracy,
        edits_used=result.edits_used,
    )
    return participant, result, tracker.policy


def fetch_participants(db: Session, session_id: int) -> List[Tuple[Participant, TypingUser]]:
    """Participants of a session joined with their users, in join order."""

    get_session_by_id(db, session_id)
    rows = db.exec(
        select(Participant, TypingUser)
        .join(TypingUser, Participant.user_id == TypingUser.id)
        .where(Participant.session_id == session_id)
        .order_by(Participant.id)
    ).all()
    return list(rows)


def session_to_dict(session: ContestSession) -> Dict[str, Any]:
    """Serialise a session model to API-friendly dict."""

    return {
        "id": session.id,
        "code": session.code,
        "creator_id": session.creator_id,
        "is_active": session.is_active,
        "challenge_text": session.challenge_text,
        "challenge_started": session.challenge_started,
        "start_time": isoformat_z(session.start_time),
        "word_count": session.word_count,
        "allow_editing": session.allow_editing,
        "max_edits": session.max_edits,
        "created_at": isoformat_z(session.created_at),
    }


def participant_to_dict(
    participant: Participant, user: Optional[TypingUser] = None
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": participant.id,
        "session_id": participant.session_id,
        "user_id": participant.user_id,
        "score": participant.score,
        "current_position": participant.current_position,
        "is_finished": participant.is_finished,
        "wpm": participant.wpm,
        "accuracy": participant.accuracy,
        "edits_used": participant.edits_used or 0,
    }
    if user is not None:
        data["user"] = {"id": user.id, "name": user.name, "training_number": user.training_number}
    return data


__all__ = [
    "CODE_LENGTH",
    "close_session",
    "create_session",
    "fetch_participants",
    "generate_session_code",
    "get_participant",
    "get_session_by_code",
    "get_session_by_id",
    "join_session",
    "normalize_code",
    "participant_to_dict",
    "record_progress",
    "session_to_dict",
    "start_challenge",
    "submit_attempt",
]
