"""Contest session endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from ...core import DEFAULT_WORD_COUNT, elapsed_seconds, get_session
from ...services import sessions as contest
from ...services.texts import generate_challenge_text

router = APIRouter(tags=["sessions"])


def _int_field(body: Dict[str, Any], name: str, *, required: bool = True) -> Optional[int]:
    raw = body.get(name)
    if raw is None:
        if required:
            raise HTTPException(400, f"{name} is required")
        return None
    if isinstance(raw, bool):
        raise HTTPException(400, f"{name} must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise HTTPException(400, f"{name} must be an integer") from None


def _bool_field(body: Dict[str, Any], name: str, default: bool) -> bool:
    raw = body.get(name, default)
    if not isinstance(raw, bool):
        raise HTTPException(400, f"{name} must be a boolean")
    return raw


@router.post("/sessions")
def create_session(body: Dict[str, Any], session: Session = Depends(get_session)):
    """Create a session and return its join code."""

    created = contest.create_session(
        session,
        creator_id=_int_field(body, "creator_id"),
        word_count=_int_field(body, "word_count", required=False),
        allow_editing=_bool_field(body, "allow_editing", True),
        max_edits=_int_field(body, "max_edits", required=False),
    )
    return {"session_id": created.id, "code": created.code, "session": contest.session_to_dict(created)}


@router.post("/sessions/join")
def join_session(body: Dict[str, Any], session: Session = Depends(get_session)):
    """Join a session by its 7-digit code."""

    joined = contest.join_session(
        session, str(body.get("code") or ""), _int_field(body, "user_id")
    )
    return {"session_id": joined.id, "session": contest.session_to_dict(joined)}


@router.get("/sessions/code/{code}")
def get_session_by_code(code: str, session: Session = Depends(get_session)):
    return contest.session_to_dict(contest.get_session_by_code(session, code))


@router.get("/sessions/{session_id}")
def get_contest_session(session_id: int, session: Session = Depends(get_session)):
    """Get a session along with the seconds elapsed since its start."""

    found = contest.get_session_by_id(session, session_id)
    return {
        **contest.session_to_dict(found),
        "elapsed_seconds": elapsed_seconds(found.start_time),
    }


@router.get("/sessions/{session_id}/participants")
def list_participants(session_id: int, session: Session = Depends(get_session)):
    rows = contest.fetch_participants(session, session_id)
    return [contest.participant_to_dict(participant, user) for participant, user in rows]


@router.post("/sessions/{session_id}/start")
def start_challenge(
    session_id: int, body: Dict[str, Any], session: Session = Depends(get_session)
):
    """Start the challenge; the text is generated when none is supplied."""

    text = body.get("challenge_text")
    if text is not None and not isinstance(text, str):
        raise HTTPException(400, "challenge_text must be a string")
    started = contest.start_challenge(
        session, session_id, _int_field(body, "user_id"), challenge_text=text
    )
    return contest.session_to_dict(started)


@router.post("/sessions/{session_id}/close")
def close_session(
    session_id: int, body: Dict[str, Any], session: Session = Depends(get_session)
):
    closed = contest.close_session(session, session_id, _int_field(body, "user_id"))
    return contest.session_to_dict(closed)


@router.post("/sessions/{session_id}/progress")
def record_progress(
    session_id: int, body: Dict[str, Any], session: Session = Depends(get_session)
):
    """Overwrite a participant's progress with client-computed values."""

    participant = contest.record_progress(
        session,
        session_id,
        _int_field(body, "user_id"),
        score=_int_field(body, "score"),
        position=_int_field(body, "current_position"),
        finished=_bool_field(body, "is_finished", False),
        wpm=_int_field(body, "wpm", required=False),
        accuracy=_int_field(body, "accuracy", required=False),
        edits_used=_int_field(body, "edits_used", required=False),
    )
    return contest.participant_to_dict(participant)


@router.post("/sessions/{session_id}/attempt")
def submit_attempt(
    session_id: int, body: Dict[str, Any], session: Session = Depends(get_session)
):
    """Submit the full text typed so far and get the recomputed progress."""

    typed = body.get("typed")
    if not isinstance(typed, str):
        raise HTTPException(400, "typed must be a string")

    participant, result, policy = contest.submit_attempt(
        session, session_id, _int_field(body, "user_id"), typed
    )
    return {
        **contest.participant_to_dict(participant),
        "state": result.state.value,
        "edits_remaining": policy.remaining(result.edits_used),
    }


@router.get("/challenge-text")
def challenge_text(word_count: int = Query(DEFAULT_WORD_COUNT, ge=1)) -> Dict[str, str]:
    """Preview a generated challenge text."""

    return {"text": generate_challenge_text(word_count)}


__all__ = ["router"]
