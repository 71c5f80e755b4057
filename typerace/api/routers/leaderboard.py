"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from ...core import GLOBAL_LEADERBOARD_LIMIT, get_session
from ...models import ContestSession, Participant, TypingUser
from ...services.leaderboard import rank_global, rank_session
from ...services.sessions import fetch_participants, participant_to_dict

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard/session/{session_id}")
def get_session_leaderboard(session_id: int, session: Session = Depends(get_session)):
    """Rank every participant of a session, finished attempts first."""

    rows = fetch_participants(session, session_id)
    users = {participant.id: user for participant, user in rows}
    ranked = rank_session(participant for participant, _ in rows)

    return {
        "session_id": session_id,
        "entries": [
            {
                "rank": entry.rank,
                **participant_to_dict(entry.record, users[entry.record.id]),
            }
            for entry in ranked
        ],
    }


@router.get("/leaderboard/global")
def get_global_leaderboard(
    limit: int = Query(GLOBAL_LEADERBOARD_LIMIT, ge=1, le=GLOBAL_LEADERBOARD_LIMIT),
    session: Session = Depends(get_session),
):
    """Best finished attempt of each user across all sessions."""

    rows = session.exec(
        select(Participant, TypingUser, ContestSession)
        .join(TypingUser, Participant.user_id == TypingUser.id)
        .join(ContestSession, Participant.session_id == ContestSession.id)
        .where(Participant.is_finished == True)  # noqa: E712
        .order_by(Participant.id)
    ).all()

    users = {participant.id: user for participant, user, _ in rows}
    codes = {participant.id: contest.code for participant, _, contest in rows}
    ranked = rank_global((participant for participant, _, _ in rows), limit=limit)

    entries: List[Dict[str, Any]] = []
    for entry in ranked:
        participant = entry.record
        entries.append(
            {
                "rank": entry.rank,
                **participant_to_dict(participant, users[participant.id]),
                "session_code": codes[participant.id],
            }
        )
    return {"entries": entries}


__all__ = ["router"]
