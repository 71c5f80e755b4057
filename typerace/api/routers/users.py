"""User login and profile endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlmodel import Session

from ...core import get_session
from ...services.users import get_user, resolve_or_create_user, user_to_dict

router = APIRouter(tags=["users"])


@router.post("/users/login")
def login_user(
    body: Dict[str, Any], request: Request, session: Session = Depends(get_session)
):
    """Login or register a user by name and training number."""

    user = resolve_or_create_user(
        session,
        str(body.get("name") or ""),
        str(body.get("training_number") or body.get("trainingNumber") or ""),
    )
    request.session["uid"] = user.id
    return user_to_dict(user)


@router.get("/users/me")
def current_user(request: Request, session: Session = Depends(get_session)):
    """Return the user remembered by the session cookie."""

    uid = request.session.get("uid")
    if not uid:
        raise HTTPException(404, "Not logged in")
    return user_to_dict(get_user(session, int(uid)))


@router.post("/users/logout")
def logout_user(request: Request) -> Dict[str, bool]:
    request.session.pop("uid", None)
    return {"ok": True}


@router.get("/users/{user_id}")
def read_user(user_id: int, session: Session = Depends(get_session)):
    return user_to_dict(get_user(session, user_id))


__all__ = ["router"]
