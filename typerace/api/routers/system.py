"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core import DEFAULT_MAX_EDITS, DEFAULT_WORD_COUNT, GLOBAL_LEADERBOARD_LIMIT
from ...services.progress import UNLIMITED_EDITS
from ...services.scoring import INITIAL_SCORE, MAX_SCORE, MIN_SCORE

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose contest defaults to the frontend."""

    return {
        "default_word_count": DEFAULT_WORD_COUNT,
        "default_max_edits": DEFAULT_MAX_EDITS,
        "unlimited_edits": UNLIMITED_EDITS,
        "initial_score": INITIAL_SCORE,
        "score_range": [MIN_SCORE, MAX_SCORE],
        "global_leaderboard_limit": GLOBAL_LEADERBOARD_LIMIT,
    }


__all__ = ["router"]
