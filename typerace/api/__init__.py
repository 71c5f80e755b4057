"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI

from ..core.errors import register_error_handlers
from .routers import ALL_ROUTERS


def register_api(app: FastAPI) -> None:
    """Attach the domain error handlers and every router to ``app``."""

    register_error_handlers(app)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["register_api"]
