"""Domain errors and their HTTP translation."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class ContestError(Exception):
    """Base class for recoverable contest failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(ContestError):
    """Unknown or inactive session, user, or participant."""

    status_code = 404


class ValidationFailure(ContestError):
    """Malformed input such as a bad code or an empty name."""

    status_code = 400


class PolicyViolation(ContestError):
    """Action refused by the session rules, e.g. edits exhausted."""

    status_code = 409


class CodeAllocationFailed(ContestError):
    """No free session code was found within the retry budget."""

    status_code = 503


async def _contest_error_handler(request: Request, exc: ContestError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContestError, _contest_error_handler)


__all__ = [
    "CodeAllocationFailed",
    "ContestError",
    "NotFound",
    "PolicyViolation",
    "ValidationFailure",
    "register_error_handlers",
]
