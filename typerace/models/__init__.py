"""Database model exports."""

from .participant import Participant
from .session import ContestSession
from .user import TypingUser

__all__ = [
    "ContestSession",
    "Participant",
    "TypingUser",
]
