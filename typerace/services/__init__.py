"""Service layer helpers."""

from .leaderboard import RankedEntry, best_per_user, rank_global, rank_session
from .progress import (
    AttemptState,
    AttemptTracker,
    EditPolicy,
    ProgressSnapshot,
    compute_progress,
)
from .scoring import compute_score
from .texts import generate_challenge_text

__all__ = [
    "AttemptState",
    "AttemptTracker",
    "EditPolicy",
    "ProgressSnapshot",
    "RankedEntry",
    "best_per_user",
    "compute_progress",
    "compute_score",
    "generate_challenge_text",
    "rank_global",
    "rank_session",
]
