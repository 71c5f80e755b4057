"""Session and global leaderboard ordering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional

from ..core.config import GLOBAL_LEADERBOARD_LIMIT


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    record: Any


def _performance_key(record) -> tuple:
    return (-record.score, -(record.wpm or 0), -(record.accuracy or 0))


def _assign_ranks(records: Iterable[Any]) -> List[RankedEntry]:
    return [RankedEntry(rank=index, record=record) for index, record in enumerate(records, 1)]


def rank_session(records: Iterable[Any]) -> List[RankedEntry]:
    """Rank every participant of one session.

    Finished attempts come first, then higher score, WPM and accuracy. Ranks
    are positional, and records with identical keys keep their input order.
    """

    ordered = sorted(
        records, key=lambda record: (not record.is_finished, *_performance_key(record))
    )
    return _assign_ranks(ordered)


def best_per_user(records: Iterable[Any]) -> List[Any]:
    """Keep each user's highest-scoring record; the first one seen wins a tie."""

    best: Dict[Hashable, Any] = {}
    for record in records:
        existing = best.get(record.user_id)
        if existing is None or record.score > existing.score:
            best[record.user_id] = record
    return list(best.values())


def rank_global(
    records: Iterable[Any], limit: Optional[int] = GLOBAL_LEADERBOARD_LIMIT
) -> List[RankedEntry]:
    """Rank each user's best finished attempt across all sessions."""

    finished = [record for record in records if record.is_finished]
    ordered = sorted(best_per_user(finished), key=_performance_key)
    if limit is not None:
        ordered = ordered[:limit]
    return _assign_ranks(ordered)


__all__ = ["RankedEntry", "best_per_user", "rank_global", "rank_session"]
