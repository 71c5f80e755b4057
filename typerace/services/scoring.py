"""Live score computation from character errors, edits and typing speed."""

from __future__ import annotations

from typing import Optional

# Score: start 100; -2 per wrong char; -5 per edit; speed bonus; clamp 0..200
INITIAL_SCORE = 100
MISTAKE_PENALTY = 2
EDIT_PENALTY = 5
MIN_SCORE = 0
MAX_SCORE = 200

BONUS_WPM_THRESHOLD = 30
BONUS_ACCURACY_THRESHOLD = 90
BONUS_WPM_DIVISOR = 10


def count_correct_chars(target: str, typed: str) -> int:
    """Count matching positions over the overlap of ``typed`` and ``target``."""

    return sum(1 for expected, actual in zip(target, typed) if expected == actual)


def count_mistakes(target: str, typed: str) -> int:
    """Mismatches over the overlap; characters typed past the target are free."""

    return sum(1 for expected, actual in zip(target, typed) if expected != actual)


def speed_bonus(wpm: Optional[float], accuracy: Optional[float]) -> int:
    if wpm is None:
        return 0
    if accuracy is None:
        accuracy = 100
    if wpm > BONUS_WPM_THRESHOLD and accuracy > BONUS_ACCURACY_THRESHOLD:
        return int(wpm // BONUS_WPM_DIVISOR)
    return 0


def clamp_score(value: float) -> int:
    return int(max(MIN_SCORE, min(MAX_SCORE, value)))


def compute_score(
    target: str,
    typed: str,
    edits_used: int = 0,
    wpm: Optional[float] = None,
    accuracy: Optional[float] = None,
) -> int:
    """Score an attempt.

    Starts from ``INITIAL_SCORE``, subtracts ``MISTAKE_PENALTY`` for every
    wrong character in the overlapping prefix and ``EDIT_PENALTY`` for every
    edit used, then adds ``wpm // 10`` when the typist is both fast
    (wpm > 30) and accurate (accuracy > 90). The result always lies in
    ``[MIN_SCORE, MAX_SCORE]``.
    """

    score = INITIAL_SCORE
    score -= MISTAKE_PENALTY * count_mistakes(target, typed)
    score -= EDIT_PENALTY * max(0, edits_used or 0)
    score += speed_bonus(wpm, accuracy)
    return clamp_score(score)


__all__ = [
    "BONUS_ACCURACY_THRESHOLD",
    "BONUS_WPM_THRESHOLD",
    "EDIT_PENALTY",
    "INITIAL_SCORE",
    "MAX_SCORE",
    "MIN_SCORE",
    "MISTAKE_PENALTY",
    "clamp_score",
    "compute_score",
    "count_correct_chars",
    "count_mistakes",
    "speed_bonus",
]
