"""Typing progress: WPM, accuracy, completion and the edit allowance."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Optional

from ..core.config import DEFAULT_MAX_EDITS
from ..core.errors import PolicyViolation
from .scoring import INITIAL_SCORE, compute_score, count_correct_chars

UNLIMITED_EDITS = -1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def words_per_minute(typed: str, elapsed_seconds: float) -> Optional[int]:
    """Whitespace-separated tokens per elapsed minute; ``None`` before any time passed."""

    if elapsed_seconds <= 0:
        return None
    return _round_half_up(len(typed.split()) / (elapsed_seconds / 60))


def accuracy(target: str, typed: str) -> int:
    """Percentage of typed characters matching the target, 100 when nothing is typed."""

    if not typed:
        return 100
    return _round_half_up(100 * count_correct_chars(target, typed) / len(typed))


@dataclass(frozen=True)
class ProgressSnapshot:
    wpm: Optional[int]
    accuracy: int
    completed: bool


def compute_progress(elapsed_seconds: float, typed: str, target: str) -> ProgressSnapshot:
    return ProgressSnapshot(
        wpm=words_per_minute(typed, elapsed_seconds),
        accuracy=accuracy(target, typed),
        completed=len(typed) >= len(target),
    )


@dataclass(frozen=True)
class EditPolicy:
    """How many deletions a participant may make during one attempt."""

    allow_editing: bool = True
    max_edits: int = DEFAULT_MAX_EDITS

    @classmethod
    def for_session(cls, session) -> "EditPolicy":
        allow = True if session.allow_editing is None else bool(session.allow_editing)
        max_edits = DEFAULT_MAX_EDITS if session.max_edits is None else session.max_edits
        return cls(allow_editing=allow, max_edits=max_edits)

    @property
    def unlimited(self) -> bool:
        return self.allow_editing and self.max_edits == UNLIMITED_EDITS

    def can_edit(self, edits_used: int) -> bool:
        if not self.allow_editing:
            return False
        return self.unlimited or edits_used < self.max_edits

    def remaining(self, edits_used: int) -> Optional[int]:
        if not self.allow_editing:
            return 0
        if self.unlimited:
            return None
        return max(0, self.max_edits - edits_used)

    def refusal_message(self) -> str:
        if not self.allow_editing:
            return "Editing is not allowed in this session"
        return f"All {self.max_edits} edits have been used"


class AttemptState(str, enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class AttemptResult:
    state: AttemptState
    score: int
    position: int
    finished: bool
    wpm: Optional[int]
    accuracy: Optional[int]
    edits_used: int


class AttemptTracker:
    """State machine for one participant's attempt at a challenge text.

    The tracker accepts the full typed text on every update. An input shorter
    than the last accepted one counts as an edit and is refused once the
    policy is exhausted. Reaching the length of the target finishes the
    attempt for good: later inputs are ignored.
    """

    def __init__(
        self,
        target: str,
        policy: EditPolicy,
        *,
        started: bool = True,
        position: int = 0,
        edits_used: int = 0,
        score: int = INITIAL_SCORE,
        wpm: Optional[int] = None,
        accuracy: Optional[int] = None,
        finished: bool = False,
    ) -> None:
        self.target = target
        self.policy = policy
        self.started = started
        self.position = position
        self.edits_used = edits_used
        self.score = score
        self.wpm = wpm
        self.accuracy = accuracy
        if finished:
            self.state = AttemptState.FINISHED
        elif position > 0 or edits_used > 0 or accuracy is not None:
            self.state = AttemptState.IN_PROGRESS
        else:
            self.state = AttemptState.NOT_STARTED

    @classmethod
    def from_participant(cls, participant, session) -> "AttemptTracker":
        return cls(
            session.challenge_text or "",
            EditPolicy.for_session(session),
            started=bool(session.challenge_started),
            position=participant.current_position,
            edits_used=participant.edits_used or 0,
            score=participant.score,
            wpm=participant.wpm,
            accuracy=participant.accuracy,
            finished=participant.is_finished,
        )

    @property
    def finished(self) -> bool:
        return self.state is AttemptState.FINISHED

    @property
    def edits_remaining(self) -> Optional[int]:
        return self.policy.remaining(self.edits_used)

    def result(self) -> AttemptResult:
        return AttemptResult(
            state=self.state,
            score=self.score,
            position=self.position,
            finished=self.finished,
            wpm=self.wpm,
            accuracy=self.accuracy,
            edits_used=self.edits_used,
        )

    def apply_input(self, typed: str, elapsed_seconds: float) -> AttemptResult:
        if not self.started:
            raise PolicyViolation("The challenge has not started yet")
        if self.finished:
            return self.result()

        if len(typed) < self.position:
            if not self.policy.can_edit(self.edits_used):
                raise PolicyViolation(self.policy.refusal_message())
            self.edits_used += 1

        self.position = len(typed)
        if not typed:
            return self.result()

        snapshot = compute_progress(elapsed_seconds, typed, self.target)
        if snapshot.wpm is not None:
            self.wpm = snapshot.wpm
        self.accuracy = snapshot.accuracy
        self.score = compute_score(
            self.target, typed, self.edits_used, self.wpm, self.accuracy
        )
        self.state = (
            AttemptState.FINISHED if snapshot.completed else AttemptState.IN_PROGRESS
        )
        return self.result()


__all__ = [
    "UNLIMITED_EDITS",
    "AttemptResult",
    "AttemptState",
    "AttemptTracker",
    "EditPolicy",
    "ProgressSnapshot",
    "accuracy",
    "compute_progress",
    "words_per_minute",
]
