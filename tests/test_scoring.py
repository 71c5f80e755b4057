import pytest

from typerace.services.scoring import (
    MAX_SCORE,
    MIN_SCORE,
    compute_score,
    count_correct_chars,
    count_mistakes,
    speed_bonus,
)


def test_perfect_prefix_keeps_initial_score():
    assert compute_score("hello world", "hello") == 100


def test_each_mistake_costs_two_points():
    assert compute_score("abcde", "abXdY") == 96


def test_edits_cost_five_points_each():
    # two edits, no wrong characters, no speed
    assert compute_score("abcde", "abc", edits_used=2, wpm=0, accuracy=100) == 90


def test_speed_bonus_requires_fast_and_accurate():
    assert speed_bonus(45, 95) == 4
    assert speed_bonus(30, 100) == 0
    assert speed_bonus(80, 90) == 0
    assert speed_bonus(None, 100) == 0
    assert compute_score("abc", "abc", wpm=65, accuracy=100) == 106


def test_characters_past_target_are_not_penalised():
    assert count_mistakes("abc", "abcxyz") == 0
    assert count_correct_chars("abc", "abcxyz") == 3
    assert compute_score("abc", "abcxyz") == 100


@pytest.mark.parametrize(
    "target, typed, edits, wpm, accuracy",
    [
        ("a" * 500, "b" * 500, 0, 0, 0),
        ("abc", "abc", 1000, 0, 100),
        ("abc", "abc", 0, 10_000, 100),
        ("", "", 0, None, None),
    ],
)
def test_score_is_clamped(target, typed, edits, wpm, accuracy):
    score = compute_score(target, typed, edits, wpm, accuracy)
    assert MIN_SCORE <= score <= MAX_SCORE


def test_huge_speed_bonus_hits_ceiling():
    assert compute_score("abc", "abc", wpm=5000, accuracy=100) == MAX_SCORE
