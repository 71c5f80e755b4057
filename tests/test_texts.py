import random

from typerace.services.texts import SAMPLE_TEXTS, generate_challenge_text, truncate_words


def test_truncates_to_word_count():
    text = generate_challenge_text(5, rng=random.Random(1))
    assert len(text.split(" ")) == 5
    assert any(sample.startswith(text) for sample in SAMPLE_TEXTS)


def test_word_count_larger_than_paragraph_returns_whole_paragraph():
    assert truncate_words("one two three", 10) == "one two three"


def test_zero_words_is_empty():
    assert truncate_words("one two three", 0) == ""
