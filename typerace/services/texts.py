"""Sample paragraphs used as challenge texts."""

from __future__ import annotations

import random
from typing import List, Optional

SAMPLE_TEXTS: List[str] = [
    "In the fast moving world of technology, programming plays an important role in shaping "
    "our digital future. By learning different programming languages we can build applications "
    "that solve everyday problems and improve the quality of life. Mastering fast and accurate "
    "typing is an important foundation for every programmer and developer, because it raises "
    "productivity and reduces mistakes in the code.",
    "Online learning has become an essential part of the modern education system. It gives "
    "students and teachers a great deal of flexibility, since learning material can be reached "
    "at any time and from any place. It also helps learners develop the habit of studying on "
    "their own and relying on themselves to gain new knowledge and skills.",
    "Artificial intelligence has developed rapidly in recent years and now touches every part "
    "of our daily lives. From self driving cars to smart voice assistants, we see practical "
    "uses of artificial intelligence everywhere. This progress requires technology specialists "
    "to keep up with the latest developments and techniques in order to stay ahead.",
    "Cyber security has become one of the biggest challenges of the digital age. As online "
    "attacks and security threats grow, companies and institutions need complete strategies to "
    "protect their data and sensitive information. This calls for serious investment in modern "
    "technology and for training staff in the best security practices.",
    "Electronic commerce has changed the way shoppers buy and interact with brands. Digital "
    "platforms offer a comfortable and flexible shopping experience that lets customers compare "
    "prices and products with ease. This shift has led to strong growth in online trade and "
    "created new jobs in digital marketing and logistics services.",
]


def truncate_words(text: str, word_count: int) -> str:
    words = text.split(" ")
    return " ".join(words[: max(0, min(word_count, len(words)))])


def generate_challenge_text(
    word_count: int, rng: Optional[random.Random] = None
) -> str:
    """Pick a sample paragraph and cut it down to ``word_count`` words."""

    chooser = rng or random
    return truncate_words(chooser.choice(SAMPLE_TEXTS), word_count)


__all__ = ["SAMPLE_TEXTS", "generate_challenge_text", "truncate_words"]
