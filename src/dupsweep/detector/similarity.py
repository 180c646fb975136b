"""Text similarity primitives.

Near-duplicates are scored with a Dice coefficient over overlapping
two-character sequences::

    similarity = 2 * |shared bigrams| / (|bigrams(a)| + |bigrams(b)|)

Shared bigrams are counted with multiplicity: a bigram occurring ``k`` times
in one text and ``m`` times in the other contributes ``min(k, m)``.
"""

from collections import Counter
from typing import Optional

BigramProfile = Counter


def bigrams(text: str) -> BigramProfile:
    """Count the overlapping two-character sequences of a text."""
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def profile_similarity(a: BigramProfile, b: BigramProfile) -> float:
    """Dice coefficient of two bigram profiles.

    Returns:
        Score in [0, 1]; 0.0 if either profile is empty
    """
    total = sum(a.values()) + sum(b.values())
    if total == 0 or not a or not b:
        return 0.0

    if len(a) > len(b):
        a, b = b, a
    shared = sum(min(count, b[gram]) for gram, count in a.items() if gram in b)
    return 2.0 * shared / total


def similarity(text_a: str, text_b: str) -> float:
    """Bigram overlap coefficient of two texts.

    Identical texts score 1.0. Texts too short to contain a bigram score 0.0
    unless they are identical.
    """
    if text_a == text_b:
        return 1.0
    if len(text_a) < 2 or len(text_b) < 2:
        return 0.0
    return profile_similarity(bigrams(text_a), bigrams(text_b))


def decode_text(content: bytes) -> Optional[str]:
    """Decode file content as UTF-8.

    Returns:
        The text, or None if the bytes are not valid UTF-8
    """
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return None


def size_ratio(size_a: int, size_b: int) -> float:
    """Relative size difference ``|a - b| / max(a, b)``; 0.0 for two empty files."""
    largest = max(size_a, size_b)
    if largest == 0:
        return 0.0
    return abs(size_a - size_b) / largest


def within_size_gate(size_a: int, size_b: int, size_threshold: float) -> bool:
    """Check whether two sizes are close enough to be worth comparing."""
    return size_ratio(size_a, size_b) <= size_threshold
