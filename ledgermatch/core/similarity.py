# ledgermatch/core/similarity.py

"""
String similarity helpers for description matching.
"""

from rapidfuzz.distance import Levenshtein


def string_similarity(s1: str, s2: str) -> float:
    """
    Normalized edit-distance similarity between two strings.

    Returns 1.0 for identical strings and 0.0 when either is empty.
    Otherwise (max_len - distance) / max_len, with insertions, deletions
    and substitutions each costing 1. Case is left to the caller.
    """
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    max_len = max(len(s1), len(s2))
    distance = Levenshtein.distance(s1, s2)
    return (max_len - distance) / max_len


def common_keywords(s1: str, s2: str, min_length: int = 4) -> tuple[list[str], int]:
    """
    Words of s1 (at least min_length chars) that also appear in s2.

    Returns the shared words in s1 order and the larger of the two word
    counts, which the keyword score is normalized by.
    """
    words1 = s1.split()
    words2 = s2.split()
    candidates = set(words2)

    shared = [w for w in words1 if len(w) >= min_length and w in candidates]
    return shared, max(len(words1), len(words2))
