from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein

# Needles shorter than this only count on token boundaries ("go" must not hit "google").
_SHORT_NEEDLE_LEN = 3


def fuzzy_similarity(left: str, right: str) -> float:
    """Normalized edit-distance similarity: 1 - distance / max(len(left), len(right))."""
    if left == right:
        return 1.0
    return float(Levenshtein.normalized_similarity(left, right))


def contains_term(haystack: str, needle: str) -> bool:
    """Literal substring test, except needles under 3 chars must sit on token boundaries."""
    if not needle or not haystack:
        return False
    if len(needle) >= _SHORT_NEEDLE_LEN:
        return needle in haystack
    pattern = rf"(?<![a-z0-9]){re.escape(needle)}(?![a-z0-9])"
    return re.search(pattern, haystack) is not None


def either_contains(left: str, right: str) -> bool:
    return contains_term(left, right) or contains_term(right, left)
