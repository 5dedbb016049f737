from __future__ import annotations

from typing import Iterable, List, Optional, Sequence


def norm(s: str | None) -> str:
    """Normalize text for matching (None-safe, lowercased)."""
    return (s or "").lower()


def contains_any(text: str | None, needles: Sequence[str]) -> bool:
    """True if any needle is a substring of text (case-insensitive)."""
    t = norm(text)
    return any(n.lower() in t for n in needles)


def first_match(text: str | None, needles: Sequence[str]) -> Optional[str]:
    """Return the first needle (in table order) contained in text."""
    t = norm(text)
    for needle in needles:
        if needle.lower() in t:
            return needle
    return None


def matching_words(text: str | None, needles: Iterable[str]) -> List[str]:
    """
    Distinct needles contained in text, in table order.
    Repeated occurrences of one needle count once.
    """
    t = norm(text)
    seen: List[str] = []
    for needle in needles:
        if needle.lower() in t and needle not in seen:
            seen.append(needle)
    return seen


def bucket(score: int, thresholds: Sequence[tuple[int, str]], default: str) -> str:
    # Thresholds are ordered from highest to lowest.
    for minimum, label in thresholds:
        if score >= minimum:
            return label
    return default
