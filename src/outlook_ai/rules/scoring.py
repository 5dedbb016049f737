from __future__ import annotations

from outlook_ai.models import EstimatedValue, Priority, UrgencyLevel
from outlook_ai.parsing.text import normalize_text
from outlook_ai.rules.matching import bucket, contains_any, matching_words, norm
from outlook_ai.rules.tables import (
    AMOUNT_PATTERN,
    BULK_WORDS,
    BUSINESS_SCORE,
    BUSINESS_WORDS,
    LARGE_NUMBER_PATTERN,
    LARGE_NUMBER_SCORE,
    PARTNERSHIP_WORDS,
    PRIORITY_THRESHOLDS,
    URGENCY_THRESHOLDS,
    URGENCY_WEIGHTS,
    URGENT_CONTENT_SCORE,
    URGENT_CONTENT_WORDS,
    URGENT_SUBJECT_SCORE,
    URGENT_SUBJECT_WORDS,
    VALUE_THRESHOLDS,
)

_MAX_AMOUNT_DIGITS = 15


def priority_score(subject: str | None, body: str | None) -> int:
    """
    Additive score: subject urgency words, body urgency words, business
    words (each distinct word counts once) plus a flat bonus when the body
    mentions a large number.
    """
    subj = norm(subject)
    text = normalize_text(body).lower()

    score = URGENT_SUBJECT_SCORE * len(matching_words(subj, URGENT_SUBJECT_WORDS))
    score += URGENT_CONTENT_SCORE * len(matching_words(text, URGENT_CONTENT_WORDS))
    score += BUSINESS_SCORE * len(matching_words(text, BUSINESS_WORDS))

    if LARGE_NUMBER_PATTERN.search(text):
        score += LARGE_NUMBER_SCORE
    return score


def calculate_priority(subject: str | None, body: str | None) -> Priority:
    return bucket(priority_score(subject, body), PRIORITY_THRESHOLDS, "low")  # type: ignore[return-value]


def urgency_score(subject: str | None, body: str | None) -> int:
    hay = f"{normalize_text(body)} {subject or ''}".lower()
    return sum(weight for word, weight in URGENCY_WEIGHTS if word in hay)


def calculate_urgency(subject: str | None, body: str | None) -> UrgencyLevel:
    return bucket(urgency_score(subject, body), URGENCY_THRESHOLDS, "low")  # type: ignore[return-value]


def parse_amount(raw: str) -> int:
    """Digits of an amount match as an integer ("$120,000" -> 120000)."""
    digits = "".join(ch for ch in raw if ch.isdigit()).lstrip("0")
    # Anything past the top threshold buckets the same; keeps int() bounded.
    return int(digits[:_MAX_AMOUNT_DIGITS]) if digits else 0


def estimate_business_value(body: str | None) -> EstimatedValue:
    if not body or not body.strip():
        return "unknown"

    # Only the first amount counts, matched against the raw body.
    match = AMOUNT_PATTERN.search(body)
    if match:
        return bucket(parse_amount(match.group(0)), VALUE_THRESHOLDS, "low")  # type: ignore[return-value]

    text = body.lower()
    if contains_any(text, BULK_WORDS) or contains_any(text, PARTNERSHIP_WORDS):
        return "high"
    return "unknown"
