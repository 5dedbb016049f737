from __future__ import annotations

from outlook_ai.models import CustomerIntent, Sentiment
from outlook_ai.parsing.text import normalize_text
from outlook_ai.rules.matching import contains_any, matching_words, norm
from outlook_ai.rules.tables import (
    DEFAULT_ACTION,
    INTENT_KEYWORDS,
    NEGATIVE_WORDS,
    NO_CONTENT_ACTION,
    POSITIVE_WORDS,
    SENTIMENT_THRESHOLD,
    SUGGESTED_ACTIONS,
    URGENT_WORDS,
)


def analyze_sentiment(body: str | None) -> Sentiment:
    """
    Count distinct trigger words per set. Urgent beats negative beats
    positive, and a single trigger is never enough.
    """
    text = normalize_text(body).lower()
    if not text:
        return "neutral"

    if len(matching_words(text, URGENT_WORDS)) >= SENTIMENT_THRESHOLD:
        return "urgent"
    if len(matching_words(text, NEGATIVE_WORDS)) >= SENTIMENT_THRESHOLD:
        return "negative"
    if len(matching_words(text, POSITIVE_WORDS)) >= SENTIMENT_THRESHOLD:
        return "positive"
    return "neutral"


def classify_intent(body: str | None) -> CustomerIntent:
    text = normalize_text(body).lower()
    if not text:
        return "general"

    # Table order decides when several intents match.
    for intent, words in INTENT_KEYWORDS.items():
        if contains_any(text, words):
            return intent  # type: ignore[return-value]
    return "general"


def suggest_action(body: str | None, subject: str | None) -> str:
    text = normalize_text(body)
    if not text:
        return NO_CONTENT_ACTION

    hay = f"{text} {norm(subject)}".lower()
    for triggers, action in SUGGESTED_ACTIONS:
        if contains_any(hay, triggers):
            return action
    return DEFAULT_ACTION
