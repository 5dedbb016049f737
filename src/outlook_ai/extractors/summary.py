from __future__ import annotations

from outlook_ai.parsing.text import normalize_text

SUMMARY_MAX_CHARS = 150
ELLIPSIS = "..."
NO_CONTENT = "no content"


def generate_summary(body: str | None, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """
    Very lightweight summarizer: the cleaned body cut to a fixed budget.
    """
    text = normalize_text(body)
    if not text:
        return NO_CONTENT

    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS
