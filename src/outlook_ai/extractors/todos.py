from __future__ import annotations

import re
from typing import List

from outlook_ai.models import Priority, TodoItem, TodoSource
from outlook_ai.parsing.text import strip_tags
from outlook_ai.rules.matching import contains_any
from outlook_ai.rules.tables import URGENCY_WEIGHTS

_PREFIX_RE = re.compile(r"^(todo:|to do:|待辦[:：]?)", flags=re.IGNORECASE)
_CHECKBOX_RE = re.compile(r"^[-*]\s*\[ \]")
_REQUEST_RE = re.compile(r"^(please|kindly)\b|^(請|麻煩)", flags=re.IGNORECASE)
_COMMITMENT_RE = re.compile(r"\b(need to|needs to|must|action required)\b|需要", flags=re.IGNORECASE)

_URGENT_WORDS = tuple(word for word, _ in URGENCY_WEIGHTS)
_DUE_WORDS = ("due", "by end of", "by friday", "by monday", "期限", "之前")

# <br> and block tags end a line in HTML bodies.
_BREAK_RE = re.compile(r"<\s*(br|/p|/div|/li)\s*/?\s*>", flags=re.IGNORECASE)


def extract_todos(subject: str | None, body_text: str | None) -> List[TodoItem]:
    """
    Heuristic todo extraction.
    Keep it simple and deterministic to avoid false positives.
    """
    todos: List[TodoItem] = []
    seen: set[str] = set()

    sources: list[tuple[TodoSource, str]] = [
        ("subject", subject or ""),
        ("body", strip_tags(_BREAK_RE.sub("\n", body_text or ""))),
    ]
    for source, text in sources:
        for line in text.splitlines():
            line = line.strip()
            if not line or line.lower() in seen:
                continue
            if not _is_todo(line):
                continue
            seen.add(line.lower())
            todos.append(TodoItem(text=line, source=source, priority=_todo_priority(line)))

    return todos


def _is_todo(line: str) -> bool:
    return bool(
        _PREFIX_RE.match(line)
        or _CHECKBOX_RE.match(line)
        or _REQUEST_RE.match(line)
        or _COMMITMENT_RE.search(line)
    )


def _todo_priority(line: str) -> Priority:
    if contains_any(line, _URGENT_WORDS):
        return "high"
    if contains_any(line, _DUE_WORDS):
        return "medium"
    return "low"
