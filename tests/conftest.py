from __future__ import annotations

import threading
from typing import List, Optional

import pytest

from outlook_ai.models import AnalysisResult, EnhancementResult, TodoItem


class FakeEnhancer:
    """In-memory enhancer; set `error` to make every call fail."""

    model = "fake-model"

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[tuple[str, str]] = []
        self._lock = threading.Lock()

    def _record(self, body: str, subject: str) -> None:
        with self._lock:
            self.calls.append((body, subject))
        if self.error is not None:
            raise self.error

    def enhance(self, body: str, subject: str) -> EnhancementResult:
        self._record(body, subject)
        return EnhancementResult(
            opportunity_value="high",
            commercial_intent_score=0.8,
            insights=(f"subject:{subject}",),
            suggested_response="Thanks, we will follow up.",
            risks=(),
            confidence=0.9,
        )

    def draft_reply(self, body: str, subject: str, analysis: AnalysisResult, tone: str, language: str) -> str:
        self._record(body, subject)
        return f"AI reply ({tone}, {language})"

    def extract_todos(self, body: str, subject: str) -> List[TodoItem]:
        self._record(body, subject)
        return [TodoItem(text="Send the quote", source="body", priority="high")]


@pytest.fixture
def make_enhancer():
    """Factory for FakeEnhancer instances."""
    return FakeEnhancer
