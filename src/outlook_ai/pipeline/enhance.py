from __future__ import annotations

import logging
from typing import List, Optional

from outlook_ai.ai.enhancer import AIEnhancer
from outlook_ai.extractors.todos import extract_todos
from outlook_ai.models import AnalysisResult, EmailText, TodoItem
from outlook_ai.pipeline.orchestrator import analyze_email

logger = logging.getLogger(__name__)


def analyze_with_enhancement(email: EmailText, enhancer: Optional[AIEnhancer] = None) -> AnalysisResult:
    """
    Heuristic analysis, optionally extended by the enhancer.

    Enhancer failures (network, timeout, malformed output) are logged and the
    heuristic result is returned unchanged. A failed call is never merged.
    """
    analysis = analyze_email(email)
    if enhancer is None:
        return analysis

    try:
        enhancement = enhancer.enhance(email.body or "", email.subject or "")
    except Exception as exc:
        logger.warning("AI enhancement failed, using heuristic analysis: %s: %s", type(exc).__name__, exc)
        return analysis

    return analysis.with_enhancement(enhancement)


def extract_todos_with_enhancement(
    subject: str | None,
    body: str | None,
    enhancer: Optional[AIEnhancer] = None,
) -> List[TodoItem]:
    # Model-extracted todos when available, heuristic lines otherwise.
    if enhancer is not None:
        try:
            return enhancer.extract_todos(body or "", subject or "")
        except Exception as exc:
            logger.warning("AI todo extraction failed, using heuristics: %s: %s", type(exc).__name__, exc)
    return extract_todos(subject, body)
