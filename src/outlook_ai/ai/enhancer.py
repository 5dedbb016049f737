from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Protocol

from openai import OpenAI

from outlook_ai.config.settings import Settings
from outlook_ai.models import AnalysisResult, EnhancementResult, TodoItem

logger = logging.getLogger(__name__)


class EnhancementError(RuntimeError):
    """The enhancement service answered with something we cannot use."""


class AIEnhancer(Protocol):
    """
    Optional model-based collaborator. Every method may raise; callers must
    fall back to the heuristic result.
    """

    model: str

    def enhance(self, body: str, subject: str) -> EnhancementResult: ...

    def draft_reply(
        self,
        body: str,
        subject: str,
        analysis: AnalysisResult,
        tone: str,
        language: str,
    ) -> str: ...

    def extract_todos(self, body: str, subject: str) -> List[TodoItem]: ...


_ENHANCEMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "opportunity_value": {"type": ["string", "null"]},
        "commercial_intent_score": {"type": ["number", "null"], "minimum": 0, "maximum": 1},
        "insights": {"type": "array", "items": {"type": "string"}},
        "suggested_response": {"type": ["string", "null"]},
        "risks": {"type": "array", "items": {"type": "string"}},
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
    },
    "required": [
        "opportunity_value",
        "commercial_intent_score",
        "insights",
        "suggested_response",
        "risks",
        "confidence",
    ],
}

_REPLY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {"body": {"type": "string"}},
    "required": ["body"],
}

_TODOS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "todos": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "text": {"type": "string"},
                    "priority": {"type": "string", "enum": ["high", "medium", "low"]},
                },
                "required": ["text", "priority"],
            },
        }
    },
    "required": ["todos"],
}


def _email_block(body: str, subject: str) -> str:
    return f"SUBJECT:\n{subject}\n\nBODY:\n{body}\n"


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EnhancementError(f"Expected a number, got {value!r}")
    return float(value)


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise EnhancementError(f"Expected a list, got {type(value).__name__}")
    return tuple(str(item).strip() for item in value if str(item).strip())


def parse_enhancement(payload: Any) -> EnhancementResult:
    """Validate a decoded enhancement payload. Raises EnhancementError."""
    if not isinstance(payload, dict):
        raise EnhancementError("Enhancement payload is not an object.")
    missing = [key for key in _ENHANCEMENT_SCHEMA["required"] if key not in payload]
    if missing:
        raise EnhancementError(f"Enhancement payload missing {', '.join(missing)}")

    return EnhancementResult(
        opportunity_value=_optional_str(payload["opportunity_value"]),
        commercial_intent_score=_optional_float(payload["commercial_intent_score"]),
        insights=_string_list(payload["insights"]),
        suggested_response=_optional_str(payload["suggested_response"]),
        risks=_string_list(payload["risks"]),
        confidence=_optional_float(payload["confidence"]),
    )


class OpenAIEnhancer:
    def __init__(self, client: OpenAI, model: str = "gpt-4.1-mini") -> None:
        self._client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIEnhancer":
        client = OpenAI(api_key=settings.openai_api_key, timeout=settings.ai_timeout_seconds)
        return cls(client, model=settings.openai_model)

    def _structured(self, *, name: str, schema: Dict[str, Any], system: str, user: str) -> Dict[str, Any]:
        # Structured Outputs (JSON Schema) so parsing is reliable
        resp = self._client.responses.create(
            model=self.model,
            input=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": name,
                    "strict": True,
                    "schema": schema,
                }
            },
        )

        output_text = getattr(resp, "output_text", None)
        if not output_text:
            raise EnhancementError("OpenAI response was empty.")
        try:
            payload = json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise EnhancementError(f"OpenAI returned invalid JSON: {output_text[:200]}") from exc
        if not isinstance(payload, dict):
            raise EnhancementError("OpenAI response is not a JSON object.")
        return payload

    def enhance(self, body: str, subject: str) -> EnhancementResult:
        payload = self._structured(
            name="email_enhancement",
            schema=_ENHANCEMENT_SCHEMA,
            system=(
                "You analyze inbound business emails for a sales team. "
                "Estimate the opportunity value, a commercial intent score between 0 and 1, "
                "key insights, a short suggested response, risks, and your confidence. "
                "Return ONLY JSON that matches the provided schema. Do not invent facts."
            ),
            user=_email_block(body, subject),
        )
        return parse_enhancement(payload)

    def draft_reply(
        self,
        body: str,
        subject: str,
        analysis: AnalysisResult,
        tone: str,
        language: str,
    ) -> str:
        payload = self._structured(
            name="reply_draft",
            schema=_REPLY_SCHEMA,
            system=(
                f"Write a short {tone} reply to the email below in language '{language}'. "
                "Plain text only, greeting and sign-off included. "
                "Do not invent prices, dates or commitments that are not in the original."
            ),
            user=(
                f"ANALYSIS:\n{json.dumps(analysis.to_dict(), ensure_ascii=False)}\n\n"
                + _email_block(body, subject)
            ),
        )
        text = str(payload.get("body") or "").strip()
        if not text:
            raise EnhancementError("OpenAI reply draft was empty.")
        return text

    def extract_todos(self, body: str, subject: str) -> List[TodoItem]:
        payload = self._structured(
            name="todo_list",
            schema=_TODOS_SCHEMA,
            system=(
                "Extract concrete, actionable to-do items for the recipient of this email. "
                "Use an empty list if there are none."
            ),
            user=_email_block(body, subject),
        )
        todos = payload.get("todos")
        if not isinstance(todos, list):
            raise EnhancementError("OpenAI todo list is missing.")

        items: List[TodoItem] = []
        for entry in todos:
            if not isinstance(entry, dict):
                raise EnhancementError("OpenAI todo entry is not an object.")
            text = str(entry.get("text") or "").strip()
            if not text:
                continue
            priority = entry.get("priority")
            if priority not in ("high", "medium", "low"):
                priority = "low"
            items.append(TodoItem(text=text, source="body", priority=priority))
        return items


def build_enhancer(settings: Settings) -> Optional[AIEnhancer]:
    if not settings.ai_available:
        if settings.enable_ai_analysis:
            logger.warning("ENABLE_AI_ANALYSIS is set but no OpenAI API key was found")
        return None
    logger.info("AI enhancement enabled (model=%s)", settings.openai_model)
    return OpenAIEnhancer.from_settings(settings)
