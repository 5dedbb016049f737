from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Literal, Optional, Tuple

KeyPointCategory = Literal[
    "price",
    "quantity",
    "deadline",
    "meeting",
    "contract",
    "delivery",
    "discount",
    "payment",
    "numbers",
]
Importance = Literal["high", "medium"]
Sentiment = Literal["urgent", "negative", "positive", "neutral"]
Priority = Literal["high", "medium", "low"]
CustomerIntent = Literal["inquiry", "purchase", "complaint", "follow_up", "negotiation", "general"]
UrgencyLevel = Literal["critical", "high", "medium", "low"]
EstimatedValue = Literal["very_high", "high", "medium", "low", "unknown"]
TodoSource = Literal["subject", "body"]


@dataclass(frozen=True)
class EmailText:
    subject: Optional[str] = None
    body: Optional[str] = None
    sender_address: Optional[str] = None


@dataclass(frozen=True)
class KeyPoint:
    category: KeyPointCategory
    keyword: Optional[str] = None
    values: Tuple[Optional[str], ...] = ()
    importance: Importance = "high"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"category": self.category, "importance": self.importance}
        # Category hits carry a keyword, the numbers entry carries values.
        if self.keyword is not None:
            data["keyword"] = self.keyword
        if self.values:
            data["values"] = list(self.values)
        return data


@dataclass(frozen=True)
class EnhancementResult:
    opportunity_value: Optional[str] = None
    commercial_intent_score: Optional[float] = None
    insights: Tuple[str, ...] = ()
    suggested_response: Optional[str] = None
    risks: Tuple[str, ...] = ()
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "aiEnhanced": True,
            "opportunityValue": self.opportunity_value,
            "commercialIntentScore": self.commercial_intent_score,
            "insights": list(self.insights),
            "suggestedResponse": self.suggested_response,
            "risks": list(self.risks),
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class AnalysisResult:
    summary: str
    key_points: Tuple[KeyPoint, ...]
    sentiment: Sentiment
    priority: Priority
    customer_intent: CustomerIntent
    urgency_level: UrgencyLevel
    estimated_value: EstimatedValue
    suggested_action: str
    timestamp: str
    enhancement: Optional[EnhancementResult] = None

    def with_enhancement(self, enhancement: EnhancementResult) -> "AnalysisResult":
        """Return a copy extended with AI enhancement fields."""
        return replace(self, enhancement=enhancement)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "summary": self.summary,
            "keyPoints": [kp.to_dict() for kp in self.key_points],
            "sentiment": self.sentiment,
            "priority": self.priority,
            "customerIntent": self.customer_intent,
            "urgencyLevel": self.urgency_level,
            "estimatedValue": self.estimated_value,
            "suggestedAction": self.suggested_action,
            "timestamp": self.timestamp,
        }
        if self.enhancement is not None:
            data.update(self.enhancement.to_dict())
        return data


@dataclass(frozen=True)
class TodoItem:
    text: str
    source: TodoSource = "body"
    priority: Priority = "low"

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "source": self.source, "priority": self.priority}


@dataclass(frozen=True)
class ReplyDraft:
    content: str
    tone: str
    suggested_subject: str
    analysis: AnalysisResult
    used_ai: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "tone": self.tone,
            "suggestedSubject": self.suggested_subject,
            "analysis": self.analysis.to_dict(),
            "usedAI": self.used_ai,
        }
