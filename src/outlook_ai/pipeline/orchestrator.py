from __future__ import annotations

from datetime import datetime, timezone

from outlook_ai.extractors.keypoints import extract_key_points
from outlook_ai.extractors.summary import generate_summary
from outlook_ai.models import AnalysisResult, EmailText
from outlook_ai.parsing.text import normalize_text
from outlook_ai.rules.classification import analyze_sentiment, classify_intent, suggest_action
from outlook_ai.rules.scoring import calculate_priority, calculate_urgency, estimate_business_value


def analyze_email(email: EmailText) -> AnalysisResult:
    # Pure and total: missing fields degrade to empty text, never to an error.
    raw_body = email.body or ""
    body = normalize_text(raw_body)
    subject = email.subject or ""

    return AnalysisResult(
        summary=generate_summary(body),
        key_points=tuple(extract_key_points(body)),
        sentiment=analyze_sentiment(body),
        priority=calculate_priority(subject, body),
        customer_intent=classify_intent(body),
        urgency_level=calculate_urgency(subject, body),
        estimated_value=estimate_business_value(raw_body),
        suggested_action=suggest_action(body, subject),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
