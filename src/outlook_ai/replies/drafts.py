from __future__ import annotations

import logging
import re
from typing import Optional

from outlook_ai.ai.enhancer import AIEnhancer
from outlook_ai.models import AnalysisResult, EmailText, KeyPoint, ReplyDraft
from outlook_ai.pipeline.orchestrator import analyze_email

logger = logging.getLogger(__name__)

DEFAULT_REPLY_SUBJECT = "Re: Your message"
SIGN_OFF = "Best regards"

_REPLY_PREFIX_RE = re.compile(r"^(re|aw|sv|回覆|回复)\s*[:：]\s*(.*)$", flags=re.IGNORECASE)


def as_reply_subject(subject: str | None) -> str:
    cleaned = (subject or "").strip()
    if not cleaned:
        return DEFAULT_REPLY_SUBJECT
    match = _REPLY_PREFIX_RE.match(cleaned)
    if match:
        tail = match.group(2).strip()
        if not tail:
            return DEFAULT_REPLY_SUBJECT
        return f"Re: {tail}"
    return f"Re: {cleaned}"


def _key_point_line(point: KeyPoint) -> str:
    detail = point.keyword or ", ".join(v for v in point.values if v)
    return f"- {point.category}: {detail}"


def _inquiry_reply(analysis: AnalysisResult) -> str:
    return "\n".join(
        [
            "Hello,",
            "",
            "Thank you for your inquiry.",
            "",
            "I am happy to provide the following information regarding your question:",
            "",
            "[Please fill in the specific answer here]",
            "",
            "If you need more details or have any other questions, feel free to contact me.",
            "",
            "I look forward to hearing from you.",
            "",
            SIGN_OFF,
        ]
    )


def _purchase_reply(analysis: AnalysisResult) -> str:
    lines = [
        "Hello,",
        "",
        "Thank you for your interest in ordering from us!",
        "",
        "I have received your purchase request with the following details:",
        "",
    ]
    lines.extend(_key_point_line(point) for point in analysis.key_points)
    lines.extend(
        [
            "",
            "We will prepare a detailed quotation and product information for you as soon as possible.",
            "",
            "If you have any questions, please do not hesitate to contact me.",
            "",
            "We look forward to working with you!",
            "",
            SIGN_OFF,
        ]
    )
    return "\n".join(lines)


def _complaint_reply(analysis: AnalysisResult) -> str:
    return "\n".join(
        [
            "Hello,",
            "",
            "We are very sorry for the inconvenience.",
            "",
            "We have received your feedback and take this matter seriously. "
            "Our team is looking into it and will provide a solution as soon as possible.",
            "",
            "We will get back to you with an update within 24 hours.",
            "",
            "Once again, we apologize and thank you for your patience and understanding.",
            "",
            SIGN_OFF,
        ]
    )


def _general_reply(analysis: AnalysisResult) -> str:
    return "\n".join(
        [
            "Hello,",
            "",
            "Thank you for your email.",
            "",
            f"I have received your message. Next step: {analysis.suggested_action.lower()}.",
            "",
            "If you have any questions or need further assistance, please let me know.",
            "",
            "I look forward to hearing from you.",
            "",
            SIGN_OFF,
        ]
    )


_TEMPLATES = {
    "inquiry": _inquiry_reply,
    "purchase": _purchase_reply,
    "complaint": _complaint_reply,
}


def template_reply(analysis: AnalysisResult) -> str:
    return _TEMPLATES.get(analysis.customer_intent, _general_reply)(analysis)


def generate_reply(
    body: str | None,
    *,
    original_subject: Optional[str] = None,
    tone: str = "professional",
    language: str = "en",
    enhancer: Optional[AIEnhancer] = None,
) -> ReplyDraft:
    """
    Draft a reply for an email body. The template is picked by customer
    intent; an enhancer, if given, writes the draft instead and the template
    is the fallback when it fails.
    """
    analysis = analyze_email(EmailText(subject=original_subject, body=body))
    content = template_reply(analysis)
    used_ai = False

    if enhancer is not None:
        try:
            content = enhancer.draft_reply(body or "", original_subject or "", analysis, tone, language)
            used_ai = True
        except Exception as exc:
            logger.warning("AI reply draft failed, using template: %s: %s", type(exc).__name__, exc)

    return ReplyDraft(
        content=content,
        tone=tone,
        suggested_subject=as_reply_subject(original_subject),
        analysis=analysis,
        used_ai=used_ai,
    )
