from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from backend.app.status import AnalysisStatsStore
from outlook_ai.ai.enhancer import AIEnhancer
from outlook_ai.config.settings import Settings
from outlook_ai.extractors.keypoints import extract_key_points
from outlook_ai.parsing.adapters import email_text_from_request
from outlook_ai.pipeline.batch import analyze_batch
from outlook_ai.pipeline.enhance import analyze_with_enhancement, extract_todos_with_enhancement
from outlook_ai.replies.drafts import generate_reply
from outlook_ai.rules.classification import analyze_sentiment
from outlook_ai.rules.scoring import calculate_priority

router = APIRouter()

CONTENT_REQUIRED = "Email content is required"


class EmailPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_content: Optional[str] = Field(None, alias="emailContent")
    subject: Optional[str] = None
    sender: Any = Field(None, alias="from")

    def as_request_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ReplyContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tone: str = "professional"
    language: str = "en"
    original_subject: Optional[str] = Field(None, alias="originalSubject")


class ReplyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_content: Optional[str] = Field(None, alias="emailContent")
    context: ReplyContext = Field(default_factory=ReplyContext)


class TodosRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_content: Optional[str] = Field(None, alias="emailContent")
    email_subject: Optional[str] = Field(None, alias="emailSubject")


class BatchRequest(BaseModel):
    emails: Optional[List[EmailPayload]] = None


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _enhancer(request: Request) -> Optional[AIEnhancer]:
    return request.app.state.enhancer


def _stats(request: Request) -> AnalysisStatsStore:
    return request.app.state.stats


def _require_content(content: Optional[str]) -> str:
    if not content or not content.strip():
        raise HTTPException(status_code=400, detail=CONTENT_REQUIRED)
    return content


@router.post("/analyze")
def analyze(payload: EmailPayload, request: Request) -> dict[str, Any]:
    _require_content(payload.email_content)
    email = email_text_from_request(payload.as_request_dict())
    analysis = analyze_with_enhancement(email, _enhancer(request))
    _stats(request).record_request("analyze", emails=1)
    return {"success": True, "analysis": analysis.to_dict()}


@router.post("/generate-reply")
def reply(payload: ReplyRequest, request: Request) -> dict[str, Any]:
    content = _require_content(payload.email_content)
    draft = generate_reply(
        content,
        original_subject=payload.context.original_subject,
        tone=payload.context.tone,
        language=payload.context.language,
        enhancer=_enhancer(request),
    )
    _stats(request).record_request("generate-reply", emails=1)
    return {"success": True, "reply": draft.to_dict()}


@router.post("/extract-keypoints")
def keypoints(payload: EmailPayload, request: Request) -> dict[str, Any]:
    content = _require_content(payload.email_content)
    points = extract_key_points(content)
    _stats(request).record_request("extract-keypoints")
    return {"success": True, "keypoints": [p.to_dict() for p in points]}


@router.post("/calculate-priority")
def priority(payload: EmailPayload, request: Request) -> dict[str, Any]:
    # Content is optional here: a subject alone can be scored.
    result = calculate_priority(payload.subject, payload.email_content)
    _stats(request).record_request("calculate-priority")
    return {"success": True, "priority": result}


@router.post("/sentiment")
def sentiment(payload: EmailPayload, request: Request) -> dict[str, Any]:
    content = _require_content(payload.email_content)
    result = analyze_sentiment(content)
    _stats(request).record_request("sentiment")
    return {"success": True, "sentiment": result}


@router.post("/extract-todos")
def todos(payload: TodosRequest, request: Request) -> dict[str, Any]:
    content = _require_content(payload.email_content)
    items = extract_todos_with_enhancement(payload.email_subject, content, _enhancer(request))
    _stats(request).record_request("extract-todos")
    return {"success": True, "todos": [t.to_dict() for t in items]}


@router.post("/batch-analyze")
async def batch_analyze(payload: BatchRequest, request: Request) -> dict[str, Any]:
    if payload.emails is None:
        raise HTTPException(status_code=400, detail="Emails array is required")
    if not payload.emails:
        return {"success": True, "results": [], "count": 0}

    settings = _settings(request)
    if len(payload.emails) > settings.batch_max_size:
        raise HTTPException(
            status_code=400,
            detail=f"Batch size cannot exceed {settings.batch_max_size} emails",
        )

    emails = [email_text_from_request(item.as_request_dict()) for item in payload.emails]
    # Paced enhancement calls block, keep them off the event loop.
    results = await run_in_threadpool(
        analyze_batch,
        emails,
        _enhancer(request),
        concurrency=settings.batch_concurrency,
        pause_seconds=settings.batch_pause_seconds,
    )
    _stats(request).record_request("batch-analyze", emails=len(results))
    return {"success": True, "results": [r.to_dict() for r in results], "count": len(results)}


@router.get("/status")
def status(request: Request) -> dict[str, Any]:
    settings = _settings(request)
    enhancer = _enhancer(request)
    return {
        "success": True,
        "status": {
            "enabled": settings.enable_ai_analysis,
            "hasOpenAI": enhancer is not None,
            "model": enhancer.model if enhancer is not None else "N/A",
            "features": {
                "emailAnalysis": True,
                "replyGeneration": True,
                "todoExtraction": True,
                "batchProcessing": True,
                "aiEnhancement": enhancer is not None,
            },
            "limits": {
                "batchMaxSize": settings.batch_max_size,
                "batchConcurrency": settings.batch_concurrency,
            },
            "stats": _stats(request).snapshot(),
        },
    }
