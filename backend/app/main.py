# backend/app/main.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.api.ai import router as ai_router
from backend.app.logging_config import configure_logging
from backend.app.status import AnalysisStatsStore
from outlook_ai.ai.enhancer import build_enhancer
from outlook_ai.config.settings import Settings, load_settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "Outlook AI Backend"
VERSION = "1.0.0"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="outlook-ai API", version=VERSION)
    app.state.settings = settings
    app.state.enhancer = build_enhancer(settings)
    app.state.stats = AnalysisStatsStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=settings.cors_origin != "*",
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(ai_router, prefix="/api/ai")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request")
        return _error(400, f"{location}: {message}" if location else message)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        request.app.state.stats.record_error(request.url.path, f"{type(exc).__name__}: {exc}")
        return _error(500, str(exc) or "Internal Server Error")

    @app.get("/api/health")
    def health() -> dict:
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": VERSION,
        }

    logger.info(
        "%s ready (ai_enhancement=%s, batch_max_size=%d)",
        SERVICE_NAME,
        app.state.enhancer is not None,
        settings.batch_max_size,
    )
    return app


app = create_app()
