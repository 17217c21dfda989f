"""FastAPI application exposing the transcript analyzer.

Routes:
    POST /api/analyze-transcript  JSON ``{"text": ...}`` or multipart with a
                                  ``pdf`` file and/or ``text`` field
    GET  /api/health              liveness probe, independent of the pipeline

Run with: python -m earnings_analyzer
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from earnings_analyzer.config import FrozenConfig
from earnings_analyzer.core.types import HealthEnvelope, TranscriptInput
from earnings_analyzer.exceptions import ValidationError
from earnings_analyzer.executor import TranscriptAnalyzer
from earnings_analyzer.pipeline.result_builder import EnvelopeBuilder

logger = logging.getLogger(__name__)

PDF_FIELD = "pdf"
TEXT_FIELD = "text"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
# Limit for non-file form fields; pasted transcripts can exceed Starlette's 1 MB
MAX_FORM_PART_SIZE = 16 * 1024 * 1024


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------


def get_analyzer(request: Request) -> TranscriptAnalyzer:
    """Dependency: the analyzer built once at startup."""
    return request.app.state.analyzer


def get_config(request: Request) -> FrozenConfig:
    """Dependency: the frozen configuration the app was built with."""
    return request.app.state.config


def get_envelopes(request: Request) -> EnvelopeBuilder:
    """Dependency: the envelope builder shared by the routes."""
    return request.app.state.envelopes


# -----------------------------------------------------------------------------
# Request parsing
# -----------------------------------------------------------------------------


async def read_transcript_input(request: Request) -> TranscriptInput:
    """Turn a JSON or multipart request into a ``TranscriptInput``.

    Emptiness is not checked here; the analyzer rejects empty input.

    Raises:
        ValidationError: If the body is malformed or of an unsupported type.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form(max_part_size=MAX_FORM_PART_SIZE)
        except (HTTPException, MultiPartException) as e:
            detail = e.detail if isinstance(e, HTTPException) else e.message
            raise ValidationError(f"Malformed form body: {detail}", details=detail) from e
        text = form.get(TEXT_FIELD)
        upload = form.get(PDF_FIELD)
        if isinstance(upload, UploadFile):
            logger.info(
                "Received file '%s' (%s)", upload.filename, upload.content_type
            )
            return TranscriptInput(
                text=text if isinstance(text, str) else None,
                file_bytes=await upload.read(),
                filename=upload.filename,
                content_type=upload.content_type,
            )
        return TranscriptInput(text=text if isinstance(text, str) else None)

    raw = await request.body()
    if not raw.strip():
        return TranscriptInput()
    if content_type and not content_type.startswith("application/json"):
        raise ValidationError(
            f"Unsupported request content type {content_type!r}; "
            "send application/json or multipart/form-data"
        )
    try:
        payload: Any = json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"Request body is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    text = payload.get(TEXT_FIELD)
    if text is not None and not isinstance(text, str):
        raise ValidationError(f"'{TEXT_FIELD}' must be a string")
    return TranscriptInput(text=text)


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------


def create_app(analyzer: TranscriptAnalyzer, config: FrozenConfig) -> FastAPI:
    """Build the ASGI app around an already constructed analyzer."""
    app = FastAPI(
        title=config.service_name,
        description="Structured analysis of earnings-call transcripts.",
        version="0.1.0",
    )
    app.state.analyzer = analyzer
    app.state.config = config
    app.state.envelopes = EnvelopeBuilder()

    origins = [o.strip() for o in config.cors_origin.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms, content-type=%s)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
            request.headers.get("content-type", "-"),
        )
        return response

    @app.post("/api/analyze-transcript")
    async def analyze_transcript(
        request: Request,
        analyzer: TranscriptAnalyzer = Depends(get_analyzer),
        envelopes: EnvelopeBuilder = Depends(get_envelopes),
    ) -> JSONResponse:
        try:
            transcript = await read_transcript_input(request)
        except ValidationError as e:
            logger.warning("Rejected request body: %s", e)
            result = envelopes.failure(e)
        else:
            result = await analyzer.analyze(transcript)
        return JSONResponse(status_code=result.status_code, content=result.body)

    @app.get("/api/health")
    async def health(
        config: FrozenConfig = Depends(get_config),
        envelopes: EnvelopeBuilder = Depends(get_envelopes),
    ) -> HealthEnvelope:
        return {
            "status": "OK",
            "timestamp": envelopes.timestamp(),
            "service": config.service_name,
        }

    return app
