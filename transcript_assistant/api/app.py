# transcript_assistant/api/app.py
"""
FastAPI application factory.

Thin adapter, no business logic.
Responsibilities:
- Wire configuration, metadata lookup, transcript resolver and LLM assistant
- Expose the JSON endpoints
- Request logging, CORS and static front-end serving

Collaborators are injectable so tests never touch the network.
"""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from transcript_assistant import __version__
from transcript_assistant.api.errors import ApiError, VideoNotFound, handle_unexpected_error, register_exception_handlers
from transcript_assistant.api.models import AskRequest, ConvertRequest, ExpandSummaryRequest, SummarizeRequest
from transcript_assistant.assistant import GeminiGenerator, TranscriptAssistant
from transcript_assistant.config import AppConfig, MissingConfiguration
from transcript_assistant.logging_core.logger import configure_logging, get_logger, log_event
from transcript_assistant.transcription.base import timer
from transcript_assistant.transcription.core import TranscriptResolver, build_sources
from transcript_assistant.youtube_api import (
    UpstreamServiceError,
    VideoMetadata,
    VideoMetadataLookup,
    build_youtube_client,
)


def create_app(
    config: Optional[AppConfig] = None,
    *,
    resolver: Optional[TranscriptResolver] = None,
    metadata_lookup: Optional[VideoMetadataLookup] = None,
    assistant: Optional[TranscriptAssistant] = None,
) -> FastAPI:
    """
    Build the application.

    Collaborators not passed in are built from config when their API key
    is present; endpoints needing a missing one answer MissingConfiguration.
    """
    config = config or AppConfig.from_env()
    configure_logging(config.log_level)
    logger = get_logger()

    if (resolver is None or metadata_lookup is None) and config.youtube_api_key:
        client = build_youtube_client(config.youtube_api_key)
        if metadata_lookup is None:
            metadata_lookup = VideoMetadataLookup(client)
        if resolver is None:
            sources = build_sources(
                config.transcript_sources,
                language=config.subtitle_language,
                youtube_client=client,
                socket_timeout=config.adapter_timeout_seconds,
            )
            resolver = TranscriptResolver(sources, timeout=config.adapter_timeout_seconds)

    if assistant is None and config.gemini_api_key:
        assistant = TranscriptAssistant(GeminiGenerator(config.gemini_api_key, config.gemini_model))

    log_event(
        logger,
        logging.INFO,
        "Application configured",
        component="app",
        event_type="startup",
        metadata={
            "youtube_api_key": "set" if config.youtube_api_key else "missing",
            "gemini_api_key": "set" if config.gemini_api_key else "missing",
            "transcript_sources": [source.name for source in resolver.sources] if resolver else [],
        },
    )

    app = FastAPI(title="Video Transcript Assistant", version=__version__)
    app.state.config = config
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        request_logger = get_logger(request_id)

        log_event(
            request_logger,
            logging.INFO,
            "Request received",
            component="http",
            event_type="request_start",
            metadata={"method": request.method, "path": request.url.path},
        )
        with timer() as end:
            try:
                response = await call_next(request)
            except Exception as exc:  # pylint: disable=broad-except
                response = await handle_unexpected_error(request, exc)
        log_event(
            request_logger,
            logging.INFO,
            "Request completed",
            component="http",
            event_type="request_end",
            metadata={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "execution_time_ms": round(end(), 2),
            },
        )
        response.headers["X-Request-ID"] = request_id
        return response

    async def lookup_video(video_id: str) -> VideoMetadata:
        if metadata_lookup is None:
            raise MissingConfiguration("YOUTUBE_API_KEY")
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(metadata_lookup.lookup, video_id),
                config.adapter_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise UpstreamServiceError("YouTube API request timed out") from exc

    def require_assistant() -> TranscriptAssistant:
        if assistant is None:
            raise MissingConfiguration("GEMINI_API_KEY")
        return assistant

    @app.post("/api/convert")
    async def convert(request: Request, body: Optional[ConvertRequest] = None) -> dict:
        video_id = ((body.video_id if body else None) or "").strip()
        if not video_id:
            raise ApiError(400, "Video ID is required")
        if resolver is None:
            raise MissingConfiguration("YOUTUBE_API_KEY")

        metadata = await lookup_video(video_id)
        if not metadata.exists:
            raise VideoNotFound(video_id)

        transcript = await resolver.resolve(video_id, request_id=request.state.request_id)
        return {
            "success": True,
            "text": transcript.text,
            "videoTitle": metadata.title,
        }

    @app.post("/api/ask-ai")
    async def ask_ai(body: AskRequest) -> dict:
        answer = await asyncio.to_thread(require_assistant().ask, body.question, body.transcript, body.history)
        return {"success": True, "answer": answer}

    @app.post("/api/summarize")
    async def summarize(body: SummarizeRequest) -> dict:
        summary = await asyncio.to_thread(require_assistant().summarize, body.text)
        return {"success": True, "summary": summary}

    @app.post("/api/expand-summary")
    async def expand_summary(body: ExpandSummaryRequest) -> dict:
        summary = await asyncio.to_thread(require_assistant().expand_summary, body.text, body.current_summary)
        return {"success": True, "summary": summary}

    # Mounted last so the API routes keep precedence over "/"
    if config.static_dir and os.path.isdir(config.static_dir):
        app.mount("/", StaticFiles(directory=config.static_dir, html=True), name="static")

    return app
