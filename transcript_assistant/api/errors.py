# transcript_assistant/api/errors.py
"""
Mapping of domain errors to HTTP responses.

Every error body is {"success": false, "error": <fixed message>, "details"?: <operator diagnostics>}.
Provider text only ever appears under details, never under error.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from transcript_assistant.assistant import AssistantError
from transcript_assistant.config import MissingConfiguration
from transcript_assistant.logging_core.logger import get_logger, log_event
from transcript_assistant.transcription.schema import ResolutionError, ResolutionErrorKind
from transcript_assistant.youtube_api import UpstreamServiceError


STATUS_BY_KIND = {
    ResolutionErrorKind.NO_CAPTIONS_AVAILABLE: 400,
    ResolutionErrorKind.VIDEO_UNAVAILABLE: 404,
    ResolutionErrorKind.CAPTIONS_EXIST_BUT_INACCESSIBLE: 500,
    ResolutionErrorKind.TRANSCRIPT_FETCH_FAILED: 500,
}


# Routes whose malformed bodies are client errors; the AI routes answer every failure with 500
BAD_REQUEST_PATHS = ("/api/convert",)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """A request-level failure with an explicit status code."""

    def __init__(self, status_code: int, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class VideoNotFound(ApiError):
    def __init__(self, video_id: str) -> None:
        super().__init__(404, "Video not found", details={"videoId": video_id})


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _log_failure(request: Request, message: str, status_code: int, metadata: Optional[Dict[str, Any]] = None) -> None:
    logger = get_logger(getattr(request.state, "request_id", None))
    log_event(
        logger,
        logging.WARNING if status_code < 500 else logging.ERROR,
        message,
        component="http",
        event_type="failure",
        metadata={"path": request.url.path, "status_code": status_code, **(metadata or {})},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per domain error type."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        _log_failure(request, exc.message, exc.status_code)
        return error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg")}
            for error in exc.errors()
        ]
        status_code = 400 if request.url.path in BAD_REQUEST_PATHS else 500
        _log_failure(request, "Invalid request body", status_code)
        return error_response(status_code, "Invalid request body", details)

    @app.exception_handler(ResolutionError)
    async def handle_resolution_error(request: Request, exc: ResolutionError) -> JSONResponse:
        status_code = STATUS_BY_KIND[exc.kind]
        _log_failure(request, exc.message, status_code, {"kind": exc.kind.value})
        return error_response(status_code, exc.message, exc.details())

    @app.exception_handler(MissingConfiguration)
    async def handle_missing_configuration(request: Request, exc: MissingConfiguration) -> JSONResponse:
        _log_failure(request, exc.message, 500, {"env_var": exc.env_var})
        return error_response(500, exc.message)

    @app.exception_handler(UpstreamServiceError)
    async def handle_upstream_error(request: Request, exc: UpstreamServiceError) -> JSONResponse:
        _log_failure(request, exc.message, 500, {"upstream_status": exc.status})
        return error_response(500, exc.message, exc.details)

    @app.exception_handler(AssistantError)
    async def handle_assistant_error(request: Request, exc: AssistantError) -> JSONResponse:
        _log_failure(request, "AI request failed", 500, {"exception": str(exc)})
        return error_response(500, str(exc))

    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: any error without a dedicated handler still gets the JSON error body."""
    _log_failure(request, INTERNAL_ERROR_MESSAGE, 500, {"exception": f"{type(exc).__name__}: {exc}"})
    return error_response(500, INTERNAL_ERROR_MESSAGE)
