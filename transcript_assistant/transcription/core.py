# transcript_assistant/transcription/core.py
"""
Orchestrator for caption sources.

Responsibilities:
- Try caption sources in fixed priority order, one at a time
- Stop at the first source producing a non-empty transcript
- Record every failure and classify the exhausted set into one ResolutionError

No provider logic lives here, only sequencing and classification.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Sequence

from transcript_assistant.logging_core.logger import get_logger, log_event
from transcript_assistant.transcription.base import CaptionSource, timer
from transcript_assistant.transcription.captions import CommunityTranscriptSource
from transcript_assistant.transcription.classifier import classify
from transcript_assistant.transcription.official import OfficialCaptionProbe
from transcript_assistant.transcription.schema import (
    AdapterFailure,
    CaptionSourceError,
    ResolutionError,
    ResolutionErrorKind,
    Transcript,
    TranscriptSegment,
)
from transcript_assistant.transcription.subtitles import LanguageSubtitleSource


DEFAULT_ADAPTER_TIMEOUT = 10.0

# Configuration names for each caption source, in default priority order
SOURCE_NAMES = ("community", "subtitles", "official")


class TranscriptResolver:
    """
    Resolve a video id to exactly one Transcript or exactly one ResolutionError.

    The source list may be any non-empty subset of the available sources;
    a single-source list is a valid configuration.
    """

    def __init__(self, sources: Sequence[CaptionSource], timeout: Optional[float] = DEFAULT_ADAPTER_TIMEOUT) -> None:
        if not sources:
            raise ValueError("At least one caption source is required")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive, or None to wait indefinitely")
        self.sources = tuple(sources)
        self.timeout = timeout

    async def resolve(self, video_id: str, request_id: Optional[str] = None) -> Transcript:
        """
        Run the fallback chain for one video.

        Raises:
            ValueError: video_id is empty (no source is called).
            ResolutionError: every configured source failed or returned nothing.
        """
        video_id = (video_id or "").strip()
        if not video_id:
            raise ValueError("video_id must not be empty")

        component = "transcript_resolver"
        logger = get_logger(request_id)
        failures: List[AdapterFailure] = []

        for source in self.sources:
            log_event(
                logger,
                logging.INFO,
                "Trying caption source",
                component=component,
                event_type="start",
                metadata={"video_id": video_id, "source": source.name},
            )

            with timer() as end:
                try:
                    segments = await self._attempt(source, video_id)
                except CaptionSourceError as exc:
                    failure = AdapterFailure(
                        source_name=source.name,
                        raw_message=exc.message,
                        tracks_exist=exc.tracks_exist,
                        execution_time_ms=end(),
                    )
                except asyncio.TimeoutError:
                    failure = AdapterFailure(
                        source_name=source.name,
                        raw_message=f"{source.name} timed out after {self.timeout}s",
                        execution_time_ms=end(),
                    )
                except Exception as exc:  # pylint: disable=broad-except
                    # Sources wrap their own errors; anything else is still contained here
                    failure = AdapterFailure(
                        source_name=source.name,
                        raw_message=f"Unexpected error: {exc}",
                        execution_time_ms=end(),
                    )
                else:
                    if segments:
                        transcript = Transcript(video_id=video_id, source=source.name, segments=list(segments))
                        log_event(
                            logger,
                            logging.INFO,
                            "Transcript resolved",
                            component=component,
                            event_type="success",
                            metadata={
                                "video_id": video_id,
                                "source": source.name,
                                "segment_count": len(transcript.segments),
                                "execution_time_ms": end(),
                            },
                        )
                        return transcript

                    failure = AdapterFailure(
                        source_name=source.name,
                        raw_message=f"{source.name} returned an empty transcript",
                        execution_time_ms=end(),
                    )

            failures.append(failure)
            log_event(
                logger,
                logging.WARNING,
                "Caption source failed",
                component=component,
                event_type="failure",
                metadata=failure.model_dump(),
            )

        error = self.classify(failures)
        log_event(
            logger,
            logging.ERROR,
            "Transcript resolution failed",
            component=component,
            event_type="failure",
            metadata={"video_id": video_id, "kind": error.kind.value, "attempts": len(failures)},
        )
        raise error

    @staticmethod
    def classify(failures: Sequence[AdapterFailure]) -> ResolutionError:
        """Tracks seen server-side outrank every message-based category."""
        if any(failure.tracks_exist for failure in failures):
            return ResolutionError(ResolutionErrorKind.CAPTIONS_EXIST_BUT_INACCESSIBLE, failures)
        return classify(failures)

    async def _attempt(self, source: CaptionSource, video_id: str) -> List[TranscriptSegment]:
        call = asyncio.to_thread(source.fetch, video_id)
        if self.timeout is not None:
            return await asyncio.wait_for(call, self.timeout)
        return await call


def build_sources(
    names: Sequence[str],
    *,
    language: str = "en",
    youtube_client: Any = None,
    socket_timeout: Optional[float] = None,
) -> List[CaptionSource]:
    """
    Build caption sources from configuration names, keeping their order.

    Raises ValueError for unknown names or when the official probe is
    requested without an API client.
    """
    sources: List[CaptionSource] = []
    for name in names:
        if name == "community":
            sources.append(CommunityTranscriptSource())
        elif name == "subtitles":
            sources.append(LanguageSubtitleSource(language=language, socket_timeout=socket_timeout))
        elif name == "official":
            if youtube_client is None:
                raise ValueError("The official caption source requires a YouTube API client")
            sources.append(OfficialCaptionProbe(youtube_client))
        else:
            raise ValueError(f"Unknown caption source: {name!r} (expected one of {', '.join(SOURCE_NAMES)})")
    return sources


# High-Level Intent
# core.py is the only place that knows about more than one caption source.

# Data Flow
# resolve(video_id)
# → for each source: to_thread(fetch) bounded by timeout
# → non-empty segments → Transcript (later sources never called)
# → else AdapterFailure appended
# → exhausted → classify → raise ResolutionError

# Edge Cases & Failure Scenarios
# Source returns [] → treated exactly like a failure.
# Source raises something other than CaptionSourceError → contained as a failure.
# Source hangs → timeout failure; its thread is abandoned, not cancelled.
# Official probe sees tracks → CaptionsExistButInaccessible wins over every other category.
