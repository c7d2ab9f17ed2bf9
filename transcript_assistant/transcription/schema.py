# transcript_assistant/transcription/schema.py
"""
Shared contracts for the transcript resolution subsystem.

This module defines:
- Timed caption segments and the joined Transcript
- The AdapterFailure record produced by every failed caption source
- The fixed taxonomy of user-facing resolution errors

All caption sources, the classifier and the resolver MUST conform to these contracts.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field


class ResolutionErrorKind(str, Enum):
    """Typed resolution outcomes for machine-parsable error handling."""
    NO_CAPTIONS_AVAILABLE = "NoCaptionsAvailable"
    VIDEO_UNAVAILABLE = "VideoUnavailable"
    CAPTIONS_EXIST_BUT_INACCESSIBLE = "CaptionsExistButInaccessible"
    TRANSCRIPT_FETCH_FAILED = "TranscriptFetchFailed"


# One fixed message per kind; provider text never reaches the caller through these.
ERROR_MESSAGES = {
    ResolutionErrorKind.NO_CAPTIONS_AVAILABLE: "This video has no captions available",
    ResolutionErrorKind.VIDEO_UNAVAILABLE: "This video is private or unavailable",
    ResolutionErrorKind.CAPTIONS_EXIST_BUT_INACCESSIBLE: (
        "Captions exist for this video but could not be accessed. "
        "The API key may lack permission to read them."
    ),
    ResolutionErrorKind.TRANSCRIPT_FETCH_FAILED: (
        "Could not fetch transcript. Make sure the video has captions available."
    ),
}


class TranscriptSegment(BaseModel):
    """One timed unit of caption text. Only text is guaranteed."""
    text: str
    start: Optional[float] = None  # seconds
    duration: Optional[float] = None  # seconds

    model_config = ConfigDict(frozen=True)


class Transcript(BaseModel):
    """
    Ordered caption segments produced by a single caption source.

    A Transcript always holds at least one segment; sources that find
    nothing report a failure instead.
    """
    video_id: str
    source: str
    segments: List[TranscriptSegment] = Field(min_length=1)

    @property
    def text(self) -> str:
        """Segment texts joined with a single space, in source order."""
        return join_segments(self.segments)


class AdapterFailure(BaseModel):
    """Structured record of one caption source that did not produce a transcript."""
    source_name: str
    raw_message: str
    tracks_exist: bool = False
    execution_time_ms: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class CaptionSourceError(Exception):
    """
    Raised by a caption source when it cannot produce segments.

    tracks_exist is set only by sources that can see caption tracks
    without being able to download their text.
    """

    def __init__(self, source_name: str, message: str, *, tracks_exist: bool = False) -> None:
        super().__init__(message)
        self.source_name = source_name
        self.message = message
        self.tracks_exist = tracks_exist


class ResolutionError(Exception):
    """Classified, user-facing outcome of a failed transcript resolution."""

    def __init__(self, kind: ResolutionErrorKind, failures: Sequence[AdapterFailure] = ()) -> None:
        self.kind = kind
        self.message = ERROR_MESSAGES[kind]
        self.failures: List[AdapterFailure] = list(failures)
        super().__init__(self.message)

    def details(self) -> List[dict]:
        """Operator-facing diagnostics, one entry per attempted source."""
        return [
            {"source": failure.source_name, "message": failure.raw_message}
            for failure in self.failures
        ]


def join_segments(segments: Sequence[TranscriptSegment]) -> str:
    return " ".join(segment.text for segment in segments)


# High-Level Intent
# schema.py is the contract for everything between a caption source and the HTTP layer.
# Sources speak in TranscriptSegment lists or CaptionSourceError;
# the resolver speaks in Transcript or ResolutionError.

# Edge Cases & Failure Scenarios
# Source returns [] → resolver records an AdapterFailure (Transcript cannot be built empty).
# Official API sees tracks but cannot download → CaptionSourceError(tracks_exist=True).
