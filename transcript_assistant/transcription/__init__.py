# transcript_assistant/transcription/__init__.py
"""Transcript resolution: caption sources, fallback resolver and failure classification."""

from transcript_assistant.transcription.base import CaptionSource
from transcript_assistant.transcription.captions import CommunityTranscriptSource
from transcript_assistant.transcription.classifier import classify
from transcript_assistant.transcription.core import SOURCE_NAMES, TranscriptResolver, build_sources
from transcript_assistant.transcription.official import OfficialCaptionProbe
from transcript_assistant.transcription.schema import (
    AdapterFailure,
    CaptionSourceError,
    ResolutionError,
    ResolutionErrorKind,
    Transcript,
    TranscriptSegment,
    join_segments,
)
from transcript_assistant.transcription.subtitles import LanguageSubtitleSource

__all__ = [
    "AdapterFailure",
    "CaptionSource",
    "CaptionSourceError",
    "CommunityTranscriptSource",
    "LanguageSubtitleSource",
    "OfficialCaptionProbe",
    "ResolutionError",
    "ResolutionErrorKind",
    "SOURCE_NAMES",
    "Transcript",
    "TranscriptResolver",
    "TranscriptSegment",
    "build_sources",
    "classify",
    "join_segments",
]
