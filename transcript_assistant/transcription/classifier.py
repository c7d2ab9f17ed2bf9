# transcript_assistant/transcription/classifier.py
"""
Failure classification for exhausted transcript resolutions.

Single responsibility: map the raw messages of every failed caption source
to exactly one ResolutionError. Pure and deterministic: no I/O, no logging.
"""

from __future__ import annotations

from typing import Sequence

from transcript_assistant.transcription.schema import (
    AdapterFailure,
    ResolutionError,
    ResolutionErrorKind,
)


UNAVAILABLE_PHRASES = (
    "private",
    "unavailable",
)

NO_CAPTIONS_PHRASES = (
    "no automatic captions",
    "transcript disabled",
    "transcripts disabled",
    "transcripts are disabled",
    "subtitles disabled",
    "subtitles are disabled",
    "captions disabled",
    "no transcript",
    "no caption tracks",
    "no subtitles",
)


def _any_match(failures: Sequence[AdapterFailure], phrases: Sequence[str]) -> bool:
    for failure in failures:
        message = failure.raw_message.lower()
        if any(phrase in message for phrase in phrases):
            return True
    return False


def classify(failures: Sequence[AdapterFailure]) -> ResolutionError:
    """
    Classify the whole failure set into one ResolutionError.

    Every failure is inspected, not just the first: a specific category
    found anywhere beats the generic fallback. Unavailability outranks
    missing captions when both appear.
    """
    if _any_match(failures, UNAVAILABLE_PHRASES):
        kind = ResolutionErrorKind.VIDEO_UNAVAILABLE
    elif _any_match(failures, NO_CAPTIONS_PHRASES):
        kind = ResolutionErrorKind.NO_CAPTIONS_AVAILABLE
    else:
        kind = ResolutionErrorKind.TRANSCRIPT_FETCH_FAILED

    return ResolutionError(kind, failures)
