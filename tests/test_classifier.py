"""Tests for failure classification.

Tests cover:
- Each message category
- Whole-set inspection (a later specific failure beats an earlier generic one)
- VideoUnavailable precedence over NoCaptionsAvailable
"""
import pytest

from transcript_assistant.transcription.classifier import classify
from transcript_assistant.transcription.schema import AdapterFailure, ResolutionErrorKind


def failure(message: str, source: str = "src") -> AdapterFailure:
    return AdapterFailure(source_name=source, raw_message=message)


class TestCategories:
    """Test each message family maps to its kind."""

    @pytest.mark.parametrize(
        "message",
        [
            "TranscriptsDisabled: Subtitles are disabled for this video",
            "This video has no automatic captions",
            "Transcript disabled by uploader",
            "NoTranscriptFound: No transcripts were found for any of the requested language codes",
            "No caption tracks found for this video",
        ],
    )
    def test_no_captions_phrases(self, message):
        """Test caption-absence phrases classify as NoCaptionsAvailable."""
        assert classify([failure(message)]).kind == ResolutionErrorKind.NO_CAPTIONS_AVAILABLE

    @pytest.mark.parametrize(
        "message",
        [
            "[youtube] abc: Private video. Sign in if you've been granted access",
            "VideoUnavailable: The video is no longer available",
            "Video UNAVAILABLE",
        ],
    )
    def test_unavailable_phrases(self, message):
        """Test private/unavailable phrases classify as VideoUnavailable, case-insensitively."""
        assert classify([failure(message)]).kind == ResolutionErrorKind.VIDEO_UNAVAILABLE

    def test_generic_fallback(self):
        """Test unrecognised messages classify as TranscriptFetchFailed."""
        error = classify([failure("connection reset by peer"), failure("HTTP 500")])
        assert error.kind == ResolutionErrorKind.TRANSCRIPT_FETCH_FAILED

    def test_empty_failure_set(self):
        """Test an empty failure list is the generic kind."""
        assert classify([]).kind == ResolutionErrorKind.TRANSCRIPT_FETCH_FAILED


class TestWholeSetInspection:
    """Test classification considers every failure."""

    def test_later_specific_failure_wins_over_earlier_generic(self):
        error = classify([failure("timeout"), failure("Subtitles are disabled for this video")])
        assert error.kind == ResolutionErrorKind.NO_CAPTIONS_AVAILABLE

    def test_unavailable_takes_precedence_over_no_captions(self):
        """Test VideoUnavailable wins when both specific signals are present."""
        error = classify([
            failure("Subtitles are disabled for this video", "a"),
            failure("Video unavailable", "b"),
        ])
        assert error.kind == ResolutionErrorKind.VIDEO_UNAVAILABLE

    def test_precedence_is_order_independent(self):
        error = classify([
            failure("Video unavailable", "b"),
            failure("Subtitles are disabled for this video", "a"),
        ])
        assert error.kind == ResolutionErrorKind.VIDEO_UNAVAILABLE


class TestResolutionErrorPayload:
    """Test the error carries fixed messages and operator details."""

    def test_message_does_not_leak_provider_text(self):
        error = classify([failure("secret upstream text: Video unavailable")])
        assert "secret" not in error.message
        assert error.message == str(error)

    def test_details_list_every_failure(self):
        error = classify([failure("x", "first"), failure("y", "second")])
        assert error.details() == [
            {"source": "first", "message": "x"},
            {"source": "second", "message": "y"},
        ]
