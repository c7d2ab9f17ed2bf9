"""Tests for the transcript fallback resolver.

Tests cover:
- Short-circuit on first non-empty transcript (call counts)
- Empty results treated as failures
- CaptionsExistButInaccessible precedence
- Containment of unexpected errors and timeouts
- Determinism and single-source configurations
"""
import asyncio

import pytest

from tests.fakes import FakeSource, segments
from transcript_assistant.transcription.core import TranscriptResolver, build_sources
from transcript_assistant.transcription.schema import (
    ResolutionError,
    ResolutionErrorKind,
    Transcript,
    TranscriptSegment,
)


def resolve(resolver: TranscriptResolver, video_id: str = "vid123") -> Transcript:
    return asyncio.run(resolver.resolve(video_id))


def resolve_error(resolver: TranscriptResolver, video_id: str = "vid123") -> ResolutionError:
    with pytest.raises(ResolutionError) as excinfo:
        resolve(resolver, video_id)
    return excinfo.value


class TestShortCircuit:
    """Test later sources are never invoked once a transcript is found."""

    def test_first_source_success_skips_the_rest(self):
        a = FakeSource("a", result=segments("Hello", "world"))
        b = FakeSource("b", result=segments("other"))
        c = FakeSource("c", error="should not run")

        transcript = resolve(TranscriptResolver([a, b, c]))

        assert transcript.text == "Hello world"
        assert transcript.source == "a"
        assert a.calls == ["vid123"]
        assert b.calls == []
        assert c.calls == []

    def test_falls_through_to_second_source(self):
        a = FakeSource("a", error="connection reset")
        b = FakeSource("b", result=segments("from", "b"))
        c = FakeSource("c", result=segments("from", "c"))

        transcript = resolve(TranscriptResolver([a, b, c]))

        assert transcript.text == "from b"
        assert len(a.calls) == 1
        assert len(b.calls) == 1
        assert c.calls == []

    def test_each_source_attempted_exactly_once(self):
        sources = [FakeSource(name, error="boom") for name in ("a", "b", "c")]
        resolve_error(TranscriptResolver(sources))
        assert [len(source.calls) for source in sources] == [1, 1, 1]


class TestEmptyResults:
    """Test zero segments is never returned as success."""

    def test_empty_result_is_a_failure(self):
        a = FakeSource("a", result=[])
        b = FakeSource("b", result=segments("fallback"))

        transcript = resolve(TranscriptResolver([a, b]))

        assert transcript.source == "b"

    def test_empty_result_recorded_like_explicit_failure(self):
        empty = resolve_error(TranscriptResolver([FakeSource("a", result=[])]))
        failed = resolve_error(TranscriptResolver([FakeSource("a", error="a returned an empty transcript")]))

        assert empty.kind == failed.kind == ResolutionErrorKind.TRANSCRIPT_FETCH_FAILED
        assert [f.source_name for f in empty.failures] == ["a"]
        assert empty.failures[0].raw_message == "a returned an empty transcript"


class TestClassification:
    """Test the exhausted failure set is classified into one error."""

    def test_tracks_exist_yields_captions_exist_but_inaccessible(self):
        a = FakeSource("a", error="TranscriptsDisabled: Subtitles are disabled for this video")
        b = FakeSource("b", result=[])
        c = FakeSource("c", error="2 caption track(s) exist (en) but their text cannot be downloaded", tracks_exist=True)

        error = resolve_error(TranscriptResolver([a, b, c]))

        assert error.kind == ResolutionErrorKind.CAPTIONS_EXIST_BUT_INACCESSIBLE
        assert len(error.failures) == 3

    def test_no_tracks_yields_no_captions(self):
        a = FakeSource("a", error="TranscriptsDisabled: Subtitles are disabled for this video")
        b = FakeSource("b", result=[])
        c = FakeSource("c", error="No caption tracks found for this video")

        assert resolve_error(TranscriptResolver([a, b, c])).kind == ResolutionErrorKind.NO_CAPTIONS_AVAILABLE

    def test_unavailable_beats_disabled_across_sources(self):
        a = FakeSource("a", error="Subtitles are disabled for this video")
        b = FakeSource("b", error="[youtube] vid123: Video unavailable")

        assert resolve_error(TranscriptResolver([a, b])).kind == ResolutionErrorKind.VIDEO_UNAVAILABLE

    def test_failures_keep_source_order(self):
        sources = [FakeSource(name, error=f"{name} failed") for name in ("a", "b", "c")]
        error = resolve_error(TranscriptResolver(sources))
        assert [f.source_name for f in error.failures] == ["a", "b", "c"]
        assert all(f.execution_time_ms is not None for f in error.failures)


class TestContainment:
    """Test no raw fault escapes a source."""

    def test_unexpected_exception_becomes_failure(self):
        a = FakeSource("a", raises=RuntimeError("socket exploded"))
        b = FakeSource("b", result=segments("ok"))

        assert resolve(TranscriptResolver([a, b])).source == "b"

    def test_unexpected_exception_message_is_recorded(self):
        error = resolve_error(TranscriptResolver([FakeSource("a", raises=KeyError("items"))]))
        assert error.failures[0].raw_message.startswith("Unexpected error:")

    def test_slow_source_times_out(self):
        slow = FakeSource("slow", result=segments("late"), delay=1.0)
        fast = FakeSource("fast", result=segments("on", "time"))

        transcript = resolve(TranscriptResolver([slow, fast], timeout=0.2))

        assert transcript.source == "fast"

    def test_timeout_recorded_in_failure(self):
        slow = FakeSource("slow", result=segments("late"), delay=1.0)
        error = resolve_error(TranscriptResolver([slow], timeout=0.2))
        assert "timed out" in error.failures[0].raw_message


class TestConfiguration:
    """Test resolver construction and input validation."""

    def test_single_source_chain(self):
        only = FakeSource("only", result=segments("solo"))
        assert resolve(TranscriptResolver([only])).text == "solo"

    def test_requires_a_source(self):
        with pytest.raises(ValueError):
            TranscriptResolver([])

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_rejects_non_positive_timeout(self, timeout):
        with pytest.raises(ValueError):
            TranscriptResolver([FakeSource("a")], timeout=timeout)

    def test_no_timeout_waits(self):
        slow = FakeSource("slow", result=segments("eventually"), delay=0.1)
        assert resolve(TranscriptResolver([slow], timeout=None)).text == "eventually"

    @pytest.mark.parametrize("video_id", ["", "   "])
    def test_empty_video_id_calls_nothing(self, video_id):
        a = FakeSource("a", result=segments("x"))
        with pytest.raises(ValueError):
            resolve(TranscriptResolver([a]), video_id)
        assert a.calls == []

    def test_idempotent_resolution(self):
        a = FakeSource("a", error="boom")
        b = FakeSource("b", result=segments("same", "text", "twice"))
        resolver = TranscriptResolver([a, b])

        first = resolve(resolver)
        second = resolve(resolver)

        assert first.text == second.text == "same text twice"

    def test_build_sources_keeps_order(self):
        built = build_sources(["subtitles", "community"], language="de")
        assert [source.name for source in built] == ["yt-dlp-subtitles", "youtube-transcript-api"]
        assert built[0].language == "de"

    def test_build_sources_official_requires_client(self):
        with pytest.raises(ValueError):
            build_sources(["official"])

    def test_build_sources_rejects_unknown_name(self):
        with pytest.raises(ValueError):
            build_sources(["whisper"])


class TestTranscriptModel:
    """Test joining and the non-empty invariant."""

    def test_single_space_join_in_order(self):
        transcript = Transcript(
            video_id="v",
            source="s",
            segments=[TranscriptSegment(text="Hello"), TranscriptSegment(text="world")],
        )
        assert transcript.text == "Hello world"

    def test_empty_transcript_is_invalid(self):
        with pytest.raises(ValueError):
            Transcript(video_id="v", source="s", segments=[])
