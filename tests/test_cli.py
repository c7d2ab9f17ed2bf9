"""Tests for the transcript command."""
from typer.testing import CliRunner

from tests.fakes import FakeSource, segments
from transcript_assistant.cli import youtube as cli


runner = CliRunner()


def use_sources(monkeypatch, *sources):
    calls = []

    def fake_build_sources(names, **kwargs):
        calls.append(list(names))
        return list(sources)

    monkeypatch.setattr(cli, "build_sources", fake_build_sources)
    return calls


def test_prints_transcript(monkeypatch):
    calls = use_sources(monkeypatch, FakeSource("a", result=segments("Hello", "world")))

    result = runner.invoke(cli.app, ["transcript", "vid123", "--sources", "subtitles,community"])

    assert result.exit_code == 0
    assert "Hello world" in result.stdout
    assert calls == [["subtitles", "community"]]


def test_resolution_failure_lists_attempts(monkeypatch):
    use_sources(monkeypatch, FakeSource("a", error="Subtitles are disabled for this video"))

    result = runner.invoke(cli.app, ["transcript", "vid123", "--sources", "community"])

    assert result.exit_code == 1
    assert "NoCaptionsAvailable" in result.output
    assert "a: Subtitles are disabled for this video" in result.output


def test_unknown_source_is_a_usage_error():
    result = runner.invoke(cli.app, ["transcript", "vid123", "--sources", "whisper"])
    assert result.exit_code == 2
    assert "Unknown caption source" in result.output


def test_invalid_environment_is_a_usage_error(monkeypatch):
    monkeypatch.setenv("TRANSCRIPT_SOURCES", "community,whisper")

    result = runner.invoke(cli.app, ["transcript", "vid123"])

    assert result.exit_code == 2
    assert "✗" in result.output
    assert "Unknown caption source" in result.output
