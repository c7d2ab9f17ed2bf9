# transcript_assistant/cli/youtube.py
"""
CLI entrypoint for the transcript assistant.

Thin adapter, no business logic.
Responsibilities:
- Run the HTTP server under uvicorn
- Resolve a single transcript from the terminal for diagnosis
- Provide clear user feedback

All logging is structured JSON from the core.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer
import uvicorn

from transcript_assistant.config import AppConfig, MissingConfiguration
from transcript_assistant.logging_core.logger import configure_logging
from transcript_assistant.transcription.core import TranscriptResolver, build_sources
from transcript_assistant.transcription.schema import ResolutionError
from transcript_assistant.youtube_api import build_youtube_client


app = typer.Typer(
    name="transcript-assistant",
    help="Video transcript assistant: transcript resolution and AI Q&A over HTTP",
    no_args_is_help=True,
)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: HOST or 0.0.0.0)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: PORT or 3000)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes (development only)"),
) -> None:
    """
    Start the HTTP server.
    """
    try:
        config = AppConfig.from_env()
    except ValueError as exc:
        typer.echo(typer.style(f"✗ Invalid configuration: {exc}", fg=typer.colors.RED, bold=True), err=True)
        sys.exit(2)

    bind_host = host or config.host
    bind_port = port or config.port

    typer.echo(f"Server running at http://localhost:{bind_port}")
    typer.echo(f"YouTube API key: {'set' if config.youtube_api_key else 'missing'}")

    uvicorn.run(
        "transcript_assistant.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=config.log_level.lower(),
    )


@app.command()
def transcript(
    video_id: str = typer.Argument(..., help="YouTube video id"),
    sources: Optional[str] = typer.Option(
        None, "--sources", "-s", help="Comma-separated caption sources in priority order (community,subtitles,official)"
    ),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Preferred subtitle language"),
) -> None:
    """
    Resolve one transcript through the fallback chain and print its text.
    """
    try:
        config = AppConfig.from_env()
        configure_logging(config.log_level)
        names = [name.strip() for name in sources.split(",") if name.strip()] if sources else config.transcript_sources

        client = build_youtube_client(config.require("youtube_api_key")) if "official" in names else None
        resolver = TranscriptResolver(
            build_sources(
                names,
                language=language or config.subtitle_language,
                youtube_client=client,
                socket_timeout=config.adapter_timeout_seconds,
            ),
            timeout=config.adapter_timeout_seconds,
        )
        result = asyncio.run(resolver.resolve(video_id))
    except (MissingConfiguration, ValueError) as exc:
        typer.echo(typer.style(f"✗ {exc}", fg=typer.colors.RED, bold=True), err=True)
        sys.exit(2)
    except ResolutionError as exc:
        typer.echo(typer.style(f"✗ {exc.kind.value}: {exc.message}", fg=typer.colors.RED, bold=True), err=True)
        for failure in exc.failures:
            typer.echo(f"  - {failure.source_name}: {failure.raw_message}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        typer.echo("\nInterrupted by user.", err=True)
        sys.exit(1)

    typer.echo(typer.style(f"✓ Transcript from {result.source} ({len(result.segments)} segments)", fg=typer.colors.GREEN), err=True)
    typer.echo(result.text)


if __name__ == "__main__":
    app()
