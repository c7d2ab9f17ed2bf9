# transcript_assistant/transcription/captions.py
"""
Caption strategy using youtube_transcript_api (community scraper).
Single responsibility: fetch timed caption segments; no language negotiation.
"""

from __future__ import annotations

from typing import Any, List, Optional

from youtube_transcript_api import YouTubeTranscriptApi

from transcript_assistant.transcription.schema import CaptionSourceError, TranscriptSegment


class CommunityTranscriptSource:
    """Adapter over the unofficial per-video caption feed."""

    name = "youtube-transcript-api"

    def __init__(self, api: Optional[YouTubeTranscriptApi] = None) -> None:
        self._api = api

    def fetch(self, video_id: str) -> List[TranscriptSegment]:
        api = self._api or YouTubeTranscriptApi()
        try:
            fetched = api.fetch(video_id)
        except Exception as exc:  # pylint: disable=broad-except
            raise CaptionSourceError(self.name, _describe(exc)) from exc

        return [
            TranscriptSegment(text=snippet.text, start=snippet.start, duration=snippet.duration)
            for snippet in fetched
            if snippet.text and snippet.text.strip()
        ]


def _describe(exc: Exception) -> str:
    # Library errors carry a short cause next to a long boilerplate message
    cause: Any = getattr(exc, "cause", None)
    return f"{type(exc).__name__}: {cause or exc}"
