# transcript_assistant/transcription/subtitles.py
"""
Subtitle strategy using yt-dlp with an explicit language preference.

Responsibility:
- Read the subtitle / automatic caption catalogue of a video (no media download)
- Pick the best json3 track for the preferred language
- Parse the track into timed segments

Returns an empty list when the preferred language is absent; the resolver
treats that exactly like a failure.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import yt_dlp

from transcript_assistant.transcription.schema import CaptionSourceError, TranscriptSegment


YDL_PARAMS = {
    "quiet": True,
    "no_warnings": True,
    "skip_download": True,
    "noplaylist": True,
}

SUBTITLE_FORMAT = "json3"


class LanguageSubtitleSource:
    """Adapter extracting subtitles in a preferred language through yt-dlp."""

    name = "yt-dlp-subtitles"

    def __init__(
        self,
        language: str = "en",
        socket_timeout: Optional[float] = None,
        ydl_factory: Callable[[Dict[str, Any]], Any] = yt_dlp.YoutubeDL,
    ) -> None:
        self.language = language
        self.socket_timeout = socket_timeout
        self._ydl_factory = ydl_factory

    def fetch(self, video_id: str) -> List[TranscriptSegment]:
        params = dict(YDL_PARAMS)
        if self.socket_timeout:
            params["socket_timeout"] = self.socket_timeout

        try:
            with self._ydl_factory(params) as ydl:
                info = ydl.extract_info(f"https://www.youtube.com/watch?v={video_id}", download=False)
                if not info:
                    raise yt_dlp.DownloadError("No info returned")

                track = select_track(info, self.language)
                if track is None:
                    return []

                with ydl.urlopen(track["url"]) as response:
                    payload = response.read()
            return parse_json3(payload)

        except yt_dlp.DownloadError as exc:
            # Covers private, deleted, age-restricted and geo-blocked videos
            raise CaptionSourceError(self.name, str(exc).replace("ERROR: ", "", 1)) from exc
        except Exception as exc:  # pylint: disable=broad-except
            raise CaptionSourceError(self.name, f"Subtitle extraction failed: {exc}") from exc


def select_track(info: Dict[str, Any], language: str) -> Optional[Dict[str, Any]]:
    """
    Choose the json3 subtitle track matching the preferred language.

    Uploader subtitles win over automatic captions; within each, the exact
    language code wins over regional variants (en-US, en-GB, ...).
    """
    prefix = f"{language}-"
    for catalogue in (info.get("subtitles") or {}, info.get("automatic_captions") or {}):
        exact = [code for code in catalogue if code == language]
        regional = sorted(code for code in catalogue if code.startswith(prefix))
        for code in exact + regional:
            for fmt in catalogue[code] or []:
                if fmt.get("ext") == SUBTITLE_FORMAT and fmt.get("url"):
                    return fmt
    return None


def parse_json3(payload: bytes | str) -> List[TranscriptSegment]:
    """Parse a YouTube json3 caption document into segments, skipping blank events."""
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    data = json.loads(payload)

    segments: List[TranscriptSegment] = []
    for event in data.get("events", []):
        segs = event.get("segs")
        if not segs:
            continue

        text = " ".join("".join(seg.get("utf8", "") for seg in segs).split())
        if not text:
            continue

        segments.append(
            TranscriptSegment(
                text=text,
                start=float(event.get("tStartMs", 0)) / 1000.0,
                duration=float(event.get("dDurationMs", 0)) / 1000.0,
            )
        )
    return segments
