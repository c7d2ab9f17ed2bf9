# transcript_assistant/transcription/official.py
"""
Caption probe using the official YouTube Data API.

The API key cannot download caption text, so this source never returns
segments. It only tells the resolver whether caption tracks exist
server-side, which distinguishes "no captions" from "captions we may not read".
"""

from __future__ import annotations

from typing import Any, List

from googleapiclient.errors import HttpError

from transcript_assistant.transcription.schema import CaptionSourceError, TranscriptSegment
from transcript_assistant.youtube_api import decode_http_error


class OfficialCaptionProbe:
    """Adapter listing caption track metadata through captions().list."""

    name = "youtube-data-api"

    def __init__(self, client: Any) -> None:
        self._client = client

    def fetch(self, video_id: str) -> List[TranscriptSegment]:
        try:
            response = self._client.captions().list(part="snippet", videoId=video_id).execute()
        except HttpError as exc:
            raise CaptionSourceError(
                self.name,
                f"Caption listing failed ({exc.resp.status}): {_error_message(exc)}",
            ) from exc
        except Exception as exc:  # pylint: disable=broad-except
            raise CaptionSourceError(self.name, f"Caption listing failed: {exc}") from exc

        items = response.get("items") or []
        if not items:
            raise CaptionSourceError(self.name, "No caption tracks found for this video")

        languages = sorted({item.get("snippet", {}).get("language") or "?" for item in items})
        raise CaptionSourceError(
            self.name,
            f"{len(items)} caption track(s) exist ({', '.join(languages)}) but their text cannot be downloaded",
            tracks_exist=True,
        )


def _error_message(exc: HttpError) -> str:
    payload = decode_http_error(exc)
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return str(payload)
