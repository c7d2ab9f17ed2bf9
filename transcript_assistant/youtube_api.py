# transcript_assistant/youtube_api.py
"""
Official YouTube Data API v3 access.

Responsibility:
- Build the API client from an explicit key (no module-level clients)
- Look up video existence and title
- Convert HttpError into UpstreamServiceError with the decoded payload

No transcript logic lives here.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import BaseModel


class UpstreamServiceError(Exception):
    """An external API call failed; details carries its payload for operators."""

    def __init__(self, message: str, details: Any = None, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.status = status


class VideoMetadata(BaseModel):
    """Snippet facts about a video, or exists=False when the API knows no such id."""
    video_id: str
    exists: bool
    title: Optional[str] = None
    channel_title: Optional[str] = None


def build_youtube_client(api_key: str) -> Any:
    """Return a YouTube Data API v3 resource authenticated with a developer key."""
    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


def decode_http_error(exc: HttpError) -> Any:
    """Best-effort decoding of an HttpError body (JSON when possible)."""
    content = exc.content
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        return json.loads(content)
    except (TypeError, ValueError):
        return content


class VideoMetadataLookup:
    """Thin wrapper over videos().list(part="snippet")."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def lookup(self, video_id: str) -> VideoMetadata:
        try:
            response = self._client.videos().list(part="snippet", id=video_id).execute()
        except HttpError as exc:
            raise UpstreamServiceError(
                "YouTube API request failed",
                details=decode_http_error(exc),
                status=exc.resp.status,
            ) from exc
        except Exception as exc:  # pylint: disable=broad-except
            # httplib2 and socket errors
            raise UpstreamServiceError(
                "YouTube API request failed",
                details={"exception": f"{type(exc).__name__}: {exc}"},
            ) from exc

        items = response.get("items") or []
        if not items:
            return VideoMetadata(video_id=video_id, exists=False)

        snippet = items[0].get("snippet", {})
        return VideoMetadata(
            video_id=video_id,
            exists=True,
            title=snippet.get("title"),
            channel_title=snippet.get("channelTitle"),
        )
