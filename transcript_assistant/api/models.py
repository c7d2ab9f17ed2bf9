# transcript_assistant/api/models.py
"""Request bodies for the HTTP surface. Wire names are camelCase, attributes snake_case."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from transcript_assistant.assistant import ChatMessage


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ConvertRequest(ApiModel):
    # Optional at the schema level so a missing id gets the dedicated 400 message
    video_id: Optional[str] = Field(default=None, alias="videoId")


class AskRequest(ApiModel):
    question: str
    transcript: str
    history: Optional[List[ChatMessage]] = None


class SummarizeRequest(ApiModel):
    text: str


class ExpandSummaryRequest(ApiModel):
    text: str
    current_summary: str = Field(alias="currentSummary")
