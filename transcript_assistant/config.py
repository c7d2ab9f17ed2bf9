# transcript_assistant/config.py
"""Configuration management and environment variable loading."""

from __future__ import annotations

import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from transcript_assistant.transcription.core import DEFAULT_ADAPTER_TIMEOUT, SOURCE_NAMES


class MissingConfiguration(Exception):
    """A required setting (usually an API key) is absent."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        self.message = f"{env_var} is not configured"
        super().__init__(self.message)


# Field name → environment variable
ENV_VARS = {
    "youtube_api_key": "YOUTUBE_API_KEY",
    "gemini_api_key": "GEMINI_API_KEY",
    "gemini_model": "GEMINI_MODEL",
    "host": "HOST",
    "port": "PORT",
    "subtitle_language": "SUBTITLE_LANGUAGE",
    "transcript_sources": "TRANSCRIPT_SOURCES",
    "adapter_timeout_seconds": "ADAPTER_TIMEOUT_SECONDS",
    "static_dir": "STATIC_DIR",
    "cors_origins": "CORS_ORIGINS",
    "log_level": "LOG_LEVEL",
}

LIST_FIELDS = ("transcript_sources", "cors_origins")


class AppConfig(BaseModel):
    """
    Process-wide settings, created once at start-up and never mutated.

    Pass an instance into create_app(); nothing reads os.environ afterwards.
    """
    youtube_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    host: str = "0.0.0.0"
    port: int = 3000
    subtitle_language: str = "en"
    transcript_sources: List[str] = Field(default_factory=lambda: list(SOURCE_NAMES))
    adapter_timeout_seconds: float = Field(default=DEFAULT_ADAPTER_TIMEOUT, gt=0)
    static_dir: str = "static"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    model_config = ConfigDict(frozen=True)

    @field_validator("transcript_sources")
    @classmethod
    def validate_sources(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("transcript_sources must name at least one caption source")
        unknown = [name for name in value if name not in SOURCE_NAMES]
        if unknown:
            raise ValueError(f"Unknown caption source(s): {', '.join(unknown)}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build the configuration from environment variables.

        A .env file is loaded first when reading the real environment
        (existing variables win).
        """
        if environ is None:
            load_dotenv(override=False)
            environ = os.environ

        values = {}
        for field, env_var in ENV_VARS.items():
            raw = environ.get(env_var)
            if raw is None or raw.strip() == "":
                continue
            if field in LIST_FIELDS:
                values[field] = [item.strip() for item in raw.split(",") if item.strip()]
            else:
                values[field] = raw.strip()
        return cls.model_validate(values)

    def require(self, field: str) -> str:
        """Return a non-empty setting or raise MissingConfiguration naming its env var."""
        value = getattr(self, field)
        if not value:
            raise MissingConfiguration(ENV_VARS[field])
        return value
