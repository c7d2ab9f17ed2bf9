# transcript_assistant/api/__init__.py
"""HTTP surface: FastAPI app factory, request models and error mapping."""

from transcript_assistant.api.app import create_app

__all__ = ["create_app"]
