# transcript_assistant/__init__.py
"""Video transcript assistant: transcript resolution and LLM question answering over HTTP."""

__version__ = "0.1.0"
