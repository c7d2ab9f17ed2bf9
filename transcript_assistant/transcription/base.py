# transcript_assistant/transcription/base.py
"""
Shared base definitions and utilities for all caption sources.

This module defines:
- The CaptionSource contract
- A lightweight timer for consistent execution_time_ms measurement

All caption sources MUST conform to the defined interface.
No business logic belongs here.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Callable, Iterator, List, Protocol, runtime_checkable

from transcript_assistant.transcription.schema import TranscriptSegment


@runtime_checkable
class CaptionSource(Protocol):
    """
    Structural contract for one strategy of obtaining caption text.

    fetch() returns the segments in source order, an empty list when
    the source has nothing for this video, or raises CaptionSourceError.
    Implementations are stateless between calls.
    """

    name: str

    def fetch(self, video_id: str) -> List[TranscriptSegment]:
        ...


@contextmanager
def timer() -> Iterator[Callable[[], float]]:
    """
    Context manager that provides an end() function returning elapsed time in milliseconds.

    Usage:
        with timer() as end:
            # do work
            pass
        execution_time_ms = end()
    """
    start = time.perf_counter()

    def end() -> float:
        return (time.perf_counter() - start) * 1000

    yield end
