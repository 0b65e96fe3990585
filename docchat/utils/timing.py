"""
Stage timing for the async chat pipeline.

    async with Timer("retrieval") as t:
        result = await retrieve(query, search_client, settings)
    stage_timings["retrieval"] = t.elapsed_s
"""

from __future__ import annotations

import time
from typing import Any

from docchat.utils.logging import get_logger

logger = get_logger("docchat.timing")


class Timer:
    """Async context manager recording wall-clock time for one stage."""

    def __init__(self, label: str = ""):
        self.label = label
        self._start: float = 0.0
        self.elapsed_s: float = 0.0

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_s * 1000

    async def __aenter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    async def __aexit__(self, *_: Any) -> None:
        self.elapsed_s = time.perf_counter() - self._start
        if self.label:
            logger.debug("[TIMING] %s took %.1fms", self.label, self.elapsed_ms)
