"""Streaming metrics collected for the ``stream.end`` log event."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Timing and volume of one streaming invocation.

    ``started_at`` is a ``time.perf_counter`` reading taken when the stream
    was requested.
    """

    started_at: float = field(default_factory=time.perf_counter)
    emitted: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Any]] = None

    def record_chunk(self) -> None:
        if self.emitted == 0:
            self.time_to_first_chunk_ms = round((time.perf_counter() - self.started_at) * 1000, 3)
        self.emitted += 1

    def finish(self) -> None:
        self.total_duration_ms = round((time.perf_counter() - self.started_at) * 1000, 3)


__all__ = ["StreamMetrics"]
