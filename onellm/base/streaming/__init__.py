"""Streaming primitives: SSE decoding and stream metrics."""

from .metrics import StreamMetrics
from .sse import SSEDecoder, iter_sse_payloads

__all__ = ["SSEDecoder", "iter_sse_payloads", "StreamMetrics"]
