"""Server-sent-event decoder for streaming chat completions.

Purpose:
    Turn an arbitrarily chunked byte stream into decoded JSON payloads. A
    network read is never assumed to hold exactly one event: incoming bytes
    are buffered and only complete frames (terminated by a blank line) are
    parsed. Bytes after the last complete frame stay buffered for the next
    read.

Frame handling:
    - ``\\r\\n`` line endings are normalized to ``\\n``.
    - ``data:`` lines (with or without a following space) are joined with
      ``\\n``; comment lines (``:``) and other fields (``event``, ``id``,
      ``retry``) are ignored.
    - The ``[DONE]`` sentinel marks the end of the stream. It is never
      emitted and everything after it is discarded.

Failure modes:
    - A frame whose data is not valid JSON raises :class:`DecodeError`; the
      frame is never skipped silently.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, List, Optional

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..errors import DecodeError

_FRAME_DELIMITER = b"\n\n"


class SSEDecoder:
    """Stateful accumulator over streamed bytes.

    Usage::

        decoder = SSEDecoder()
        for raw in response.iter_bytes():
            for payload in decoder.feed(raw):
                handle(payload)
            if decoder.done:
                break
        for payload in decoder.close():
            handle(payload)
    """

    def __init__(self, *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        self._buffer = b""
        self.done = False
        self._provider = provider
        self._model = model

    @property
    def pending(self) -> bytes:
        """Bytes received but not yet forming a complete frame."""
        return self._buffer

    def feed(self, data: bytes) -> List[Any]:
        """Append ``data`` and return the payloads of every frame it completed."""
        if self.done or not data:
            return []
        self._buffer = (self._buffer + data).replace(b"\r\n", b"\n")
        out: List[Any] = []
        while not self.done and _FRAME_DELIMITER in self._buffer:
            frame, self._buffer = self._buffer.split(_FRAME_DELIMITER, 1)
            payload = self._parse_frame(frame)
            if payload is not None:
                out.append(payload)
        if self.done:
            self._buffer = b""
        return out

    def close(self) -> List[Any]:
        """Flush a trailing frame that was not terminated by a blank line."""
        if self.done:
            return []
        frame, self._buffer = self._buffer.strip(b"\n"), b""
        if not frame:
            return []
        payload = self._parse_frame(frame)
        return [] if payload is None else [payload]

    def _parse_frame(self, frame: bytes) -> Optional[Any]:
        try:
            text = frame.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(
                message=f"Failed to parse streaming chunk: invalid UTF-8 ({exc})",
                provider=self._provider,
                model=self._model,
                raw=exc,
            ) from exc
        data_lines: List[str] = []
        for line in text.split("\n"):
            if not line.startswith(SSE_DATA_PREFIX):
                continue
            value = line[len(SSE_DATA_PREFIX):]
            data_lines.append(value[1:] if value.startswith(" ") else value)
        if not data_lines:
            return None
        payload = "\n".join(data_lines)
        if payload.strip() == SSE_DONE_SENTINEL:
            self.done = True
            return None
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise DecodeError(
                message=f"Failed to parse streaming chunk: {exc}",
                provider=self._provider,
                model=self._model,
                body=payload,
                raw=exc,
            ) from exc


def iter_sse_payloads(
    chunks: Iterable[bytes],
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> Iterator[Any]:
    """Yield decoded payloads from ``chunks``, stopping at the ``[DONE]`` sentinel."""
    decoder = SSEDecoder(provider=provider, model=model)
    for raw in chunks:
        yield from decoder.feed(raw)
        if decoder.done:
            return
    yield from decoder.close()


__all__ = ["SSEDecoder", "iter_sse_payloads"]
