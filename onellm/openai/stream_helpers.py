"""Streaming helpers for the OpenAI adapter.

The stream is exposed as a generator of :class:`DeltaResponse` chunks.
Opening the stream (sending the request and checking the HTTP status) is
retried under the adapter's retry policy; once the first chunk has been
yielded nothing is retried. Closing the generator closes the HTTP response.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator

import httpx

from ..base.errors import ProviderError, wrap_transport_error
from ..base.logging import LogContext, normalized_log_event
from ..base.resilience.retry import retry
from ..base.response import DeltaResponse, normalize_chunk
from ..base.streaming import SSEDecoder, StreamMetrics
from .helpers import check_status, stream_error


class OpenAIStreamingMixin:
    """Mixin providing the server-sent-event streaming cycle."""

    def _open_stream(self, payload: Dict[str, Any], headers: Dict[str, str], model: str) -> httpx.Response:
        client = self._http()
        request = client.build_request("POST", self._url, json=payload, headers=headers)
        try:
            resp = client.send(request, stream=True)
        except (httpx.HTTPError, OSError) as e:
            raise wrap_transport_error(e, provider=self.provider_name, model=model) from e
        if not resp.is_success:
            try:
                resp.read()
            except httpx.HTTPError as e:
                resp.close()
                raise wrap_transport_error(e, provider=self.provider_name, model=model) from e
            resp.close()
            check_status(resp, provider=self.provider_name, model=model)
        return resp

    def _to_chunk(self, data: Any, model: str) -> DeltaResponse:
        err = stream_error(data, provider=self.provider_name, model=model)
        if err is not None:
            raise err
        return normalize_chunk(data, provider=self.provider_name, model=model)

    def _iter_stream(self, payload: Dict[str, Any], headers: Dict[str, str], ctx: LogContext) -> Iterator[DeltaResponse]:
        """Yield decoded chunks in arrival order, stopping at the ``[DONE]`` sentinel."""
        model = ctx.model
        metrics = StreamMetrics()
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=False,
            tokens=None,
            message_count=len(payload.get("messages", ())),
        )
        usage = None
        try:
            resp = retry(self._retry_config(ctx, "stream.start"))(self._open_stream)(payload, headers, model)
            try:
                decoder = SSEDecoder(provider=self.provider_name, model=model)
                try:
                    for raw in resp.iter_bytes():
                        for data in decoder.feed(raw):
                            chunk = self._to_chunk(data, model)
                            usage = chunk.usage or usage
                            metrics.record_chunk()
                            yield chunk
                        if decoder.done:
                            break
                except (httpx.HTTPError, OSError) as e:
                    raise wrap_transport_error(e, provider=self.provider_name, model=model) from e
                for data in decoder.close():
                    chunk = self._to_chunk(data, model)
                    usage = chunk.usage or usage
                    metrics.record_chunk()
                    yield chunk
            finally:
                resp.close()
        except ProviderError as e:
            metrics.finish()
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="finalize",
                attempt=None,
                error_code=e.code.value,
                emitted=metrics.emitted,
                tokens=None,
                level=logging.ERROR,
                error=e.message,
                chunk_count=metrics.emitted,
                total_duration_ms=metrics.total_duration_ms,
            )
            raise
        metrics.finish()
        normalized_log_event(
            self._logger,
            "stream.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=metrics.emitted,
            tokens=usage,
            time_to_first_chunk_ms=metrics.time_to_first_chunk_ms,
            total_duration_ms=metrics.total_duration_ms,
            chunk_count=metrics.emitted,
        )


__all__ = ["OpenAIStreamingMixin"]
