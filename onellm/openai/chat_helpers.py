"""Chat helpers for the OpenAI adapter.

Encapsulates non-streaming chat orchestration so the main provider module
stays focused on wiring.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict

import httpx

from ..base.errors import ProviderError, wrap_transport_error
from ..base.logging import LogContext, normalized_log_event
from ..base.resilience.retry import retry
from ..base.response import Response, normalize_response
from .helpers import check_status, decode_json_body


class OpenAIChatMixin:
    """Mixin providing the non-streaming request/response cycle."""

    def _execute_chat(self, payload: Dict[str, Any], headers: Dict[str, str], ctx: LogContext) -> Response:
        """POST the payload with retry and return the normalized response."""
        model = ctx.model
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=False,
            tokens=None,
            message_count=len(payload.get("messages", ())),
        )
        t0 = time.perf_counter()
        try:
            data = retry(self._retry_config(ctx, "chat"))(self._make_chat_call(payload, headers, model))()
            response = normalize_response(data, provider=self.provider_name, model=model)
        except ProviderError as e:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                attempt=None,
                error_code=e.code.value,
                emitted=False,
                tokens=None,
                level=logging.ERROR,
                status_code=e.status_code,
                error=e.message,
            )
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=True,
            tokens=response.usage,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 3),
            response_id=response.id,
        )
        return response

    def _make_chat_call(self, payload: Dict[str, Any], headers: Dict[str, str], model: str):
        """Return a callable performing one chat POST and decoding the JSON body."""

        def _invoke():
            try:
                resp = self._http().post(self._url, json=payload, headers=headers)
            except (httpx.HTTPError, OSError) as e:
                raise wrap_transport_error(e, provider=self.provider_name, model=model) from e
            check_status(resp, provider=self.provider_name, model=model)
            return decode_json_body(resp, provider=self.provider_name, model=model)

        return _invoke


__all__ = ["OpenAIChatMixin"]
