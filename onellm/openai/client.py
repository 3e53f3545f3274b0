"""OpenAI chat-completions adapter over HTTP.

Summary:
- Validation against the OpenAI model catalog before any I/O
- Non-stream chat via pooled ``httpx`` clients with retry
- Streaming via the SSE decoder, yielding ``DeltaResponse`` chunks

Timeouts & Retries:
- Connect/read/write timeouts come from ``Configuration.timeouts``
- Retryable failures (5xx, timeouts, 429) are retried with exponential
  backoff; streaming retries only the opening of the stream

Errors & Observability:
- Transport failures are mapped onto the onellm error taxonomy and never
  leak as raw ``httpx`` exceptions
- Structured ``chat.*``, ``stream.*`` and ``retry.attempt`` events; the API
  key is never logged
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterator, Optional

import httpx

from ..base.http import get_httpx_client
from ..base.interfaces import BaseProvider
from ..base.logging import LogContext, get_logger
from ..base.models import ChatRequest
from ..base.resilience.retry import RetryConfig, build_retry_config
from ..base.response import DeltaResponse, Response, accumulate_deltas
from ..config import Configuration
from ..config.defaults import CHAT_COMPLETIONS_PATH, OPENAI_DEFAULT_BASE_URL
from .chat_helpers import OpenAIChatMixin
from .helpers import build_chat_payload, build_headers
from .models import AVAILABLE_MODELS, is_reasoning_model
from .stream_helpers import OpenAIStreamingMixin


class OpenAIProvider(OpenAIChatMixin, OpenAIStreamingMixin, BaseProvider):
    """OpenAI backend adapter.

    Parameters:
        configuration: Settings holding the OpenAI key; read from the
            environment when omitted.
        http_client: Optional ``httpx.Client`` to use instead of the shared
            pool (tests inject one backed by ``httpx.MockTransport``).

    Raises:
        ConfigurationError: at construction when the OpenAI key is missing
            or malformed.
    """

    provider_name = "openai"
    known_models = AVAILABLE_MODELS

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        *,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        configuration = configuration or Configuration.from_env()
        super().__init__(configuration)
        self._api_key = configuration.require_api_key(self.provider_name)
        base_url = (configuration.base_url(self.provider_name) or OPENAI_DEFAULT_BASE_URL).rstrip("/")
        self._base_url = base_url
        self._url = f"{base_url}{CHAT_COMPLETIONS_PATH}"
        self._http_client = http_client
        self._logger = get_logger("onellm.openai")

    def is_reasoning_model(self, model_name: str) -> bool:
        return is_reasoning_model(model_name)

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        name = self.model_name(request)
        return build_chat_payload(request, model_name=name, reasoning=self.is_reasoning_model(name))

    def complete(self, request: ChatRequest) -> Response:
        """Run a completion; a ``stream=True`` request is streamed and re-assembled."""
        if request.stream:
            return accumulate_deltas(self.stream(request))
        self.validate(request)
        payload = self.build_payload(request)
        headers = build_headers(self._api_key, stream=False)
        return self._execute_chat(payload, headers, self.log_context(request))

    def stream(self, request: ChatRequest) -> Iterator[DeltaResponse]:
        """Validate now and return a lazy iterator over the streamed chunks."""
        if not request.stream:
            request = replace(request, stream=True)
        self.validate(request)
        payload = self.build_payload(request)
        headers = build_headers(self._api_key, stream=True)
        return self._iter_stream(payload, headers, self.log_context(request))

    # -------------------- Internal helpers --------------------

    def _http(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._base_url, purpose=self.provider_name, timeouts=self.configuration.timeouts)

    def _retry_config(self, ctx: LogContext, phase: str) -> RetryConfig:
        return build_retry_config(
            max_retries=self.configuration.max_retries,
            delay_base=self.configuration.retry_delay_base,
            logger=self._logger,
            ctx=ctx,
            phase=phase,
        )


__all__ = ["OpenAIProvider"]
