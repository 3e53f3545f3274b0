"""Payload, header and response helpers for the OpenAI adapter.

Pure functions only; all I/O lives in the chat and streaming mixins.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.constants import EVENT_STREAM_CONTENT_TYPE, JSON_CONTENT_TYPE
from ..base.errors import ClientAPIError, DecodeError, ProviderError, ServerAPIError, error_for_status
from ..base.models import ChatRequest


def build_chat_payload(request: ChatRequest, *, model_name: str, reasoning: bool) -> Dict[str, Any]:
    """Return the chat-completions JSON body for ``request``.

    Unset fields are omitted. The model is sent without its registry prefix.
    Reasoning models receive ``max_completion_tokens`` in place of the legacy
    ``max_tokens``; other models never receive ``reasoning_effort``.
    """
    payload = request.to_dict()
    payload["model"] = model_name
    if reasoning:
        if "max_tokens" in payload:
            payload["max_completion_tokens"] = payload.pop("max_tokens")
    else:
        payload.pop("reasoning_effort", None)
    return payload


def build_headers(api_key: str, *, stream: bool) -> Dict[str, str]:
    return {
        "Content-Type": JSON_CONTENT_TYPE,
        "Authorization": f"Bearer {api_key}",
        "Accept": EVENT_STREAM_CONTENT_TYPE if stream else JSON_CONTENT_TYPE,
    }


def check_status(resp: httpx.Response, *, provider: str, model: Optional[str]) -> None:
    """Raise the taxonomy error for a non-2xx response (body must already be read)."""
    if resp.is_success:
        return
    raise error_for_status(resp.status_code, resp.text, provider=provider, model=model)


def decode_json_body(resp: httpx.Response, *, provider: str, model: Optional[str]) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise DecodeError(
            message=f"Failed to decode response: {exc}",
            provider=provider,
            model=model,
            status_code=resp.status_code,
            body=resp.text,
            raw=exc,
        ) from exc


def stream_error(payload: Any, *, provider: str, model: Optional[str]) -> Optional[ProviderError]:
    """Return the error carried by a stream chunk holding ``error`` instead of ``choices``."""
    if not isinstance(payload, dict) or "error" not in payload or "choices" in payload:
        return None
    err = payload["error"]
    if isinstance(err, dict):
        message = err.get("message") or "unknown error"
        kind = err.get("type")
    else:
        message, kind = str(err), None
    if kind == "server_error":
        return ServerAPIError(message=f"Stream error: {message}", provider=provider, model=model, retryable=False)
    return ClientAPIError(message=f"Stream error: {message}", provider=provider, model=model)


__all__ = [
    "build_chat_payload",
    "build_headers",
    "check_status",
    "decode_json_body",
    "stream_error",
]
