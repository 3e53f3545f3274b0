"""Shared fixtures data and fakes for the onellm test suite."""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List

import httpx

from ..base.interfaces import BaseProvider
from ..base.models import ChatRequest
from ..base.response import DeltaResponse, Response
from ..config import Configuration
from ..openai import OpenAIProvider

VALID_OPENAI_KEY = "sk-" + "a1B2c3D4e5" * 5

USER_HI = [{"role": "user", "content": "hi"}]

CHAT_COMPLETION: Dict[str, Any] = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "created": 1700000000,
    "model": "gpt-4o-mini-2024-07-18",
    "system_fingerprint": "fp_44709d6fcb",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello there!", "refusal": None},
            "logprobs": None,
            "finish_reason": "stop",
        }
    ],
    "usage": {
        "prompt_tokens": 9,
        "completion_tokens": 3,
        "total_tokens": 12,
        "prompt_tokens_details": {"cached_tokens": 0, "audio_tokens": 0},
        "completion_tokens_details": {
            "reasoning_tokens": 0,
            "audio_tokens": 0,
            "accepted_prediction_tokens": 0,
            "rejected_prediction_tokens": 0,
        },
    },
    "service_tier": "default",
}


def chunk(content: str | None = None, *, role: str | None = None, finish_reason: str | None = None, index: int = 0) -> Dict[str, Any]:
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    return {
        "id": "chatcmpl-stream",
        "object": "chat.completion.chunk",
        "created": 1700000001,
        "model": "gpt-4o-mini",
        "choices": [{"index": index, "delta": delta, "logprobs": None, "finish_reason": finish_reason}],
    }


def sse(*payloads: Any, done: bool = True) -> bytes:
    """Encode payloads as a server-sent-event body."""
    frames = [f"data: {json.dumps(p)}\n\n" for p in payloads]
    if done:
        frames.append("data: [DONE]\n\n")
    return "".join(frames).encode("utf-8")


def make_config(**kwargs: Any) -> Configuration:
    kwargs.setdefault("api_keys", {"openai": VALID_OPENAI_KEY})
    kwargs.setdefault("max_retries", 2)
    kwargs.setdefault("retry_delay_base", 0.0)
    return Configuration(**kwargs)


class RecordingTransport:
    """``httpx.MockTransport`` handler that records requests and replays responses."""

    def __init__(self, *responses: Callable[[httpx.Request], httpx.Response] | httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, httpx.Response):
            return httpx.Response(item.status_code, headers=item.headers, content=item.content)
        return item(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_body(self, i: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[i].content)


def make_openai(handler: Callable[[httpx.Request], httpx.Response], **config_kwargs: Any) -> OpenAIProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenAIProvider(make_config(**config_kwargs), http_client=client)


def stream_response(parts: Iterable[bytes], status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Return a handler producing a fresh multi-read streaming response on each call."""
    parts = list(parts)

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            headers={"Content-Type": "text/event-stream"},
            content=iter(parts),
        )

    return _handler


class ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self) -> List[Dict[str, Any]]:
        out = []
        for m in self.messages:
            try:
                out.append(json.loads(m))
            except ValueError:
                continue
        return out

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events() if e.get("event") == event]


class DemoProvider(BaseProvider):
    """In-memory backend used to exercise the registry and client facade."""

    provider_name = "demo"

    def __init__(self, configuration=None) -> None:
        super().__init__(configuration)
        self.calls: List[ChatRequest] = []

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        payload = request.to_dict()
        payload["model"] = self.model_name(request)
        return payload

    def complete(self, request: ChatRequest) -> Response:
        self.validate(request)
        self.calls.append(request)
        last = request.messages[-1].text_or_joined()
        return Response.from_dict(
            {
                "id": "demo-1",
                "object": "chat.completion",
                "created": 1,
                "model": self.model_name(request),
                "choices": [
                    {"index": 0, "message": {"role": "assistant", "content": f"echo: {last}"}, "finish_reason": "stop"}
                ],
            }
        )

    def stream(self, request: ChatRequest) -> Iterator[DeltaResponse]:
        self.validate(request)
        self.calls.append(request)
        return self._chunks()

    def _chunks(self) -> Iterator[DeltaResponse]:
        for part in ("ec", "ho"):
            yield DeltaResponse.from_dict(chunk(part))
        yield DeltaResponse.from_dict(chunk(finish_reason="stop"))
