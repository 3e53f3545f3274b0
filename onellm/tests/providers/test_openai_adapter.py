"""OpenAI adapter tests over ``httpx.MockTransport``.

Covers:
- Payload, headers and endpoint; registry prefix stripped from the model.
- Reasoning-model parameter mapping.
- Non-streaming success and HTTP status -> taxonomy mapping.
- Retry of retryable failures only, with exponential backoff.
- Transport exceptions mapped to timeout/network/TLS errors.
- Streaming: split frames, [DONE], in-band errors, early close,
  accumulation, and the ``stream.end`` log event.
- Missing or malformed keys fail at construction.
"""

from __future__ import annotations

import json

import httpx
import pytest

from ...base.errors import (
    ClientAPIError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    NetworkError,
    RequestTimeoutError,
    ServerAPIError,
    TLSError,
    ValidationError,
)
from ...base.models import ChatRequest
from ...openai import OpenAIProvider
from ..helpers import (
    CHAT_COMPLETION,
    USER_HI,
    VALID_OPENAI_KEY,
    RecordingTransport,
    chunk,
    make_config,
    make_openai,
    sse,
    stream_response,
)


def _request(model: str = "openai/gpt-4o-mini", **params) -> ChatRequest:
    return ChatRequest.from_params(model, USER_HI, **params)


def _error(status: int, message: str, kind: str = "invalid_request_error") -> httpx.Response:
    return httpx.Response(status, json={"error": {"message": message, "type": kind}})


# -------------------- payload & headers --------------------


def test_request_wire_shape():
    transport = RecordingTransport(httpx.Response(200, json=CHAT_COMPLETION))
    provider = make_openai(transport)
    provider.complete(_request(temperature=0.5, tools=None))

    sent = transport.requests[0]
    assert sent.method == "POST"  # nosec B101
    assert str(sent.url) == "https://api.openai.com/v1/chat/completions"  # nosec B101
    assert sent.headers["Authorization"] == f"Bearer {VALID_OPENAI_KEY}"  # nosec B101
    assert sent.headers["Content-Type"] == "application/json"  # nosec B101
    assert sent.headers["Accept"] == "application/json"  # nosec B101
    assert transport.json_body() == {  # nosec B101
        "model": "gpt-4o-mini",
        "messages": [{"role": "user", "content": "hi"}],
        "stream": False,
        "temperature": 0.5,
    }


def test_base_url_override():
    transport = RecordingTransport(httpx.Response(200, json=CHAT_COMPLETION))
    provider = make_openai(transport, base_urls={"openai": "https://proxy.test/v1/"})
    provider.complete(_request())
    assert str(transport.requests[0].url) == "https://proxy.test/v1/chat/completions"  # nosec B101


def test_reasoning_model_payload_mapping():
    provider = make_openai(RecordingTransport(httpx.Response(200, json=CHAT_COMPLETION)))
    payload = provider.build_payload(_request("openai/o1-mini", max_tokens=100, reasoning_effort="high"))
    assert payload["max_completion_tokens"] == 100  # nosec B101
    assert "max_tokens" not in payload  # nosec B101
    assert payload["reasoning_effort"] == "high"  # nosec B101

    payload = provider.build_payload(_request("openai/gpt-4o", reasoning_effort="high"))
    assert "reasoning_effort" not in payload  # nosec B101


def test_deprecated_max_tokens_warns_and_is_sent():
    transport = RecordingTransport(httpx.Response(200, json=CHAT_COMPLETION))
    provider = make_openai(transport)
    with pytest.warns(DeprecationWarning):
        provider.complete(_request(max_tokens=20))
    assert transport.json_body()["max_tokens"] == 20  # nosec B101


# -------------------- non-streaming --------------------


def test_complete_returns_normalized_response():
    provider = make_openai(RecordingTransport(httpx.Response(200, json=CHAT_COMPLETION)))
    resp = provider.complete(_request())
    assert resp.id == "chatcmpl-123"  # nosec B101
    assert resp.choices[0].message.role == "assistant"  # nosec B101
    assert resp.text == "Hello there!"  # nosec B101
    assert resp.usage.total_tokens == 12  # nosec B101


@pytest.mark.parametrize(
    "status,exc_type,code,retryable",
    [
        (400, ClientAPIError, ErrorCode.VALIDATION, False),
        (401, ClientAPIError, ErrorCode.AUTH, False),
        (404, ClientAPIError, ErrorCode.NOT_FOUND, False),
        (500, ServerAPIError, ErrorCode.SERVER_ERROR, True),
        (503, ServerAPIError, ErrorCode.UNAVAILABLE, True),
    ],
)
def test_status_mapping(status, exc_type, code, retryable):
    transport = RecordingTransport(_error(status, "nope"))
    provider = make_openai(transport, max_retries=0)
    with pytest.raises(exc_type) as exc:
        provider.complete(_request())
    err = exc.value
    assert err.status_code == status  # nosec B101
    assert err.code is code  # nosec B101
    assert err.retryable is retryable  # nosec B101
    assert "nope" in err.message  # nosec B101
    assert err.provider == "openai" and err.model == "gpt-4o-mini"  # nosec B101


def test_client_error_message_carries_backend_detail():
    provider = make_openai(RecordingTransport(_error(400, "Invalid 'messages'")), max_retries=0)
    with pytest.raises(ClientAPIError) as exc:
        provider.complete(_request())
    assert exc.value.message == "Client error: 400 - Invalid 'messages'"  # nosec B101


def test_server_error_retried_then_succeeds(sleeps):
    transport = RecordingTransport(_error(500, "boom", "server_error"), httpx.Response(200, json=CHAT_COMPLETION))
    provider = make_openai(transport, max_retries=2, retry_delay_base=2.0)
    resp = provider.complete(_request())
    assert resp.text == "Hello there!"  # nosec B101
    assert transport.calls == 2  # nosec B101
    assert sleeps == [1.0]  # nosec B101


def test_server_error_exhausts_retries(sleeps):
    transport = RecordingTransport(_error(502, "bad gateway", "server_error"))
    provider = make_openai(transport, max_retries=2, retry_delay_base=2.0)
    with pytest.raises(ServerAPIError):
        provider.complete(_request())
    assert transport.calls == 3  # nosec B101
    assert sleeps == [1.0, 2.0]  # nosec B101


def test_rate_limit_is_retried():
    transport = RecordingTransport(_error(429, "slow down", "rate_limit_error"), httpx.Response(200, json=CHAT_COMPLETION))
    provider = make_openai(transport)
    provider.complete(_request())
    assert transport.calls == 2  # nosec B101


def test_client_error_not_retried(sleeps):
    transport = RecordingTransport(_error(400, "bad"))
    provider = make_openai(transport, max_retries=3)
    with pytest.raises(ClientAPIError):
        provider.complete(_request())
    assert transport.calls == 1  # nosec B101
    assert sleeps == []  # nosec B101


def test_timeout_maps_and_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    provider = make_openai(handler, max_retries=1)
    with pytest.raises(RequestTimeoutError) as exc:
        provider.complete(_request())
    assert exc.value.retryable  # nosec B101
    assert isinstance(exc.value.raw, httpx.ReadTimeout)  # nosec B101
    assert len(calls) == 2  # nosec B101


def test_connect_error_maps_to_network_error():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("Connection refused", request=request)

    provider = make_openai(handler, max_retries=3)
    with pytest.raises(NetworkError):
        provider.complete(_request())
    assert len(calls) == 1  # nosec B101


def test_certificate_failure_maps_to_tls_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed", request=request)

    provider = make_openai(handler)
    with pytest.raises(TLSError):
        provider.complete(_request())


def test_non_json_body_is_decode_error():
    provider = make_openai(RecordingTransport(httpx.Response(200, text="<html>oops</html>")))
    with pytest.raises(DecodeError) as exc:
        provider.complete(_request())
    assert exc.value.message.startswith("Failed to decode response")  # nosec B101


def test_unexpected_shape_is_decode_error():
    provider = make_openai(RecordingTransport(httpx.Response(200, json={"choices": [{"message": "flat"}]})))
    with pytest.raises(DecodeError):
        provider.complete(_request())


def test_chat_log_events(log_records):
    provider = make_openai(RecordingTransport(httpx.Response(200, json=CHAT_COMPLETION)))
    provider.complete(_request())
    start = log_records.named("chat.start")[0]
    end = log_records.named("chat.end")[0]
    assert start["provider"] == "openai" and start["model"] == "gpt-4o-mini"  # nosec B101
    assert end["tokens"]["total_tokens"] == 12  # nosec B101
    assert end["response_id"] == "chatcmpl-123"  # nosec B101
    assert VALID_OPENAI_KEY not in "".join(log_records.messages)  # nosec B101


# -------------------- streaming --------------------


def test_stream_yields_chunks_across_split_reads():
    body = sse(chunk(role="assistant"), chunk("Hel"), chunk("lo"), chunk(finish_reason="stop"))
    parts = [body[:23], body[23:61], body[61:]]
    transport = RecordingTransport(stream_response(parts))
    provider = make_openai(transport)

    chunks = list(provider.stream(_request()))
    assert "".join(c.text for c in chunks) == "Hello"  # nosec B101
    assert chunks[-1].choices[0].finish_reason == "stop"  # nosec B101
    assert len(chunks) == 4  # nosec B101
    sent = transport.requests[0]
    assert sent.headers["Accept"] == "text/event-stream"  # nosec B101
    assert json.loads(sent.content)["stream"] is True  # nosec B101


def test_stream_stops_at_done():
    body = sse(chunk("a")) + b'data: {"after": "done"}\n\n'
    provider = make_openai(RecordingTransport(stream_response([body])))
    assert [c.text for c in provider.stream(_request())] == ["a"]  # nosec B101


def test_stream_validation_is_eager():
    transport = RecordingTransport(stream_response([sse(chunk("a"))]))
    provider = make_openai(transport)
    with pytest.raises(ValidationError) as exc:
        provider.stream(_request(temperature=9))
    assert "temperature" in str(exc.value)  # nosec B101
    assert transport.calls == 0  # nosec B101


def test_stream_error_chunk_terminates_stream():
    body = sse(chunk("a"), {"error": {"message": "overloaded", "type": "server_error"}}, chunk("b"))
    provider = make_openai(RecordingTransport(stream_response([body])))
    seen = []
    with pytest.raises(ServerAPIError) as exc:
        for c in provider.stream(_request()):
            seen.append(c.text)
    assert seen == ["a"]  # nosec B101
    assert exc.value.message == "Stream error: overloaded"  # nosec B101
    assert exc.value.retryable is False  # nosec B101


def test_stream_malformed_frame_raises_decode_error():
    parts = [sse(chunk("a"), done=False), b"data: {broken\n\n"]
    provider = make_openai(RecordingTransport(stream_response(parts)))
    stream = provider.stream(_request())
    assert next(stream).text == "a"  # nosec B101
    with pytest.raises(DecodeError):
        next(stream)


def test_stream_open_retried_on_server_error(sleeps):
    transport = RecordingTransport(_error(503, "busy", "server_error"), stream_response([sse(chunk("ok"))]))
    provider = make_openai(transport)
    assert [c.text for c in provider.stream(_request())] == ["ok"]  # nosec B101
    assert transport.calls == 2  # nosec B101
    assert len(sleeps) == 1  # nosec B101


def test_stream_http_error_status_raises_before_first_chunk():
    provider = make_openai(RecordingTransport(_error(401, "bad key")), max_retries=0)
    with pytest.raises(ClientAPIError) as exc:
        list(provider.stream(_request()))
    assert exc.value.code is ErrorCode.AUTH  # nosec B101


class _TrackedStream(httpx.SyncByteStream):
    def __init__(self, parts):
        self._parts = parts
        self.closed = False

    def __iter__(self):
        yield from self._parts

    def close(self) -> None:
        self.closed = True


def test_closing_iterator_closes_connection():
    body = sse(chunk("a"), chunk("b"), chunk("c"))
    tracked = _TrackedStream([body[:40], body[40:]])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Type": "text/event-stream"}, stream=tracked)

    provider = make_openai(handler)
    stream = provider.stream(_request())
    assert next(stream).text == "a"  # nosec B101
    stream.close()
    assert tracked.closed  # nosec B101


def test_complete_with_stream_flag_accumulates():
    body = sse(chunk(role="assistant"), chunk("Hel"), chunk("lo"), chunk(finish_reason="stop"))
    provider = make_openai(RecordingTransport(stream_response([body])))
    resp = provider.complete(_request(stream=True))
    assert resp.text == "Hello"  # nosec B101
    assert resp.object == "chat.completion"  # nosec B101


def test_stream_end_log_event(log_records):
    usage = {**chunk(), "choices": [], "usage": {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}}
    body = sse(chunk("a"), chunk("b"), usage)
    provider = make_openai(RecordingTransport(stream_response([body])))
    list(provider.stream(_request(stream=True, stream_options={"include_usage": True})))

    end = log_records.named("stream.end")
    assert len(end) == 1  # nosec B101
    evt = end[0]
    assert evt["chunk_count"] == 3  # nosec B101
    assert evt["emitted"] == 3  # nosec B101
    assert evt["tokens"]["total_tokens"] == 3  # nosec B101
    assert evt["time_to_first_chunk_ms"] is not None  # nosec B101
    assert evt["total_duration_ms"] >= evt["time_to_first_chunk_ms"]  # nosec B101
    assert evt["phase"] == "finalize"  # nosec B101


# -------------------- configuration --------------------


def test_missing_key_fails_at_construction():
    with pytest.raises(ConfigurationError) as exc:
        OpenAIProvider(make_config(api_keys={}))
    assert "OPENAI_API_KEY" in str(exc.value)  # nosec B101


def test_malformed_key_fails_at_construction():
    with pytest.raises(ConfigurationError) as exc:
        OpenAIProvider(make_config(api_keys={"openai": "not-a-key"}))
    assert "not-a-key" not in str(exc.value)  # nosec B101
