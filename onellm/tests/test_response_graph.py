"""Response object graph tests.

Covers:
- Lossless mapping -> object -> mapping for whole responses and chunks,
  including unknown backend fields.
- Tool calls and usage details.
- Shape errors surface as ``DecodeError``.
- ``accumulate_deltas`` folds streamed chunks into one response.
"""

from __future__ import annotations

import copy

import pytest

from ..base.errors import DecodeError
from ..base.response import DeltaResponse, Response, accumulate_deltas, normalize_chunk, normalize_response
from .helpers import CHAT_COMPLETION, chunk

TOOL_RESPONSE = {
    "id": "chatcmpl-tools",
    "object": "chat.completion",
    "created": 1700000002,
    "model": "gpt-4o",
    "choices": [
        {
            "index": 0,
            "finish_reason": "tool_calls",
            "message": {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "get_weather", "arguments": '{"city": "Oslo"}'},
                    }
                ],
            },
            "logprobs": {
                "content": [
                    {"token": "Hi", "logprob": -0.1, "bytes": [72, 105], "top_logprobs": [{"token": "Hi", "logprob": -0.1, "bytes": [72, 105]}]}
                ],
                "refusal": None,
            },
        }
    ],
    "usage": {"prompt_tokens": 20, "completion_tokens": 5, "total_tokens": 25, "cache_read_input_tokens": 4},
}


@pytest.mark.parametrize("doc", [CHAT_COMPLETION, TOOL_RESPONSE])
def test_response_round_trip_is_lossless(doc):
    original = copy.deepcopy(doc)
    resp = normalize_response(doc)
    assert resp.to_dict() == original  # nosec B101


def test_chunk_round_trip_is_lossless():
    doc = chunk("Hel", role="assistant")
    doc["usage"] = None
    assert normalize_chunk(copy.deepcopy(doc)).to_dict() == doc  # nosec B101


def test_typed_access():
    resp = Response.from_dict(TOOL_RESPONSE)
    call = resp.choices[0].message.tool_calls[0]
    assert call.function.name == "get_weather"  # nosec B101
    assert call.function.arguments == '{"city": "Oslo"}'  # nosec B101
    assert resp.usage.total_tokens == 25  # nosec B101
    assert resp.choices[0].logprobs.content[0].top_logprobs[0].token == "Hi"  # nosec B101
    assert Response.from_dict(CHAT_COMPLETION).text == "Hello there!"  # nosec B101
    assert Response.from_dict(CHAT_COMPLETION).usage.completion_tokens_details.reasoning_tokens == 0  # nosec B101


def test_unknown_fields_survive():
    resp = Response.from_dict(CHAT_COMPLETION)
    assert resp.to_dict()["service_tier"] == "default"  # nosec B101


def test_non_object_is_decode_error():
    with pytest.raises(DecodeError) as exc:
        normalize_response(["not", "an", "object"], provider="openai", model="gpt-4o")
    assert exc.value.message == "Expected a JSON object for Response, got list"  # nosec B101
    assert exc.value.provider == "openai"  # nosec B101


def test_wrong_shape_is_decode_error():
    bad = copy.deepcopy(CHAT_COMPLETION)
    bad["choices"] = "nope"
    with pytest.raises(DecodeError) as exc:
        Response.from_dict(bad)
    assert "choices" in exc.value.message  # nosec B101


def test_negative_usage_is_decode_error():
    bad = copy.deepcopy(CHAT_COMPLETION)
    bad["usage"]["prompt_tokens"] = -1
    with pytest.raises(DecodeError):
        Response.from_dict(bad)


def test_delta_text():
    assert DeltaResponse.from_dict(chunk("abc")).text == "abc"  # nosec B101
    assert DeltaResponse.from_dict(chunk(finish_reason="stop")).text == ""  # nosec B101


def test_accumulate_deltas_concatenates_content():
    chunks = [
        DeltaResponse.from_dict(chunk(role="assistant")),
        DeltaResponse.from_dict(chunk("Hel")),
        DeltaResponse.from_dict(chunk("lo")),
        DeltaResponse.from_dict(chunk(finish_reason="stop")),
    ]
    resp = accumulate_deltas(chunks)
    assert resp.id == "chatcmpl-stream"  # nosec B101
    assert resp.object == "chat.completion"  # nosec B101
    assert resp.text == "Hello"  # nosec B101
    assert resp.choices[0].message.role == "assistant"  # nosec B101
    assert resp.choices[0].finish_reason == "stop"  # nosec B101


def test_accumulate_deltas_merges_tool_call_fragments():
    first = chunk()
    first["choices"][0]["delta"] = {
        "role": "assistant",
        "tool_calls": [{"index": 0, "id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": ""}}],
    }
    second = chunk()
    second["choices"][0]["delta"] = {"tool_calls": [{"index": 0, "function": {"arguments": '{"city": '}}]}
    third = chunk(finish_reason="tool_calls")
    third["choices"][0]["delta"] = {"tool_calls": [{"index": 0, "function": {"arguments": '"Oslo"}'}}]}
    final = {**chunk(), "choices": [], "usage": {"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7}}

    resp = accumulate_deltas(DeltaResponse.from_dict(c) for c in (first, second, third, final))
    call = resp.choices[0].message.tool_calls[0]
    assert call.id == "call_1"  # nosec B101
    assert call.function.name == "get_weather"  # nosec B101
    assert call.function.arguments == '{"city": "Oslo"}'  # nosec B101
    assert resp.choices[0].finish_reason == "tool_calls"  # nosec B101
    assert resp.usage.total_tokens == 7  # nosec B101
