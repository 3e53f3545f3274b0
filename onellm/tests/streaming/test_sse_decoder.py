"""SSE decoder tests.

Covers:
- A frame split across two network reads is buffered and decoded once.
- Decoding stops exactly at ``[DONE]``; the sentinel is never emitted.
- CRLF line endings, comments, multi-line data and a trailing unterminated
  frame.
- Malformed JSON raises ``DecodeError`` instead of being skipped.
"""

from __future__ import annotations

import json

import pytest

from ...base.errors import DecodeError
from ...base.streaming import SSEDecoder, iter_sse_payloads


def test_split_frame_is_reassembled():
    raw = b'data: {"id": "c1", "choices": [{"index": 0, "delta": {"content": "Hel"}}]}\n\n'
    dec = SSEDecoder()
    assert dec.feed(raw[:17]) == []  # nosec B101
    assert dec.pending == raw[:17]  # nosec B101
    out = dec.feed(raw[17:])
    assert out == [json.loads(raw[len(b"data: "):])]  # nosec B101
    assert dec.pending == b""  # nosec B101


def test_multiple_frames_in_one_read():
    dec = SSEDecoder()
    out = dec.feed(b'data: {"n": 1}\n\ndata: {"n": 2}\n\ndata: {"n"')
    assert out == [{"n": 1}, {"n": 2}]  # nosec B101
    assert dec.feed(b": 3}\n\n") == [{"n": 3}]  # nosec B101


def test_stops_at_done_sentinel():
    dec = SSEDecoder()
    out = dec.feed(b'data: {"n": 1}\n\ndata: [DONE]\n\ndata: {"n": 2}\n\n')
    assert out == [{"n": 1}]  # nosec B101
    assert dec.done  # nosec B101
    assert dec.pending == b""  # nosec B101
    assert dec.feed(b'data: {"n": 3}\n\n') == []  # nosec B101
    assert dec.close() == []  # nosec B101


def test_crlf_comments_and_other_fields():
    dec = SSEDecoder()
    out = dec.feed(b': keep-alive\r\n\r\nevent: message\r\nid: 7\r\ndata:{"n": 1}\r\n\r\n')
    assert out == [{"n": 1}]  # nosec B101


def test_multiline_data_joined_with_newline():
    dec = SSEDecoder()
    assert dec.feed(b'data: {"a":\ndata: 1}\n\n') == [{"a": 1}]  # nosec B101


def test_close_flushes_trailing_frame():
    dec = SSEDecoder()
    assert dec.feed(b'data: {"n": 1}') == []  # nosec B101
    assert dec.close() == [{"n": 1}]  # nosec B101


def test_malformed_json_raises_decode_error():
    dec = SSEDecoder(provider="openai", model="gpt-4o")
    with pytest.raises(DecodeError) as exc:
        dec.feed(b"data: {not json}\n\n")
    err = exc.value
    assert err.message.startswith("Failed to parse streaming chunk")  # nosec B101
    assert err.provider == "openai" and err.body == "{not json}"  # nosec B101


def test_invalid_utf8_raises_decode_error():
    with pytest.raises(DecodeError):
        SSEDecoder().feed(b"data: \xff\xfe\n\n")


def test_iter_sse_payloads_over_byte_chunks():
    body = b'data: {"n": 1}\n\ndata: {"n": 2}\n\ndata: [DONE]\n\n'
    chunks = [body[i:i + 5] for i in range(0, len(body), 5)]
    assert list(iter_sse_payloads(chunks)) == [{"n": 1}, {"n": 2}]  # nosec B101
