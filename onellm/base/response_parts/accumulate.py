"""
Re-assembly of a streamed completion into a whole :class:`Response`.

Content and refusal fragments are concatenated per choice index. Tool-call
fragments are grouped by their own index, keeping the first id, type and
name seen and concatenating argument fragments in arrival order.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable

from .completion import DeltaResponse, Response

_ENVELOPE_FIELDS = ("id", "created", "model", "system_fingerprint")


def _merge_tool_call(slot: Dict[str, Any], fragment: Dict[str, Any]) -> None:
    for key in ("id", "type"):
        if fragment.get(key) is not None and key not in slot:
            slot[key] = fragment[key]
    fn = fragment.get("function") or {}
    target = slot.setdefault("function", {})
    if fn.get("name") is not None and "name" not in target:
        target["name"] = fn["name"]
    if fn.get("arguments") is not None:
        target["arguments"] = target.get("arguments", "") + fn["arguments"]


def _merge_choice(state: Dict[str, Any], choice: Dict[str, Any]) -> None:
    delta = choice.get("delta") or {}
    message = state["message"]
    if delta.get("role") is not None:
        message["role"] = delta["role"]
    for key in ("content", "refusal"):
        if delta.get(key) is not None:
            message[key] = (message.get(key) or "") + delta[key]
    for fragment in delta.get("tool_calls") or ():
        _merge_tool_call(state["tool_calls"].setdefault(fragment["index"], {}), fragment)
    fn = delta.get("function_call")
    if fn:
        legacy = message.setdefault("function_call", {})
        if fn.get("name") is not None:
            legacy["name"] = fn["name"]
        if fn.get("arguments") is not None:
            legacy["arguments"] = legacy.get("arguments", "") + fn["arguments"]
    if choice.get("finish_reason") is not None:
        state["finish_reason"] = choice["finish_reason"]
    logprobs = choice.get("logprobs")
    if logprobs:
        merged = state.setdefault("logprobs", {})
        for key in ("content", "refusal"):
            if logprobs.get(key):
                merged.setdefault(key, []).extend(logprobs[key])


def accumulate_deltas(chunks: Iterable[DeltaResponse]) -> Response:
    """Fold streamed chunks into the equivalent non-streaming :class:`Response`."""
    envelope: Dict[str, Any] = {}
    states: Dict[int, Dict[str, Any]] = {}
    usage = None
    for chunk in chunks:
        data = chunk.to_dict()
        for key in _ENVELOPE_FIELDS:
            if data.get(key) is not None and key not in envelope:
                envelope[key] = data[key]
        if data.get("usage") is not None:
            usage = data["usage"]
        for choice in data.get("choices", ()):
            index = choice.get("index", 0)
            state = states.setdefault(
                index,
                {"message": {"role": "assistant"}, "tool_calls": {}, "finish_reason": None},
            )
            _merge_choice(state, choice)

    choices = []
    for index in sorted(states):
        state = states[index]
        message = dict(state["message"])
        message.setdefault("content", None)
        if state["tool_calls"]:
            message["tool_calls"] = [
                {"type": "function", **state["tool_calls"][i]} for i in sorted(state["tool_calls"])
            ]
        entry: Dict[str, Any] = {
            "index": index,
            "message": message,
            "finish_reason": state["finish_reason"],
        }
        if "logprobs" in state:
            entry["logprobs"] = state["logprobs"]
        choices.append(entry)

    doc: Dict[str, Any] = {**envelope, "object": "chat.completion", "choices": choices}
    if usage is not None:
        doc["usage"] = usage
    return Response.from_dict(doc)


__all__ = ["accumulate_deltas"]
