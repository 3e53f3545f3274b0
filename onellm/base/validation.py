"""
Parameter validation for chat requests.

Purpose
-------
Check a :class:`~onellm.base.models.ChatRequest` against every request rule
before any network I/O. All applicable violations are collected and raised
together as one :class:`~onellm.base.errors.ValidationError`; validation
failures are never retried.

Backend-specific knowledge (model catalog, reasoning-model family) is passed
in by the adapter, so this module stays backend-agnostic.

Deprecations
------------
Deprecated-but-accepted parameters are not errors. ``validate_request``
returns them and emits a ``DeprecationWarning`` plus a
``validation.warning`` log event for each.
"""
from __future__ import annotations

import logging
import re
import warnings
from typing import Any, Collection, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from .constants import VALID_ROLES
from .errors import ValidationError, Violation
from .logging import LogContext, get_logger, log_event
from .models import ChatRequest, ContentPart, Message, ToolChoice

DATA_URI_PATTERN = re.compile(r"^data:image/(jpeg|png|gif|webp);base64,")
IMAGE_DETAILS = ("auto", "low", "high")
REASONING_EFFORTS = ("low", "medium", "high")
RESPONSE_FORMAT_TYPES = ("text", "json_object", "json_schema")

MAX_STOP_SEQUENCES = 4
MAX_METADATA_PAIRS = 16
MAX_METADATA_KEY_LENGTH = 64
MAX_METADATA_VALUE_LENGTH = 512

# parameter -> (low, high), inclusive
NUMERIC_RANGES = {
    "frequency_penalty": (-2.0, 2.0),
    "presence_penalty": (-2.0, 2.0),
    "top_p": (0.0, 1.0),
    "temperature": (0.0, 2.0),
}
TOP_LOGPROBS_RANGE = (0, 20)
LOGIT_BIAS_RANGE = (-100, 100)

# deprecated parameter -> replacement
DEPRECATED_PARAMETERS = {"max_tokens": "max_completion_tokens"}

_logger = get_logger("onellm.validation")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _bound(value: float) -> str:
    return f"{value:g}"


def _check_range(name: str, value: Any, low: float, high: float, out: List[Violation]) -> None:
    if value is None:
        return
    if not _is_number(value):
        out.append(Violation(name, f"{name} must be a number, got {value!r}"))
    elif not low <= value <= high:
        out.append(Violation(name, f"{name} must be between {_bound(low)} and {_bound(high)}, got {value}"))


def is_valid_image_url(url: Any) -> bool:
    """Return True for an http(s) URL with a host or an accepted base64 image data URI."""
    if not isinstance(url, str):
        return False
    if url.startswith("data:"):
        return DATA_URI_PATTERN.match(url) is not None
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_model(model_name: str, known_models: Optional[Collection[str]]) -> List[Violation]:
    """Check the backend model name against the catalog (any non-empty name when there is none)."""
    if not isinstance(model_name, str) or not model_name:
        return [Violation("model", "Model cannot be empty")]
    if known_models is not None and model_name not in known_models:
        available = ", ".join(known_models)
        return [Violation("model", f"Invalid model: {model_name}. Available models: {available}")]
    return []


def _validate_part(part: ContentPart, where: str, out: List[Violation]) -> None:
    if part.type == "text":
        if not isinstance(part.text, str):
            out.append(Violation(f"{where}.text", "Text content part must carry a text string"))
    elif part.type == "image_url":
        image = part.image_url
        if image is None or not is_valid_image_url(image.url):
            out.append(Violation(f"{where}.image_url", "Image URL must be a valid HTTP/HTTPS URL or data URI"))
        elif image.detail is not None and image.detail not in IMAGE_DETAILS:
            out.append(
                Violation(
                    f"{where}.image_url.detail",
                    f"Invalid image detail: {image.detail}. Valid values are: {', '.join(IMAGE_DETAILS)}",
                )
            )
    else:
        out.append(Violation(f"{where}.type", f"Invalid content part type: {part.type}. Valid types are: text, image_url"))


def _validate_message(message: Message, index: int, out: List[Violation]) -> None:
    where = f"messages[{index}]"
    if message.role not in VALID_ROLES:
        out.append(Violation(f"{where}.role", f"Invalid role: {message.role}. Valid roles are: {', '.join(VALID_ROLES)}"))
    content = message.content
    if isinstance(content, str):
        if not content:
            out.append(Violation(f"{where}.content", f"Content cannot be empty (message at index {index})"))
        return
    if not isinstance(content, tuple):
        out.append(
            Violation(f"{where}.content", f"Content must be a string or an array of content parts (message at index {index})")
        )
        return
    if not content:
        out.append(Violation(f"{where}.content", f"Content cannot be empty (message at index {index})"))
        return
    for j, part in enumerate(content):
        _validate_part(part, f"{where}.content[{j}]", out)
    if not any(p.type == "text" for p in content):
        out.append(Violation(f"{where}.content", "Content array must contain at least one text part"))


def validate_messages(messages: Tuple[Message, ...]) -> List[Violation]:
    out: List[Violation] = []
    if not messages:
        return [Violation("messages", "Messages cannot be empty")]
    for i, message in enumerate(messages):
        _validate_message(message, i, out)
    return out


def validate_tools(request: ChatRequest) -> List[Violation]:
    """Check tool definitions and the ``tool_choice`` directive against them."""
    out: List[Violation] = []
    tools = request.tools
    names: List[str] = []
    if tools is not None:
        for i, tool in enumerate(tools):
            if tool.type != "function":
                out.append(Violation(f"tools[{i}].type", f"Invalid tool type: {tool.type}"))
            if tool.function is None or not isinstance(tool.function.name, str) or not tool.function.name:
                out.append(Violation(f"tools[{i}].function", f"Tool at index {i} must define a function with a name"))
            else:
                names.append(tool.function.name)

    choice: Optional[ToolChoice] = request.tool_choice
    if choice is None:
        return out
    if not tools:
        out.append(Violation("tool_choice", "Cannot specify tool_choice without tools"))
        return out
    if not choice.is_well_formed():
        out.append(Violation("tool_choice", "Tool choice must be 'auto', 'none', 'required', or a function specification"))
    elif choice.function_name is not None and choice.function_name not in names:
        out.append(Violation("tool_choice", f"Tool choice function '{choice.function_name}' not found in tools"))
    return out


def _validate_logprobs(request: ChatRequest, out: List[Violation]) -> None:
    if request.logprobs is not None and not isinstance(request.logprobs, bool):
        out.append(Violation("logprobs", f"logprobs must be a boolean, got {request.logprobs!r}"))
    top = request.top_logprobs
    if top is None:
        return
    low, high = TOP_LOGPROBS_RANGE
    if not _is_int(top):
        out.append(Violation("top_logprobs", f"top_logprobs must be an integer, got {top!r}"))
    elif not low <= top <= high:
        out.append(Violation("top_logprobs", f"top_logprobs must be between {low} and {high}, got {top}"))
    if request.logprobs is not True:
        out.append(Violation("top_logprobs", "top_logprobs requires logprobs to be true"))


def _validate_logit_bias(bias: Any, out: List[Violation]) -> None:
    if bias is None:
        return
    if not isinstance(bias, Mapping):
        out.append(Violation("logit_bias", "logit_bias must be a mapping of token ids to bias values"))
        return
    low, high = LOGIT_BIAS_RANGE
    for token, value in bias.items():
        if not isinstance(token, str) or not token.isdigit():
            out.append(Violation("logit_bias", f"logit_bias keys must be token id strings, got {token!r}"))
        if not _is_number(value):
            out.append(Violation("logit_bias", f"logit_bias value for token {token} must be a number, got {value!r}"))
        elif not low <= value <= high:
            out.append(
                Violation("logit_bias", f"logit_bias value for token {token} must be between {low} and {high}, got {value}")
            )


def _validate_stop(stop: Any, out: List[Violation]) -> None:
    if stop is None or isinstance(stop, str):
        return
    if not isinstance(stop, (list, tuple)) or not all(isinstance(s, str) for s in stop):
        out.append(Violation("stop", "stop must be a string or an array of strings"))
    elif len(stop) > MAX_STOP_SEQUENCES:
        out.append(Violation("stop", f"stop can contain at most {MAX_STOP_SEQUENCES} sequences, got {len(stop)}"))


def _validate_token_limits(request: ChatRequest, out: List[Violation]) -> None:
    for name in ("max_tokens", "max_completion_tokens"):
        value = getattr(request, name)
        if value is not None and (not _is_int(value) or value < 1):
            out.append(Violation(name, f"{name} must be a positive integer, got {value!r}"))
    if request.max_tokens is not None and request.max_completion_tokens is not None:
        out.append(Violation("max_tokens", "Cannot specify both max_tokens and max_completion_tokens"))


def _validate_metadata(metadata: Any, out: List[Violation]) -> None:
    if metadata is None:
        return
    if not isinstance(metadata, Mapping):
        out.append(Violation("metadata", "metadata must be a mapping of strings to strings"))
        return
    if len(metadata) > MAX_METADATA_PAIRS:
        out.append(Violation("metadata", f"metadata can contain at most {MAX_METADATA_PAIRS} pairs, got {len(metadata)}"))
    for key, value in metadata.items():
        if not isinstance(key, str) or len(key) > MAX_METADATA_KEY_LENGTH:
            out.append(
                Violation("metadata", f"metadata keys must be strings of at most {MAX_METADATA_KEY_LENGTH} characters, got {key!r}")
            )
        if not isinstance(value, str) or len(value) > MAX_METADATA_VALUE_LENGTH:
            out.append(
                Violation(
                    "metadata",
                    f"metadata value for {key!r} must be a string of at most {MAX_METADATA_VALUE_LENGTH} characters",
                )
            )


def _validate_misc(request: ChatRequest, out: List[Violation]) -> None:
    if not isinstance(request.stream, bool):
        out.append(Violation("stream", f"stream must be a boolean, got {request.stream!r}"))
    if request.n is not None and (not _is_int(request.n) or request.n < 1):
        out.append(Violation("n", f"n must be a positive integer, got {request.n!r}"))
    if request.seed is not None and not _is_int(request.seed):
        out.append(Violation("seed", f"seed must be an integer, got {request.seed!r}"))
    if request.user is not None and not isinstance(request.user, str):
        out.append(Violation("user", f"user must be a string, got {request.user!r}"))
    if request.parallel_tool_calls is not None and not isinstance(request.parallel_tool_calls, bool):
        out.append(Violation("parallel_tool_calls", "parallel_tool_calls must be a boolean"))
    fmt = request.response_format
    if fmt is not None:
        kind = fmt.get("type") if isinstance(fmt, Mapping) else None
        if kind not in RESPONSE_FORMAT_TYPES:
            out.append(
                Violation(
                    "response_format",
                    f"response_format.type must be one of: {', '.join(RESPONSE_FORMAT_TYPES)}, got {kind!r}",
                )
            )
    if request.stream_options is not None:
        if request.stream is not True:
            out.append(Violation("stream_options", "stream_options can only be set when stream is true"))
        elif not isinstance(request.stream_options, Mapping):
            out.append(Violation("stream_options", "stream_options must be a mapping"))


def _validate_reasoning_effort(request: ChatRequest, reasoning_model: bool, out: List[Violation]) -> None:
    effort = request.reasoning_effort
    if effort is None or not reasoning_model:
        return
    if effort not in REASONING_EFFORTS:
        out.append(
            Violation(
                "reasoning_effort",
                f"Invalid reasoning_effort: {effort}. Valid values are: {', '.join(REASONING_EFFORTS)}",
            )
        )


def collect_violations(
    request: ChatRequest,
    *,
    model_name: str,
    known_models: Optional[Collection[str]] = None,
    reasoning_model: bool = False,
) -> List[Violation]:
    """Return every rule ``request`` violates, in a stable order (empty when valid)."""
    out: List[Violation] = []
    out.extend(validate_model(model_name, known_models))
    out.extend(validate_messages(request.messages))
    out.extend(validate_tools(request))
    _validate_reasoning_effort(request, reasoning_model, out)
    for name, (low, high) in NUMERIC_RANGES.items():
        _check_range(name, getattr(request, name), low, high, out)
    _validate_logprobs(request, out)
    _validate_logit_bias(request.logit_bias, out)
    _validate_stop(request.stop, out)
    _validate_token_limits(request, out)
    _validate_metadata(request.metadata, out)
    _validate_misc(request, out)
    return out


def deprecated_parameters(request: ChatRequest) -> List[str]:
    """Return a warning message for each deprecated parameter ``request`` sets."""
    return [
        f"{name} is deprecated; use {replacement} instead"
        for name, replacement in DEPRECATED_PARAMETERS.items()
        if getattr(request, name) is not None
    ]


def validate_request(
    request: ChatRequest,
    *,
    model_name: str,
    known_models: Optional[Collection[str]] = None,
    reasoning_model: bool = False,
    ctx: Optional[LogContext] = None,
) -> List[str]:
    """Validate ``request`` and return the deprecation warnings it triggered.

    Raises:
        ValidationError: carrying every violation found.
    """
    violations = collect_violations(
        request,
        model_name=model_name,
        known_models=known_models,
        reasoning_model=reasoning_model,
    )
    if violations:
        raise ValidationError(violations)
    notes = deprecated_parameters(request)
    for note in notes:
        warnings.warn(note, DeprecationWarning, stacklevel=3)
        log_event(_logger, "validation.warning", ctx, level=logging.WARNING, warning=note)
    return notes


__all__ = [
    "DATA_URI_PATTERN",
    "NUMERIC_RANGES",
    "DEPRECATED_PARAMETERS",
    "is_valid_image_url",
    "validate_model",
    "validate_messages",
    "validate_tools",
    "collect_violations",
    "deprecated_parameters",
    "validate_request",
]
