"""
Normalized response object graph public surface.

Re-exports the pydantic models under ``onellm.base.response_parts`` and
provides the two normalization entry points used by adapters.
"""
from __future__ import annotations

from typing import Any, Optional

from .response_parts.function_call import FunctionCall
from .response_parts.tool_call import DeltaToolCall, ToolCall
from .response_parts.logprobs import ContentLogprob, Logprobs, TopLogprob
from .response_parts.usage import CompletionTokensDetails, PromptTokensDetails, Usage
from .response_parts.message import Delta, Message
from .response_parts.choice import Choice, DeltaChoice
from .response_parts.completion import DeltaResponse, Response
from .response_parts.accumulate import accumulate_deltas


def normalize_response(data: Any, *, provider: Optional[str] = None, model: Optional[str] = None) -> Response:
    """Convert a decoded whole-response document into a :class:`Response`."""
    return Response.from_dict(data, provider=provider, model=model)


def normalize_chunk(data: Any, *, provider: Optional[str] = None, model: Optional[str] = None) -> DeltaResponse:
    """Convert one decoded streaming chunk into a :class:`DeltaResponse`."""
    return DeltaResponse.from_dict(data, provider=provider, model=model)


__all__ = [
    "FunctionCall",
    "ToolCall",
    "DeltaToolCall",
    "TopLogprob",
    "ContentLogprob",
    "Logprobs",
    "CompletionTokensDetails",
    "PromptTokensDetails",
    "Usage",
    "Message",
    "Delta",
    "Choice",
    "DeltaChoice",
    "Response",
    "DeltaResponse",
    "accumulate_deltas",
    "normalize_response",
    "normalize_chunk",
]
