"""Output message of a completed choice, and its streaming counterpart :class:`Delta`."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .function_call import FunctionCall
from .graph_model import GraphModel
from .tool_call import DeltaToolCall, ToolCall


class Message(GraphModel):
    """Assistant output for one choice.

    ``tool_calls`` defaults to an empty list when the backend sends none.
    """

    content: Optional[str] = None
    role: str = "assistant"
    tool_calls: Optional[List[ToolCall]] = Field(default_factory=list)
    function_call: Optional[FunctionCall] = None
    refusal: Optional[str] = None


class Delta(GraphModel):
    """Partial message; every field may be absent in a given chunk."""

    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[DeltaToolCall]] = None
    function_call: Optional[FunctionCall] = None
    refusal: Optional[str] = None


__all__ = ["Message", "Delta"]
