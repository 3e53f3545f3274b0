"""Model-issued tool calls: complete (:class:`ToolCall`) and incremental (:class:`DeltaToolCall`)."""
from __future__ import annotations

from typing import Optional

from pydantic import Field

from .function_call import FunctionCall
from .graph_model import GraphModel


class ToolCall(GraphModel):
    id: Optional[str] = None
    type: str = "function"
    function: FunctionCall = Field(default_factory=FunctionCall)


class DeltaToolCall(GraphModel):
    """Streaming fragment of a tool call.

    ``index`` identifies the tool call across chunks so argument fragments can
    be concatenated in order.
    """

    index: int = Field(ge=0)
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionCall] = None


__all__ = ["ToolCall", "DeltaToolCall"]
