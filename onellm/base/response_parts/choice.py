"""Completion candidates for whole responses and streaming chunks."""
from __future__ import annotations

from typing import Optional

from pydantic import Field

from .graph_model import GraphModel
from .logprobs import Logprobs
from .message import Delta, Message


class Choice(GraphModel):
    finish_reason: Optional[str] = None
    index: int = Field(default=0, ge=0)
    message: Message
    logprobs: Optional[Logprobs] = None


class DeltaChoice(GraphModel):
    """One choice's fragment within a streaming chunk; ``index`` is stable per choice."""

    finish_reason: Optional[str] = None
    index: int = Field(default=0, ge=0)
    delta: Delta = Field(default_factory=Delta)
    logprobs: Optional[Logprobs] = None


__all__ = ["Choice", "DeltaChoice"]
