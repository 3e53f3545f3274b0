"""Per-token log-probability diagnostics."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .graph_model import GraphModel


class TopLogprob(GraphModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


class ContentLogprob(GraphModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[TopLogprob] = Field(default_factory=list)


class Logprobs(GraphModel):
    content: Optional[List[ContentLogprob]] = None
    refusal: Optional[List[ContentLogprob]] = None


__all__ = ["TopLogprob", "ContentLogprob", "Logprobs"]
