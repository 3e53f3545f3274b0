"""
Token accounting.

All counts are optional (backends omit what they do not report) and must be
non-negative when present.
"""
from __future__ import annotations

from typing import Optional

from pydantic import Field

from .graph_model import GraphModel


class CompletionTokensDetails(GraphModel):
    reasoning_tokens: Optional[int] = Field(default=None, ge=0)
    accepted_prediction_tokens: Optional[int] = Field(default=None, ge=0)
    rejected_prediction_tokens: Optional[int] = Field(default=None, ge=0)
    audio_tokens: Optional[int] = Field(default=None, ge=0)


class PromptTokensDetails(GraphModel):
    cached_tokens: Optional[int] = Field(default=None, ge=0)
    audio_tokens: Optional[int] = Field(default=None, ge=0)


class Usage(GraphModel):
    """Prompt/completion/total counts plus nested breakdowns and cache counters."""

    prompt_tokens: Optional[int] = Field(default=None, ge=0)
    completion_tokens: Optional[int] = Field(default=None, ge=0)
    total_tokens: Optional[int] = Field(default=None, ge=0)
    completion_tokens_details: Optional[CompletionTokensDetails] = None
    prompt_tokens_details: Optional[PromptTokensDetails] = None
    cache_creation_input_tokens: Optional[int] = Field(default=None, ge=0)
    cache_read_input_tokens: Optional[int] = Field(default=None, ge=0)


__all__ = ["CompletionTokensDetails", "PromptTokensDetails", "Usage"]
