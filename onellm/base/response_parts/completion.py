"""Top-level response objects: :class:`Response` and streaming :class:`DeltaResponse`."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .choice import Choice, DeltaChoice
from .graph_model import GraphModel
from .usage import Usage


class Response(GraphModel):
    """Completed, non-streaming result."""

    id: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    object: Optional[str] = None
    system_fingerprint: Optional[str] = None
    choices: List[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    @property
    def text(self) -> Optional[str]:
        """Content of the first choice, or ``None`` when there is none."""
        if not self.choices:
            return None
        return self.choices[0].message.content


class DeltaResponse(GraphModel):
    """One streaming chunk.

    ``usage`` is only present on the final chunk when the caller asked for
    ``stream_options={"include_usage": True}``.
    """

    id: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    object: Optional[str] = None
    system_fingerprint: Optional[str] = None
    choices: List[DeltaChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    @property
    def text(self) -> str:
        """Concatenated content fragments carried by this chunk."""
        return "".join(c.delta.content or "" for c in self.choices)


__all__ = ["Response", "DeltaResponse"]
