"""LLMProvider Protocol (single-class module).

Defines the capability contract every backend adapter implements.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Protocol, runtime_checkable

from ..models import ChatRequest
from ..response import DeltaResponse, Response


@runtime_checkable
class LLMProvider(Protocol):
    """Interface for backend adapters.

    Implementations validate a :class:`ChatRequest` before any I/O, map it to
    their wire payload, and normalize results into the response graph. They
    never leak raw backend JSON or low-level transport exceptions upstream.
    """

    @property
    def provider_name(self) -> str:
        """Registry prefix of the backend, e.g. ``"openai"``."""
        ...

    def validate(self, request: ChatRequest) -> List[str]:
        """Raise ``ValidationError`` on rule violations; return deprecation notes."""
        ...

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        """Return the backend JSON body for ``request``."""
        ...

    def complete(self, request: ChatRequest) -> Response:
        """Execute a non-streaming completion."""
        ...

    def stream(self, request: ChatRequest) -> Iterator[DeltaResponse]:
        """Return a lazy, non-restartable iterator of streaming chunks."""
        ...


__all__ = ["LLMProvider"]
