"""BaseProvider (single-class module).

Shared scaffolding for adapters: configuration handling, model-name
extraction, and request validation wired to the backend's catalog.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Collection, Dict, Iterator, List, Optional

from ..logging import LogContext
from ..models import ChatRequest
from ..registry import split_model_id
from ..response import DeltaResponse, Response
from ..validation import validate_request

if TYPE_CHECKING:
    from ...config import Configuration


class BaseProvider:
    """Base class for adapters implementing :class:`LLMProvider`.

    Subclasses set ``provider_name`` and optionally ``known_models``, and
    implement ``build_payload``, ``complete`` and ``stream``.
    """

    provider_name: str = "base"
    known_models: Optional[Collection[str]] = None

    def __init__(self, configuration: Optional["Configuration"] = None) -> None:
        self.configuration = configuration

    def model_name(self, request: ChatRequest) -> str:
        """Return the backend model name (registry prefix stripped)."""
        model = request.model
        if isinstance(model, str) and "/" in model:
            return split_model_id(model)[1]
        return model

    def is_reasoning_model(self, model_name: str) -> bool:
        return False

    def log_context(self, request: ChatRequest) -> LogContext:
        return LogContext(provider=self.provider_name, model=self.model_name(request))

    def validate(self, request: ChatRequest) -> List[str]:
        name = self.model_name(request)
        return validate_request(
            request,
            model_name=name,
            known_models=self.known_models,
            reasoning_model=isinstance(name, str) and self.is_reasoning_model(name),
            ctx=self.log_context(request),
        )

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:  # pragma: no cover - interface
        raise NotImplementedError

    def complete(self, request: ChatRequest) -> Response:  # pragma: no cover - interface
        raise NotImplementedError

    def stream(self, request: ChatRequest) -> Iterator[DeltaResponse]:  # pragma: no cover - interface
        raise NotImplementedError


__all__ = ["BaseProvider"]
