"""onellm: one request shape for many chat-completion backends.

Usage::

    import onellm

    response = onellm.complete("openai/gpt-4o-mini", [{"role": "user", "content": "hi"}])
    print(response.text)

    for chunk in onellm.stream("openai/gpt-4o-mini", [{"role": "user", "content": "hi"}]):
        print(chunk.text, end="")
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from .base.errors import (
    ClientAPIError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    NetworkError,
    OneLLMError,
    ProviderError,
    RequestTimeoutError,
    ServerAPIError,
    TLSError,
    UnexpectedResponseError,
    UnknownProviderError,
    ValidationError,
    Violation,
)
from .base.logging import configure_logger, get_logger
from .base.models import ChatRequest
from .base.registry import ProviderRegistry, default_registry, split_model_id
from .base.response import (
    Choice,
    Delta,
    DeltaChoice,
    DeltaResponse,
    DeltaToolCall,
    FunctionCall,
    Response,
    ToolCall,
    Usage,
    accumulate_deltas,
)
from .base.response import Message as ResponseMessage
from .client import Client
from .config import Configuration

__version__ = "0.1.0"


def complete(
    model: str,
    messages: Any,
    *,
    configuration: Optional[Configuration] = None,
    registry: Optional[ProviderRegistry] = None,
    **kwargs: Any,
):
    """Run ``Client.complete`` on a client built for this call only."""
    return Client(configuration, registry).complete(model, messages, **kwargs)


def stream(
    model: str,
    messages: Any,
    *,
    configuration: Optional[Configuration] = None,
    registry: Optional[ProviderRegistry] = None,
    **params: Any,
) -> Iterator[DeltaResponse]:
    """Run ``Client.stream`` on a client built for this call only."""
    return Client(configuration, registry).stream(model, messages, **params)


__all__ = [
    "__version__",
    "complete",
    "stream",
    "Client",
    "Configuration",
    "ChatRequest",
    "ProviderRegistry",
    "default_registry",
    "split_model_id",
    "Response",
    "ResponseMessage",
    "Choice",
    "ToolCall",
    "FunctionCall",
    "Usage",
    "DeltaResponse",
    "DeltaChoice",
    "Delta",
    "DeltaToolCall",
    "accumulate_deltas",
    "OneLLMError",
    "ConfigurationError",
    "ValidationError",
    "Violation",
    "UnknownProviderError",
    "ProviderError",
    "ClientAPIError",
    "ServerAPIError",
    "RequestTimeoutError",
    "TLSError",
    "NetworkError",
    "DecodeError",
    "UnexpectedResponseError",
    "ErrorCode",
    "configure_logger",
    "get_logger",
]
