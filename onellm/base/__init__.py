"""
onellm base package.

Exports backend-agnostic contracts used by adapters and the client facade:

- Errors: unified taxonomy and transport error mapping
- Models: typed request records
- Response: normalized response object graph
- Validation: request parameter rules
- Registry: prefix -> adapter resolution
- Interfaces: adapter protocol and base class
"""

from .errors import (
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
from .models import ChatRequest, ContentPart, FunctionSpec, ImageURL, Message, ToolChoice, ToolSpec
from .response import DeltaResponse, Response, accumulate_deltas
from .registry import ProviderRegistry, default_registry, split_model_id
from .interfaces import BaseProvider, LLMProvider
from .timeouts import TimeoutConfig

__all__ = [
    # Errors
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
    # Models
    "ChatRequest",
    "Message",
    "ContentPart",
    "ImageURL",
    "ToolSpec",
    "FunctionSpec",
    "ToolChoice",
    # Response
    "Response",
    "DeltaResponse",
    "accumulate_deltas",
    # Registry & interfaces
    "ProviderRegistry",
    "default_registry",
    "split_model_id",
    "LLMProvider",
    "BaseProvider",
    # Timeouts
    "TimeoutConfig",
]
