"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `onellm.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    OneLLMError,
    ConfigurationError,
    Violation,
    ValidationError,
    UnknownProviderError,
    ProviderError,
    ClientAPIError,
    ServerAPIError,
    RequestTimeoutError,
    TLSError,
    NetworkError,
    DecodeError,
    UnexpectedResponseError,
)
from .classification import (
    classify_exception,
    error_for_status,
    extract_error_message,
    status_error_code,
    wrap_transport_error,
)

__all__ = [
    "ErrorCode",
    "OneLLMError",
    "ConfigurationError",
    "Violation",
    "ValidationError",
    "UnknownProviderError",
    "ProviderError",
    "ClientAPIError",
    "ServerAPIError",
    "RequestTimeoutError",
    "TLSError",
    "NetworkError",
    "DecodeError",
    "UnexpectedResponseError",
    "classify_exception",
    "error_for_status",
    "extract_error_message",
    "status_error_code",
    "wrap_transport_error",
]
