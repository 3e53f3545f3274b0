"""Unified error taxonomy public surface.

This module re-exports the implementations under
``onellm.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
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
from .errors_parts.classification import (
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
