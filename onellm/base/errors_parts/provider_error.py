"""
Exception taxonomy for onellm.

Two families live here:

- Fatal, never-retried errors raised before any network I/O
  (:class:`ConfigurationError`, :class:`ValidationError`,
  :class:`UnknownProviderError`).
- Transport-class errors raised at the adapter boundary
  (:class:`ProviderError` and its subclasses). Each carries a normalized
  :class:`ErrorCode` and a ``retryable`` hint consumed by the retry policy.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .error_code import ErrorCode


class OneLLMError(Exception):
    """Root of every exception raised by onellm."""


class ConfigurationError(OneLLMError):
    """Missing or malformed credentials/settings. Raised at adapter construction."""


@dataclass(frozen=True)
class Violation:
    """A single failed validation rule.

    Attributes:
        parameter: Request parameter the rule applies to (e.g. ``"temperature"``
            or ``"messages[0].role"``).
        message: Human-readable description naming the violated constraint.
    """

    parameter: str
    message: str


class ValidationError(OneLLMError, ValueError):
    """Request failed one or more parameter rules; no network call was made.

    ``violations`` lists every rule that failed. ``str(error)`` joins their
    messages with ``"; "``.
    """

    def __init__(self, violations: Sequence[Violation] | str, parameter: str = "request") -> None:
        if isinstance(violations, str):
            violations = [Violation(parameter=parameter, message=violations)]
        self.violations: List[Violation] = list(violations)
        super().__init__("; ".join(v.message for v in self.violations))

    @property
    def parameters(self) -> List[str]:
        """Return the parameter names of all violations, in report order."""
        return [v.parameter for v in self.violations]


class UnknownProviderError(OneLLMError, LookupError):
    """Raised when a model prefix has no registered adapter."""

    def __init__(self, prefix: str, message: Optional[str] = None) -> None:
        self.prefix = prefix
        super().__init__(message or f"Unsupported provider: '{prefix}'")


@dataclass(eq=False)
class ProviderError(OneLLMError):
    """Structured transport-class error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        provider: Backend name where the error originated (e.g. ``"openai"``).
        model: Optional model name associated with the failure.
        status_code: HTTP status when the failure came from a backend response.
        body: Raw response body text, when available.
        retryable: Hint for the retry policy.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    provider: Optional[str] = None
    model: Optional[str] = None
    status_code: Optional[int] = None
    body: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.provider or '-'}:{self.model or '-'} {self.code.value}: {self.message}"


@dataclass(eq=False)
class ClientAPIError(ProviderError):
    """Backend answered with an HTTP 4xx status."""

    code: ErrorCode = ErrorCode.VALIDATION


@dataclass(eq=False)
class ServerAPIError(ProviderError):
    """Backend answered with an HTTP 5xx status."""

    code: ErrorCode = ErrorCode.SERVER_ERROR
    retryable: bool = True


@dataclass(eq=False)
class RequestTimeoutError(ProviderError):
    """Connect, read, write or pool timeout."""

    code: ErrorCode = ErrorCode.TIMEOUT
    retryable: bool = True


@dataclass(eq=False)
class TLSError(ProviderError):
    """TLS handshake or certificate verification failure."""

    code: ErrorCode = ErrorCode.TLS


@dataclass(eq=False)
class NetworkError(ProviderError):
    """Lower-level connection failure (DNS, refused, reset)."""

    code: ErrorCode = ErrorCode.NETWORK


@dataclass(eq=False)
class DecodeError(ProviderError):
    """Malformed streaming frame or unexpected JSON shape."""

    code: ErrorCode = ErrorCode.DECODE


@dataclass(eq=False)
class UnexpectedResponseError(ProviderError):
    """Anything the other taxonomy members do not cover."""

    code: ErrorCode = ErrorCode.UNEXPECTED


__all__ = [
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
]
