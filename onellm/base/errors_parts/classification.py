"""
Error classification helpers mapping failures to the onellm taxonomy.

Implements HTTP status mapping for backend responses and transport exception
mapping for ``httpx`` failures, so adapters never leak raw low-level
exceptions to callers.
"""
from __future__ import annotations

import json
import ssl
from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import (
    ClientAPIError,
    DecodeError,
    NetworkError,
    ProviderError,
    RequestTimeoutError,
    ServerAPIError,
    TLSError,
    UnexpectedResponseError,
)


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.UNAVAILABLE,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_TLS_MARKERS = ("certificate_verify_failed", "ssl:", "sslerror", "tls")


def _is_tls_failure(exc: BaseException) -> bool:
    """Return True when ``exc`` or anything in its cause chain is a TLS failure."""
    seen = set()
    cur: Optional[BaseException] = exc
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        if isinstance(cur, ssl.SSLError):
            return True
        cur = cur.__cause__ or cur.__context__
    msg = str(exc).lower()
    return any(marker in msg for marker in _TLS_MARKERS)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeouts (httpx or builtin).
        3. TLS failures anywhere in the cause chain.
        4. Other httpx transport failures.
        5. JSON decoding failures.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (httpx.ConnectError, ssl.SSLError)) and _is_tls_failure(exc):
        return ErrorCode.TLS
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.NETWORK
    if isinstance(exc, json.JSONDecodeError):
        return ErrorCode.DECODE
    return ErrorCode.UNKNOWN


def status_error_code(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode`, falling back by status class."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    if status >= 500:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNEXPECTED


def extract_error_message(body: str) -> Optional[str]:
    """Pull the backend's message out of an ``{"error": {"message": ...}}`` body."""
    try:
        data = json.loads(body)
    except (ValueError, TypeError):
        return None
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict) and isinstance(err.get("message"), str):
        return err["message"]
    if isinstance(err, str):
        return err
    return None


def error_for_status(
    status: int,
    body: str,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> ProviderError:
    """Build the taxonomy error for a non-success HTTP status.

    4xx maps to :class:`ClientAPIError` (429 is retryable), 5xx to
    :class:`ServerAPIError`; any other status is an
    :class:`UnexpectedResponseError`.
    """
    detail = extract_error_message(body) or body
    code = status_error_code(status)
    if 400 <= status < 500:
        return ClientAPIError(
            message=f"Client error: {status} - {detail}",
            code=code,
            provider=provider,
            model=model,
            status_code=status,
            body=body,
            retryable=code is ErrorCode.RATE_LIMIT,
        )
    if 500 <= status < 600:
        return ServerAPIError(
            message=f"Server error: {status} - {detail}",
            code=code,
            provider=provider,
            model=model,
            status_code=status,
            body=body,
        )
    return UnexpectedResponseError(
        message=f"Unexpected response: {status} - {detail}",
        provider=provider,
        model=model,
        status_code=status,
        body=body,
    )


def wrap_transport_error(
    exc: BaseException,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> ProviderError:
    """Translate a low-level exception into the matching taxonomy member.

    ``ProviderError`` instances are returned unchanged. The original exception
    is kept on ``raw`` for diagnostics.
    """
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    if code is ErrorCode.TIMEOUT:
        return RequestTimeoutError(message=f"Request timed out: {exc}", provider=provider, model=model, raw=exc)
    if code is ErrorCode.TLS:
        return TLSError(message=f"SSL verification failed: {exc}", provider=provider, model=model, raw=exc)
    if code is ErrorCode.NETWORK:
        return NetworkError(message=f"Network connection failed: {exc}", provider=provider, model=model, raw=exc)
    if code is ErrorCode.DECODE:
        return DecodeError(message=f"Failed to decode response: {exc}", provider=provider, model=model, raw=exc)
    return UnexpectedResponseError(message=f"Unexpected error: {exc}", provider=provider, model=model, raw=exc)


__all__ = [
    "classify_exception",
    "status_error_code",
    "extract_error_message",
    "error_for_status",
    "wrap_transport_error",
    "_HTTP_STATUS_MAP",
]
