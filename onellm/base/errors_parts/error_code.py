"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration attached to every transport-class error
raised by provider adapters. Values are lowercase snake_case and are considered
a stable public contract for logging and retry decisions.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TLS = "tls"
    NETWORK = "network"
    DECODE = "decode"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNEXPECTED = "unexpected"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
