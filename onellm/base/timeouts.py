"""Unified timeout values for backend adapters.

This module centralizes the connect/read/write timeouts used by the HTTP
transport so no adapter hard-codes its own numbers.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values in seconds, with a
    ``to_httpx`` helper producing the matching ``httpx.Timeout``.

TIMEOUT_ENV_VARS
    Field-to-variable map read by ``Configuration.from_env``:
        ONELLM_TIMEOUT_CONNECT_SECONDS
        ONELLM_TIMEOUT_READ_SECONDS
        ONELLM_TIMEOUT_WRITE_SECONDS
"""
from __future__ import annotations

from dataclasses import dataclass

import httpx

from .constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT, DEFAULT_WRITE_TIMEOUT

TIMEOUT_ENV_VARS = {
    "connect_seconds": "ONELLM_TIMEOUT_CONNECT_SECONDS",
    "read_seconds": "ONELLM_TIMEOUT_READ_SECONDS",
    "write_seconds": "ONELLM_TIMEOUT_WRITE_SECONDS",
}


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_seconds: Time allowed to establish the TCP/TLS connection.
        read_seconds: Maximum wait between two reads of the response body.
            For streaming this bounds the gap between two chunks, not the
            whole stream.
        write_seconds: Time allowed to send the request body.
    """

    connect_seconds: float = DEFAULT_CONNECT_TIMEOUT
    read_seconds: float = DEFAULT_READ_TIMEOUT
    write_seconds: float = DEFAULT_WRITE_TIMEOUT

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout`` (pool wait bounded by connect)."""
        return httpx.Timeout(
            connect=self.connect_seconds,
            read=self.read_seconds,
            write=self.write_seconds,
            pool=self.connect_seconds,
        )

    def key(self) -> tuple[float, float, float]:
        return (self.connect_seconds, self.read_seconds, self.write_seconds)


__all__ = ["TimeoutConfig", "TIMEOUT_ENV_VARS"]
