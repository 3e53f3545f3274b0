"""Shared HTTP client pool for backend adapters.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances to avoid per-call allocations and reduce connection overhead
    across adapters.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Each client is built with the connect/read/write values of the
      ``TimeoutConfig`` it was requested with. Different timeout settings
      yield different pooled clients.

Security:
    - TLS certificate verification is always enabled.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose, timeouts)``.
    - All clients are closed at interpreter exit via ``atexit``. Libraries or
      tests may also call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import TimeoutConfig

_ClientKey = Tuple[Optional[str], str, Tuple[float, float, float]]

_CLIENTS: Dict[_ClientKey, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(
    base_url: Optional[str],
    purpose: str,
    timeouts: TimeoutConfig,
) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so callers can use
            relative paths. ``None`` groups clients under a shared key.
        purpose: A short string discriminating separate pools (e.g.
            ``"openai"``). Keep stable to maximize reuse.
        timeouts: Timeout values applied to the client and part of the pool key.

    Returns:
        A reusable ``httpx.Client`` instance.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a lock.
    """
    key = (base_url, purpose, timeouts.key())
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        kwargs = {"timeout": timeouts.to_httpx(), "verify": True}
        if base_url:
            kwargs["base_url"] = base_url
        client = httpx.Client(**kwargs)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients.

    Useful in test teardown or application shutdown when immediate release
    of network resources is desired.
    """
    with _LOCK:
        for c in _CLIENTS.values():
            # teardown failures are non-actionable
            with contextlib.suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
