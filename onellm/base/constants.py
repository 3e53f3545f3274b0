"""Base shared constants for backend adapters.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic sentinel strings and numeric defaults.
There are no credentials or tokens embedded.
"""
from __future__ import annotations

# Default HTTP timeouts (seconds)
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 30.0
DEFAULT_WRITE_TIMEOUT = 30.0

# Retry defaults
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_BASE = 2.0

# Roles accepted on input messages
VALID_ROLES = ("system", "user", "assistant")

# Streaming protocol
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_READ_TIMEOUT",
    "DEFAULT_WRITE_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_BASE",
    "VALID_ROLES",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "JSON_CONTENT_TYPE",
    "EVENT_STREAM_CONTENT_TYPE",
]
