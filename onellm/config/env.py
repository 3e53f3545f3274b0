"""onellm.config.env
=================

Environment variable mapping and helpers for backend credentials.

Purpose
-------
- Single source of truth mapping backend identifiers to their environment
  variable names.
- Key-format patterns for backends that publish one.
- Placeholder detection so template values in a shell profile count as unset.

Failure Modes
-------------
Helpers never raise; they return ``None`` when a backend is unknown or no
value is present and let :class:`onellm.config.Configuration` decide.
"""

from __future__ import annotations

import os
import re
from typing import Dict, Optional, Pattern, Tuple

# Canonical backend -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

# Backend -> accepted API key format
KEY_PATTERNS: Dict[str, Pattern[str]] = {
    "openai": re.compile(r"^sk-(?:proj-|svcacct-|admin-)?[A-Za-z0-9_-]{20,}$"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and ignores surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(backend: str) -> Optional[str]:
    """Return the API key environment variable for ``backend`` (case-insensitive)."""
    return ENV_MAP.get(backend.lower()) if backend else None


def base_url_env_name(backend: str) -> str:
    return f"{backend.upper()}_BASE_URL"


def resolve_provider_key(backend: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``backend`` from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)``; ``(None, None)`` when nothing usable is set.
        Placeholder values are skipped.
    """
    name = get_env_var_name(backend)
    if not name:
        return None, None
    val = os.environ.get(name, "").strip()
    if not val or is_placeholder(val):
        return None, None
    return val, name


def key_format_ok(backend: str, key: str) -> bool:
    """Return True when ``key`` matches ``backend``'s published format (or it has none)."""
    pattern = KEY_PATTERNS.get(backend.lower())
    return pattern is None or bool(pattern.match(key))


__all__ = [
    "ENV_MAP",
    "KEY_PATTERNS",
    "is_placeholder",
    "get_env_var_name",
    "base_url_env_name",
    "resolve_provider_key",
    "key_format_ok",
]
