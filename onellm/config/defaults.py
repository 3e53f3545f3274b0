"""onellm.config.defaults
=====================

Central place for small, stable default values used by the configuration
layer and the backend adapters. These defaults can be overridden via
environment variables, a config file, or explicit overrides.

This module intentionally avoids importing from other onellm packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Backend endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"

DEFAULT_BASE_URLS = {
    "openai": OPENAI_DEFAULT_BASE_URL,
    "anthropic": ANTHROPIC_DEFAULT_BASE_URL,
}

CHAT_COMPLETIONS_PATH = "/chat/completions"

# ---- Config file ----
CONFIG_FILE_ENV = "ONELLM_CONFIG_FILE"
MAX_RETRIES_ENV = "ONELLM_MAX_RETRIES"

__all__ = [
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "DEFAULT_BASE_URLS",
    "CHAT_COMPLETIONS_PATH",
    "CONFIG_FILE_ENV",
    "MAX_RETRIES_ENV",
]
