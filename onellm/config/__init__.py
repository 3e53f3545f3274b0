"""Unified configuration layer for onellm.

Goals
-----
* Replace any process-wide settings object with an explicit
  :class:`Configuration` value passed into the client and adapters.
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by ONELLM_CONFIG_FILE
    3. Environment variables
    4. In-code overrides passed to ``Configuration.from_env``

Environment Variable Conventions
--------------------------------
OPENAI_API_KEY, ANTHROPIC_API_KEY, <BACKEND>_BASE_URL, ONELLM_MAX_RETRIES,
ONELLM_TIMEOUT_CONNECT_SECONDS, ONELLM_TIMEOUT_READ_SECONDS,
ONELLM_TIMEOUT_WRITE_SECONDS.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
openai:
  api_key: sk-...
  base_url: https://proxy.internal/v1
max_retries: 2
retry_delay_base: 1.5
timeouts:
  connect_seconds: 5
  read_seconds: 60
```
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..base.constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_BASE
from ..base.errors import ConfigurationError
from ..base.timeouts import TIMEOUT_ENV_VARS, TimeoutConfig
from .defaults import CONFIG_FILE_ENV, DEFAULT_BASE_URLS, MAX_RETRIES_ENV
from .env import (
    ENV_MAP,
    base_url_env_name,
    get_env_var_name,
    is_placeholder,
    key_format_ok,
    resolve_provider_key,
)


@dataclass
class Configuration:
    """Explicit settings for one client.

    Attributes:
        api_keys: Backend name -> API key. Never shown in ``repr``.
        base_urls: Backend name -> API base URL.
        timeouts: Connect/read/write timeouts for the HTTP transport.
        max_retries: Extra attempts for retryable failures (0 disables retry).
        retry_delay_base: Exponential backoff base in seconds.
    """

    api_keys: Dict[str, str] = field(default_factory=dict, repr=False)
    base_urls: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BASE_URLS))
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_base: float = DEFAULT_RETRY_DELAY_BASE

    # -------------------- construction --------------------

    @classmethod
    def from_env(
        cls,
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        config_file: Optional[str] = None,
    ) -> "Configuration":
        """Build a configuration from defaults, config file, environment and overrides.

        Raises:
            ConfigurationError: when the config file is unreadable or a
                numeric setting cannot be parsed.
        """
        cfg = cls()
        cfg._merge(_load_external_config(config_file or os.getenv(CONFIG_FILE_ENV)))
        cfg._merge(_env_settings())
        if overrides:
            cfg._merge(overrides)
        return cfg

    def _merge(self, data: Mapping[str, Any]) -> None:
        for backend in set(ENV_MAP) | set(DEFAULT_BASE_URLS):
            section = data.get(backend)
            if isinstance(section, Mapping):
                if section.get("api_key"):
                    self.api_keys[backend] = str(section["api_key"])
                if section.get("base_url"):
                    self.base_urls[backend] = str(section["base_url"])
        for backend, key in (data.get("api_keys") or {}).items():
            if key:
                self.api_keys[backend] = str(key)
        for backend, url in (data.get("base_urls") or {}).items():
            if url:
                self.base_urls[backend] = str(url)
        timeouts = data.get("timeouts")
        if isinstance(timeouts, TimeoutConfig):
            self.timeouts = timeouts
        elif isinstance(timeouts, Mapping):
            self.timeouts = replace(
                self.timeouts,
                **{k: _as_float(k, v) for k, v in timeouts.items() if k in TIMEOUT_ENV_VARS},
            )
        if data.get("max_retries") is not None:
            self.max_retries = _as_int("max_retries", data["max_retries"])
        if data.get("retry_delay_base") is not None:
            self.retry_delay_base = _as_float("retry_delay_base", data["retry_delay_base"])

    # -------------------- keys --------------------

    def set_api_key(self, backend: str, key: str) -> None:
        self.api_keys[backend.lower()] = key

    def api_key(self, backend: str) -> Optional[str]:
        """Return the key configured for ``backend`` or ``None``."""
        return self.api_keys.get(backend.lower()) or None

    def base_url(self, backend: str) -> Optional[str]:
        return self.base_urls.get(backend.lower())

    def require_api_key(self, backend: str) -> str:
        """Return ``backend``'s key, raising when it is missing or malformed.

        Raises:
            ConfigurationError: naming the backend and, when known, the
                environment variable to set. The key itself is never included.
        """
        key = self.api_key(backend)
        if not key:
            env = get_env_var_name(backend)
            hint = f"set {env} or " if env else ""
            raise ConfigurationError(
                f"Missing API key for {backend}: {hint}call set_api_key('{backend}', ...)"
            )
        if not key_format_ok(backend, key):
            raise ConfigurationError(f"Invalid API key format for {backend}")
        return key

    # -------------------- validation --------------------

    def problems(self) -> List[str]:
        """Return every configuration problem (empty when valid)."""
        out: List[str] = []
        if not any(self.api_keys.values()):
            names = ", ".join(ENV_MAP.values())
            out.append(f"No API key configured: set one of {names} or call set_api_key()")
        for backend, key in sorted(self.api_keys.items()):
            if key and not key_format_ok(backend, key):
                out.append(f"Invalid API key format for {backend}")
        if self.max_retries < 0:
            out.append(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_delay_base < 0:
            out.append(f"retry_delay_base must be >= 0, got {self.retry_delay_base}")
        for name in TIMEOUT_ENV_VARS:
            value = getattr(self.timeouts, name)
            if value <= 0:
                out.append(f"timeouts.{name} must be > 0, got {value}")
        return out

    def validate(self) -> "Configuration":
        """Raise ``ConfigurationError`` listing every problem; return ``self`` when valid."""
        problems = self.problems()
        if problems:
            raise ConfigurationError("; ".join(problems))
        return self


# -------------------- sources --------------------


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def _load_external_config(path: Optional[str]) -> Dict[str, Any]:
    """Load the optional config file; a missing path yields an empty mapping."""
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.exists():
        return {}
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {p}: {exc}") from exc
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file {p} is neither valid JSON nor YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {p} must contain a mapping at top level")
    return data


def _env_settings() -> Dict[str, Any]:
    out: Dict[str, Any] = {"api_keys": {}, "base_urls": {}, "timeouts": {}}
    for backend in ENV_MAP:
        key, _ = resolve_provider_key(backend)
        if key:
            out["api_keys"][backend] = key
    for backend in set(ENV_MAP) | set(DEFAULT_BASE_URLS):
        url = os.getenv(base_url_env_name(backend), "").strip()
        if url and not is_placeholder(url):
            out["base_urls"][backend] = url
    for field_name, env in TIMEOUT_ENV_VARS.items():
        raw = os.getenv(env, "").strip()
        if raw:
            out["timeouts"][field_name] = raw
    raw_retries = os.getenv(MAX_RETRIES_ENV, "").strip()
    if raw_retries:
        out["max_retries"] = raw_retries
    return out


__all__ = ["Configuration"]
