"""Base structured logging utilities for onellm.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across adapters.

``normalized_log_event`` wraps ``log_event`` and injects canonical structured
keys across adapters: ``phase`` (str), ``attempt`` (int|None), ``error_code``
(str|None), ``emitted`` (bool|int|None) and ``tokens`` (mapping|None).
API keys and request bodies are never passed to these helpers.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "onellm"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE_LOGGER_ATTR = "_onellm_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_onellm_console_handler"
_FILE_HANDLER_ATTR = "_onellm_file_handler"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``onellm`` logger.

    The level is re-read from ``ONELLM_LOG_LEVEL`` on every call so tests and
    long-running processes can adjust verbosity at runtime.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv("ONELLM_LOG_LEVEL"), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        for handler in logger.handlers:
            if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
                handler.setLevel(desired_level)
                # pytest's capsys swaps sys.stderr per test
                if hasattr(handler, "setStream"):
                    handler.setStream(sys.stderr)
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.WARNING) -> logging.Logger:
    """Return a logger under the ``onellm`` hierarchy.

    Child loggers carry no handlers of their own and propagate to the shared
    base logger, which owns the single stderr handler.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared ``onellm`` logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level. Accepts numeric levels or names (e.g., "DEBUG").
        When ``None``, the current level is preserved.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (replacing any previously managed one). When ``None``, any
        managed file handler is removed.
    json_mode: bool
        Whether to use the JSON formatter or a plain text formatter.

    Returns
    -------
    logging.Logger
        The configured base logger. Handlers attached by callers are preserved.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)

    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for h in logger.handlers:
            h.setLevel(resolved)

    for h in [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]:
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()
    if file_path is None:
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    # 10MB x 5 backups
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    keep_none: bool = False,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (should be JSON formatted by ``get_logger``).
    event: str
        Event name (e.g. ``stream.start``).
    ctx: LogContext | None
        Backend/model context; merged shallowly.
    keep_none: bool
        When ``True``, preserve keys whose values are ``None``; otherwise drop them.
    level: int
        Logging level for the record.
    **fields: Any
        Arbitrary serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info into a stable JSON-friendly form."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    if hasattr(tokens, "to_dict"):
        return tokens.to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: Any = None,
    tokens: Any = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a normalized structured log event with required keys.

    Keys in the normalized schema are always present, except ``error_code``
    which is omitted when ``None``. ``extra_fields`` never overwrite the
    normalized values.
    """
    base_fields: Dict[str, Any] = {
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, keep_none=True, level=level, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
