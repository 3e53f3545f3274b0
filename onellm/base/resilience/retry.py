"""Retry policy for transport-class failures.

Only :class:`~onellm.base.errors.ProviderError` instances flagged
``retryable`` are retried (server errors, timeouts, HTTP 429). Validation,
configuration, TLS, network and decode failures surface immediately.
Backoff is exponential: the delay before retry ``n`` (0-based) is
``delay_base ** n`` seconds.
"""
from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, TypeVar

from ..errors import ProviderError
from ..logging import LogContext, normalized_log_event

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 4
    delay_base: float = 2.0  # exponential base (base**attempt)
    attempt_logger: AttemptLogger | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield self.delay_base**attempt


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the standardized retry policy.

    - Retries only errors whose ``retryable`` flag is set
    - Exponential backoff using ``delay_base ** attempt``
    - Preserves original function signature
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            max_attempts = max(1, config.max_attempts)
            delays = list(config.delays()) + [None]  # final attempt has delay None
            for attempt, delay in enumerate(delays[:max_attempts]):
                try:
                    return func(*args, **kwargs)
                except ProviderError as e:
                    will_retry = e.retryable and delay is not None
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=max_attempts,
                            delay=delay if will_retry else None,
                            error=e,
                        )
                    if not will_retry:
                        raise
                    time.sleep(delay)
            raise RuntimeError("retry: exhausted attempts without result")  # pragma: no cover

        return wrapper

    return decorator


def build_retry_config(
    *,
    max_retries: int,
    delay_base: float,
    logger: logging.Logger,
    ctx: Optional[LogContext] = None,
    phase: str = "request",
) -> RetryConfig:
    """Build a ``RetryConfig`` whose attempt logger emits ``retry.attempt`` events."""

    def _log_attempt(
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None:
        normalized_log_event(
            logger,
            "retry.attempt",
            ctx,
            phase=phase,
            attempt=attempt + 1,
            error_code=error.code.value if error else None,
            emitted=False,
            tokens=None,
            level=logging.WARNING if delay is not None else logging.INFO,
            max_attempts=max_attempts,
            delay_seconds=delay,
            will_retry=delay is not None,
        )

    return RetryConfig(
        max_attempts=max_retries + 1,
        delay_base=delay_base,
        attempt_logger=_log_attempt,
    )


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
    "build_retry_config",
]
