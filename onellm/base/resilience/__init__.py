"""Resilience helpers (retry policy)."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, build_retry_config, retry

__all__ = ["RetryConfig", "DEFAULT_RETRY_CONFIG", "retry", "build_retry_config"]
