"""Resilience – single-flight retry."""

from singleflight.resilience.retry import (
    BackoffStrategy,
    ExponentialBackoff,
    JitterStrategy,
    RetryConfig,
    RetryController,
    RetryState,
)

__all__ = [
    "BackoffStrategy",
    "ExponentialBackoff",
    "JitterStrategy",
    "RetryConfig",
    "RetryController",
    "RetryState",
]
