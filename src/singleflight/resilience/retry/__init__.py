"""Resilience – single-flight retry controller with configurable backoff and jitter."""
from singleflight.resilience.retry.backoff import (
    AbortAfter,
    BackoffStrategy,
    ConstantBackoff,
    Delay,
    ExponentialBackoff,
    LinearBackoff,
)
from singleflight.resilience.retry.jitter import EqualJitter, FullJitter, JitterStrategy, NoJitter
from singleflight.resilience.retry.config import RetryConfig, RetryConfigBuilder, RetryTuning
from singleflight.resilience.retry.state import RetryState
from singleflight.resilience.retry.controller import RetryController

__all__ = [
    "AbortAfter", "BackoffStrategy", "ConstantBackoff", "Delay", "EqualJitter",
    "ExponentialBackoff", "FullJitter", "JitterStrategy", "LinearBackoff", "NoJitter",
    "RetryConfig", "RetryConfigBuilder", "RetryController", "RetryState", "RetryTuning",
]
