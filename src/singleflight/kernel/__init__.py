"""Kernel – framework-agnostic building blocks."""

from singleflight.kernel.errors import (
    AbortedError,
    BaseError,
    NoInstanceError,
    RetriesEndedError,
    RetryError,
    RetryErrorKind,
    RetryLimitError,
    StoppedError,
)
from singleflight.kernel.time import LoopScheduler, Scheduler, TimerHandle

__all__ = [
    "AbortedError",
    "BaseError",
    "LoopScheduler",
    "NoInstanceError",
    "RetriesEndedError",
    "RetryError",
    "RetryErrorKind",
    "RetryLimitError",
    "Scheduler",
    "StoppedError",
    "TimerHandle",
]
