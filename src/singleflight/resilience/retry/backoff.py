"""Resilience – backoff strategies.

A backoff strategy is a ``retry_delay`` callable: given the number of
consecutive failures recorded so far it returns the number of milliseconds to
wait before the next attempt, or ``False`` to stop retrying.
"""
from __future__ import annotations

import abc
import math
from typing import Literal, Union

from singleflight.resilience.retry.jitter import FullJitter, JitterStrategy

Delay = Union[float, Literal[False]]


class BackoffStrategy(abc.ABC):
    """Compute wait duration (milliseconds) after the *failure_count*-th failure."""

    @abc.abstractmethod
    def compute(self, failure_count: int) -> Delay: ...

    def __call__(self, failure_count: int) -> Delay:
        return self.compute(failure_count)


class ConstantBackoff(BackoffStrategy):
    """Fixed delay between attempts."""

    def __init__(self, delay_ms: float = 1000.0) -> None:
        self._delay = delay_ms

    def compute(self, failure_count: int) -> float:  # noqa: ARG002
        return self._delay


class LinearBackoff(BackoffStrategy):
    """Delay grows linearly: ``base_ms * failure_count``, capped at ``max_ms``."""

    def __init__(self, base_ms: float = 500.0, max_ms: float = 30_000.0) -> None:
        self._base = base_ms
        self._max = max_ms

    def compute(self, failure_count: int) -> float:
        return min(self._base * failure_count, self._max)


class ExponentialBackoff(BackoffStrategy):
    """Randomised exponential delay.

    ``min_ms + floor(jitter(1000 * base ** min(exponent, failure_count)))``

    With the default :class:`FullJitter` the wait is drawn uniformly from
    ``[min_ms, min_ms + 1000 * base ** n)``; ``exponent`` caps the growth.
    """

    def __init__(
        self,
        min_ms: float = 0,
        base: float = 1.2,
        exponent: int = 33,
        jitter: JitterStrategy | None = None,
    ) -> None:
        self._min = min_ms
        self._base = base
        self._exponent = exponent
        self._jitter = jitter or FullJitter()

    def compute(self, failure_count: int) -> float:
        ceiling = 1000 * self._base ** min(self._exponent, failure_count)
        return self._min + math.floor(self._jitter.apply(ceiling))


class AbortAfter(BackoffStrategy):
    """Delegate to *inner* for the first *max_failures* failures, then abort."""

    def __init__(self, inner: BackoffStrategy, max_failures: int) -> None:
        self._inner = inner
        self._max = max_failures

    def compute(self, failure_count: int) -> Delay:
        if failure_count > self._max:
            return False
        return self._inner.compute(failure_count)


__all__ = ["AbortAfter", "BackoffStrategy", "ConstantBackoff", "Delay", "ExponentialBackoff", "LinearBackoff"]
