"""Resilience – jitter strategies."""
from __future__ import annotations

import abc
import random
from typing import Callable


class JitterStrategy(abc.ABC):
    """Apply randomness to a backoff delay to spread thundering-herd."""

    @abc.abstractmethod
    def apply(self, delay: float) -> float: ...


class NoJitter(JitterStrategy):
    def apply(self, delay: float) -> float:
        return delay


class FullJitter(JitterStrategy):
    """``delay * U[0, 1)``.

    *rng* must return floats in ``[0, 1)``; it defaults to :func:`random.random`.
    """

    def __init__(self, rng: Callable[[], float] | None = None) -> None:
        self._rng = rng or random.random

    def apply(self, delay: float) -> float:
        return delay * self._rng()


class EqualJitter(JitterStrategy):
    """Uniform random in [delay/2, delay)."""

    def __init__(self, rng: Callable[[], float] | None = None) -> None:
        self._rng = rng or random.random

    def apply(self, delay: float) -> float:
        half = delay / 2
        return half + half * self._rng()


__all__ = ["EqualJitter", "FullJitter", "JitterStrategy", "NoJitter"]
