"""Retry errors — terminal outcomes of a request cycle.

Every error raised by :class:`~singleflight.resilience.retry.RetryController`
towards its callers is a :class:`RetryError` carrying a :class:`RetryErrorKind`.
The kind decides whether the attempt loop may schedule another attempt.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from singleflight.kernel.errors.base import BaseError


class RetryErrorKind(str, Enum):
    ABORTED = "aborted"
    STOPPED = "stopped"
    ENDED = "ended"
    RETRY_LIMIT = "retry_limit"
    NO_INSTANCE = "no_instance"

    @property
    def terminal(self) -> bool:
        """Whether the attempt loop must give up on this error while still running."""
        return self is RetryErrorKind.ABORTED


class RetryError(BaseError):
    """A request cycle ended without a result."""

    default_code = "retry_error"
    kind: RetryErrorKind

    def __init__(self, message: str, *, controller: str = "unknown", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.controller = controller

    @property
    def terminal(self) -> bool:
        return self.kind.terminal

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["kind"] = self.kind.value
        base["controller"] = self.controller
        return base


class AbortedError(RetryError):
    """The delay function returned ``False``."""

    default_code = "retries_aborted"
    kind = RetryErrorKind.ABORTED

    def __init__(self, controller: str, failure_count: int, **kwargs: Any) -> None:
        super().__init__(
            f"Retries aborted after {failure_count} attempts",
            controller=controller,
            **kwargs,
        )
        self.failure_count = failure_count


class StoppedError(RetryError):
    """An attempt was about to start after ``end()``."""

    default_code = "retries_stopped"
    kind = RetryErrorKind.STOPPED

    def __init__(self, controller: str, **kwargs: Any) -> None:
        super().__init__(f"{controller} has been stopped", controller=controller, **kwargs)


class RetriesEndedError(RetryError):
    """A backoff wait was cancelled by ``end()``."""

    default_code = "retries_ended"
    kind = RetryErrorKind.ENDED

    def __init__(self, controller: str, **kwargs: Any) -> None:
        super().__init__(f"Retries of {controller} ended", controller=controller, **kwargs)


class RetryLimitError(RetryError):
    """More failures were recorded than ``limit`` allows."""

    default_code = "retry_limit_reached"
    kind = RetryErrorKind.RETRY_LIMIT

    def __init__(self, controller: str, limit: int, **kwargs: Any) -> None:
        super().__init__("Retry limit reached", controller=controller, **kwargs)
        self.limit = limit


class NoInstanceError(RetryError):
    """Nothing is pending and a new cycle may not be started."""

    default_code = "no_available_instance"
    kind = RetryErrorKind.NO_INSTANCE

    def __init__(self, controller: str, **kwargs: Any) -> None:
        super().__init__("No available instance", controller=controller, **kwargs)


__all__ = [
    "AbortedError",
    "NoInstanceError",
    "RetriesEndedError",
    "RetryError",
    "RetryErrorKind",
    "RetryLimitError",
    "StoppedError",
]
