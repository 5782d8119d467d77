"""Resilience – retry controller configuration.

Numeric tuning lives in :class:`RetryTuning`, a :class:`Settings` subclass that
can be loaded from ``RETRY_*`` environment variables.  Collaborators
(``attempt``, ``on_success`` ...) can only be supplied in code and are bundled
with the tuning in :class:`RetryConfig`, which is resolved once and is
immutable afterwards.
"""
from __future__ import annotations

import copy
import dataclasses
from typing import Any, Awaitable, Callable, ClassVar, Generic, TypeVar

from singleflight.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from singleflight.config.validation import InvalidSettingValueError, MissingRequiredSettingError
from singleflight.observability.logging import Logger, get_logger
from singleflight.resilience.retry.backoff import Delay, ExponentialBackoff

T = TypeVar("T")

REQUIRED_COLLABORATORS = ("attempt", "on_success", "on_end")


@dataclasses.dataclass(frozen=True)
class RetryTuning(Settings):
    """Backoff parameters and limits.

    Attributes:
        name: Label used in log events and error messages.
        min_ms: Fixed part of every backoff wait.
        base: Growth factor of the exponential part.
        exponent: Cap on the exponent (the failure count beyond it no longer grows the wait).
        limit: Maximum number of recorded failures; ``None`` retries forever.
    """

    _prefix: ClassVar[str] = "RETRY"

    name: str = "unknown"
    min_ms: int = 0
    base: float = 1.2
    exponent: int = 33
    limit: int | None = None

    def _validate(self) -> None:
        if self.min_ms < 0:
            raise InvalidSettingValueError(self.env_key("min_ms"), self.min_ms, "must be >= 0")
        if self.base <= 0:
            raise InvalidSettingValueError(self.env_key("base"), self.base, "must be > 0")
        if self.exponent < 0:
            raise InvalidSettingValueError(self.env_key("exponent"), self.exponent, "must be >= 0")
        if self.limit is not None and self.limit < 0:
            raise InvalidSettingValueError(self.env_key("limit"), self.limit, "must be >= 0 or unset")

    def default_backoff(self) -> ExponentialBackoff:
        return ExponentialBackoff(min_ms=self.min_ms, base=self.base, exponent=self.exponent)


@dataclasses.dataclass(frozen=True)
class RetryConfig(Generic[T]):
    """Everything a :class:`RetryController` needs, resolved at construction.

    ``attempt``, ``on_success`` and ``on_end`` are required; omitting any of
    them raises :class:`MissingRequiredSettingError` naming all that are
    missing.  ``retry_delay`` defaults to the tuning's
    :class:`ExponentialBackoff` and ``log`` to the ``singleflight.retry``
    structlog logger.
    """

    attempt: Callable[[], Awaitable[T]] | None = None
    on_success: Callable[[T], Any] | None = None
    on_end: Callable[[T | None], Any] | None = None
    setup: Callable[[], Any] | None = None
    tuning: RetryTuning = dataclasses.field(default_factory=RetryTuning)
    retry_delay: Callable[[int], Delay] | None = None
    log: Logger | None = None

    def __post_init__(self) -> None:
        missing = [name for name in REQUIRED_COLLABORATORS if getattr(self, name) is None]
        if missing:
            raise MissingRequiredSettingError(*missing)
        if self.retry_delay is None:
            object.__setattr__(self, "retry_delay", self.tuning.default_backoff())
        if self.log is None:
            object.__setattr__(self, "log", get_logger("singleflight.retry"))

    @property
    def name(self) -> str:
        return self.tuning.name

    @property
    def limit(self) -> int | None:
        return self.tuning.limit

    @classmethod
    def from_options(cls, **options: Any) -> RetryConfig[Any]:
        """Build from flat keyword options, routing tuning fields into :class:`RetryTuning`."""
        tuning_fields = {f.name for f in dataclasses.fields(RetryTuning)}
        tuning = {k: options.pop(k) for k in list(options) if k in tuning_fields}
        if "tuning" in options and tuning:
            raise TypeError("pass either 'tuning' or individual tuning fields, not both")
        if tuning:
            options["tuning"] = RetryTuning(**tuning)
        return cls(**options)

    @classmethod
    def builder(cls) -> RetryConfigBuilder:
        return RetryConfigBuilder()

    @classmethod
    def from_env(cls, loader: SettingsLoader | None = None, **collaborators: Any) -> RetryConfig[Any]:
        """Load :class:`RetryTuning` through *loader* and attach *collaborators*."""
        tuning = (loader or EnvSettingsLoader()).load(RetryTuning)
        return cls(tuning=tuning, **collaborators)


class RetryConfigBuilder:
    """Immutable fluent builder for :class:`RetryConfig`.

    Each ``with_*`` call returns a **new** builder so a partially configured
    builder can be shared::

        base = RetryConfig.builder().with_on_success(cache).with_on_end(close)
        primary = base.with_attempt(connect_primary).with_tuning(name="primary").build()
        replica = base.with_attempt(connect_replica).with_tuning(name="replica").build()
    """

    def __init__(self) -> None:
        self._attrs: dict[str, Any] = {}
        self._tuning: dict[str, Any] = {}

    def with_(self, **kwargs: Any) -> RetryConfigBuilder:
        """Return a shallow copy of this builder with *kwargs* applied."""
        clone = copy.copy(self)
        clone._attrs = {**self._attrs, **kwargs}  # noqa: SLF001
        return clone

    def with_tuning(self, **fields: Any) -> RetryConfigBuilder:
        clone = copy.copy(self)
        clone._tuning = {**self._tuning, **fields}  # noqa: SLF001
        return clone

    def with_attempt(self, attempt: Callable[[], Awaitable[Any]]) -> RetryConfigBuilder:
        return self.with_(attempt=attempt)

    def with_setup(self, setup: Callable[[], Any]) -> RetryConfigBuilder:
        return self.with_(setup=setup)

    def with_on_success(self, on_success: Callable[[Any], Any]) -> RetryConfigBuilder:
        return self.with_(on_success=on_success)

    def with_on_end(self, on_end: Callable[[Any], Any]) -> RetryConfigBuilder:
        return self.with_(on_end=on_end)

    def with_retry_delay(self, retry_delay: Callable[[int], Delay]) -> RetryConfigBuilder:
        return self.with_(retry_delay=retry_delay)

    def with_log(self, log: Logger) -> RetryConfigBuilder:
        return self.with_(log=log)

    def build(self) -> RetryConfig[Any]:
        return RetryConfig(tuning=RetryTuning(**self._tuning), **self._attrs)


__all__ = ["REQUIRED_COLLABORATORS", "RetryConfig", "RetryConfigBuilder", "RetryTuning"]
