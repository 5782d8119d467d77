"""Resilience – RetryController (single-flight retry).

One controller wraps one fallible async ``attempt``.  Concurrent
:meth:`RetryController.request` calls share a single request cycle::

    setup -> attempt -> [wait backoff -> attempt]* -> on_success

Failures of ``attempt`` are never surfaced directly; they are counted and
retried until the delay function returns ``False`` (:class:`AbortedError`),
the retry limit is exceeded (:class:`RetryLimitError`) or :meth:`end` retires
the controller.

The settled cycle stays cached until :meth:`reset` or :meth:`end`, so a
``request()`` after a success returns the same result without a new attempt.
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Generic, TypeVar

from singleflight.kernel.errors import (
    AbortedError,
    NoInstanceError,
    RetriesEndedError,
    RetryError,
    RetryLimitError,
    StoppedError,
)
from singleflight.kernel.time import LoopScheduler, Scheduler, TimerHandle, next_turn
from singleflight.resilience.retry.config import RetryConfig
from singleflight.resilience.retry.state import RetryState

T = TypeVar("T")


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _mark_retrieved(task: asyncio.Task[Any]) -> None:
    # Callers observe the outcome through shield(); a cycle nobody awaits any more must not warn.
    if not task.cancelled():
        task.exception()


class RetryController(Generic[T]):
    """Coalesce concurrent requests into one retried cycle.

    Args:
        config: Resolved configuration.  When omitted it is built from
            *options* (``attempt=``, ``on_success=``, ``on_end=``,
            ``retry_delay=``, ``name=``, ``limit=`` ...).
        scheduler: Next-turn / timer port.  Defaults to the running asyncio loop.
    """

    def __init__(
        self,
        config: RetryConfig[T] | None = None,
        *,
        scheduler: Scheduler | None = None,
        **options: Any,
    ) -> None:
        if config is None:
            config = RetryConfig.from_options(**options)
        elif options:
            raise TypeError("pass either a RetryConfig or keyword options, not both")
        self._config = config
        self._scheduler = scheduler or LoopScheduler()
        self._log = config.log
        self._failure_count = 0
        self._stopped = False
        self._attempting = False
        self._pending: asyncio.Task[T] | None = None
        self._pending_timer: TimerHandle | None = None
        self._pending_abort: Callable[[BaseException], None] | None = None
        self._ending: asyncio.Task[Any] | None = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> RetryConfig[T]:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def pending(self) -> bool:
        """Whether a cycle (in flight or settled) is cached."""
        return self._pending is not None

    @property
    def state(self) -> RetryState:
        if self._stopped:
            return RetryState.STOPPED
        if self._pending_timer is not None:
            return RetryState.WAITING
        if self._attempting:
            return RetryState.ATTEMPTING
        return RetryState.IDLE

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def request(self, allow_new_cycle: bool = True) -> T:
        """Return the result of the current cycle, starting one if needed.

        Raises :class:`NoInstanceError` when nothing is pending and either
        *allow_new_cycle* is false or the controller has been ended.
        Cancelling the awaiting caller does not cancel the shared cycle.
        """
        pending = self._pending
        if pending is None:
            if not allow_new_cycle or self._stopped:
                raise NoInstanceError(self.name)
            pending = self._start_cycle()
        return await asyncio.shield(pending)

    async def end(self) -> Any:
        """Retire the controller and return what ``on_end`` returns.

        An armed backoff timer is cancelled at once; an ``attempt`` already
        running is awaited.  ``on_end`` receives the cycle's result, or
        ``None`` when there is none.  Safe to call repeatedly: ``on_end`` runs
        once and every call observes its outcome.
        """
        if self._ending is None:
            self._stopped = True
            pending = self._pending
            self._log.info("retry.ending", controller=self.name, failure_count=self._failure_count)
            if self._pending_timer is not None:
                abort = self._pending_abort
                self._pending_timer.cancel()
                self._pending_timer = None
                self._pending_abort = None
                self._pending = None
                if abort is not None:
                    abort(RetriesEndedError(self.name))
            self._ending = asyncio.get_running_loop().create_task(self._finalize(pending))
            self._ending.add_done_callback(_mark_retrieved)
        return await asyncio.shield(self._ending)

    def reset(self) -> None:
        """Forget the cached cycle and the failure count.

        An in-flight cycle keeps running for the callers already awaiting it;
        the next :meth:`request` starts a fresh one.  Both cycles then loop at
        the same time and share the failure count, the backoff timer slot and
        the attempting flag, so "one cycle at a time" only holds between resets.
        """
        self._pending = None
        self._failure_count = 0

    async def __aenter__(self) -> RetryController[T]:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.end()

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def _start_cycle(self) -> asyncio.Task[T]:
        task = asyncio.get_running_loop().create_task(self._run_cycle())
        task.add_done_callback(_mark_retrieved)
        self._pending = task
        return task

    async def _run_cycle(self) -> T:
        if self._config.setup is not None:
            await _resolve(self._config.setup())
        result = await self._attempt_loop()
        self._log.info("retry.succeeded", controller=self.name)
        self._failure_count = 0
        transformed = await _resolve(self._config.on_success(result))
        return transformed or result

    async def _attempt_loop(self) -> T:
        while True:
            try:
                return await self._attempt_once()
            except Exception as exc:
                self._log.warning(
                    "retry.attempt_failed",
                    controller=self.name,
                    failure_count=self._failure_count,
                    error=repr(exc),
                )
                if self._stopped or (isinstance(exc, RetryError) and exc.terminal):
                    raise

                self._failure_count += 1
                limit = self._config.limit
                if limit is not None and self._failure_count > limit:
                    self._log.error("retry.limit_reached", controller=self.name, limit=limit)
                    raise RetryLimitError(self.name, limit, cause=exc) from exc

            await next_turn(self._scheduler)

    async def _attempt_once(self) -> T:
        # end() may land while the loop sits in next_turn(); no timer exists yet for it to cancel.
        if self._stopped:
            raise StoppedError(self.name)

        if self._failure_count:
            delay = self._config.retry_delay(self._failure_count)
            if delay is False:
                self._log.warning("retry.aborted", controller=self.name, failure_count=self._failure_count)
                raise AbortedError(self.name, self._failure_count)
            self._log.info(
                "retry.waiting",
                controller=self.name,
                failure_count=self._failure_count,
                delay_ms=delay,
            )
            await self._wait(delay)
        else:
            await next_turn(self._scheduler)

        if self._stopped:
            raise StoppedError(self.name)

        self._attempting = True
        try:
            return await self._config.attempt()
        finally:
            self._attempting = False

    async def _wait(self, delay_ms: float) -> None:
        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def _fire() -> None:
            if not waiter.done():
                waiter.set_result(None)

        def _abort(exc: BaseException) -> None:
            if not waiter.done():
                waiter.set_exception(exc)

        handle = self._scheduler.call_later(max(delay_ms, 0) / 1000, _fire)
        self._pending_timer = handle
        self._pending_abort = _abort
        try:
            await waiter
        finally:
            handle.cancel()
            if self._pending_timer is handle:
                self._pending_timer = None
                self._pending_abort = None

    async def _finalize(self, pending: asyncio.Task[T] | None) -> Any:
        result: T | None = None
        if pending is not None:
            await asyncio.wait([pending])
            if pending.cancelled():
                self._log.info("retry.ended_without_result", controller=self.name, error="cancelled")
            elif pending.exception() is not None:
                self._log.info(
                    "retry.ended_without_result",
                    controller=self.name,
                    error=repr(pending.exception()),
                )
            else:
                result = pending.result()
        self._pending = None
        outcome = await _resolve(self._config.on_end(result))
        self._log.info("retry.ended", controller=self.name, had_result=result is not None)
        return outcome


__all__ = ["RetryController"]
