"""Kernel time – Scheduler port + asyncio implementation.

The retry controller never touches the event loop's timer API directly; it
goes through a :class:`Scheduler` so tests can swap in a virtual clock
(:class:`~singleflight.testing.fakes.FakeScheduler`).
"""
from __future__ import annotations

import asyncio
from typing import Callable, Protocol


class TimerHandle(Protocol):
    """Handle of a delayed callback."""

    def cancel(self) -> None: ...
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    """Port: next-turn and delayed callback scheduling."""

    def time(self) -> float: ...
    def call_soon(self, callback: Callable[[], None]) -> None: ...
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopScheduler:
    """Production scheduler that delegates to an asyncio event loop.

    When *loop* is omitted the running loop is resolved on every call, so a
    scheduler created outside of a coroutine still works once the loop runs.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def time(self) -> float:
        return self.loop.time()

    def call_soon(self, callback: Callable[[], None]) -> None:
        self.loop.call_soon(callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


async def next_turn(scheduler: Scheduler) -> None:
    """Suspend until *scheduler* runs its next-turn callbacks."""
    waiter = asyncio.get_running_loop().create_future()

    def _wake() -> None:
        if not waiter.done():
            waiter.set_result(None)

    scheduler.call_soon(_wake)
    await waiter


__all__ = ["LoopScheduler", "Scheduler", "TimerHandle", "next_turn"]
