"""Kernel time – Scheduler port + implementations."""
from singleflight.kernel.time.scheduler import LoopScheduler, Scheduler, TimerHandle, next_turn

__all__ = ["LoopScheduler", "Scheduler", "TimerHandle", "next_turn"]
