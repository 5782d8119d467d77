"""Resilience – RetryState enum."""
from __future__ import annotations
from enum import Enum


class RetryState(str, Enum):
    IDLE = "IDLE"
    WAITING = "WAITING"
    ATTEMPTING = "ATTEMPTING"
    STOPPED = "STOPPED"


__all__ = ["RetryState"]
