"""Testing fakes – RecordingLogger."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class LoggedEvent:
    level: str
    event: str
    fields: dict[str, Any]


class RecordingLogger:
    """In-memory :class:`~singleflight.observability.logging.Logger` that keeps every call."""

    def __init__(self) -> None:
        self.records: list[LoggedEvent] = []

    def _record(self, level: str, event: str, kw: dict[str, Any]) -> None:
        self.records.append(LoggedEvent(level, event, dict(kw)))

    def debug(self, event: str, **kw: Any) -> None:
        self._record("debug", event, kw)

    def info(self, event: str, **kw: Any) -> None:
        self._record("info", event, kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._record("warning", event, kw)

    def error(self, event: str, **kw: Any) -> None:
        self._record("error", event, kw)

    @property
    def events(self) -> list[str]:
        return [r.event for r in self.records]

    def find(self, event: str) -> list[LoggedEvent]:
        return [r for r in self.records if r.event == event]


__all__ = ["LoggedEvent", "RecordingLogger"]
