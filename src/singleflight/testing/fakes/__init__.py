"""Testing fakes – in-memory doubles for kernel ports."""
from singleflight.testing.fakes.logger import LoggedEvent, RecordingLogger
from singleflight.testing.fakes.scheduler import FakeScheduler, FakeTimer

__all__ = ["FakeScheduler", "FakeTimer", "LoggedEvent", "RecordingLogger"]
