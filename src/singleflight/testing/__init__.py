"""Testing support – fakes and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["singleflight.testing.fixtures"]
"""

from singleflight.testing.fakes import FakeScheduler, FakeTimer, LoggedEvent, RecordingLogger

__all__ = ["FakeScheduler", "FakeTimer", "LoggedEvent", "RecordingLogger"]
