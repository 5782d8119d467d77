"""Testing fixtures – pytest fixtures for singleflight.

Register in ``conftest.py``::

    pytest_plugins = ["singleflight.testing.fixtures"]
"""
from singleflight.testing.fixtures.scheduler import fake_scheduler, recording_logger

__all__ = ["fake_scheduler", "recording_logger"]
