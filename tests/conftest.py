"""Shared fixtures for the singleflight test suite."""

from __future__ import annotations

from singleflight.testing.fixtures import fake_scheduler, recording_logger  # noqa: F401
