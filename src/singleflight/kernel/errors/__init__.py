"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ConfigurationError          (singleflight.config.validation)
    │   ├── MissingRequiredSettingError
    │   └── InvalidSettingValueError
    └── RetryError                  (retry.py)
        ├── AbortedError
        ├── StoppedError
        ├── RetriesEndedError
        ├── RetryLimitError
        └── NoInstanceError
"""

from singleflight.kernel.errors.base import BaseError
from singleflight.kernel.errors.retry import (
    AbortedError,
    NoInstanceError,
    RetriesEndedError,
    RetryError,
    RetryErrorKind,
    RetryLimitError,
    StoppedError,
)

__all__ = [
    "AbortedError",
    "BaseError",
    "NoInstanceError",
    "RetriesEndedError",
    "RetryError",
    "RetryErrorKind",
    "RetryLimitError",
    "StoppedError",
]
