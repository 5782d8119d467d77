"""Config – 12-factor settings and loaders."""

from singleflight.config.settings import DotenvSettingsLoader, EnvSettingsLoader, Settings, SettingsLoader
from singleflight.config.validation import (
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigurationError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
