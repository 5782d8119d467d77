"""Config settings – 12-factor env-based configuration."""
from singleflight.config.settings.base import Settings
from singleflight.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader"]
