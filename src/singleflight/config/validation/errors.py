"""Config validation errors."""
from __future__ import annotations

from singleflight.kernel.errors import BaseError


class ConfigurationError(BaseError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigurationError):
    """One or more required settings / collaborators are absent."""
    default_code = "missing_required_setting"

    def __init__(self, *setting_names: str) -> None:
        names = ", ".join(f"'{name}'" for name in setting_names)
        noun = "setting" if len(setting_names) == 1 else "settings"
        super().__init__(
            f"Required {noun} {names} missing",
            detail={"missing": list(setting_names)},
        )
        self.setting_names = setting_names

    @property
    def setting_name(self) -> str:
        return self.setting_names[0]


class InvalidSettingValueError(ConfigurationError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigurationError", "InvalidSettingValueError", "MissingRequiredSettingError"]
