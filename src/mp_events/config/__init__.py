"""Config – 12-factor settings and loaders."""

from mp_events.config.settings import EnvSettingsLoader, PublicationSettings, Settings, SettingsLoader
from mp_events.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "PublicationSettings",
    "Settings",
    "SettingsLoader",
]
