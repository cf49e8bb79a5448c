"""Config settings – 12-factor env-based configuration."""
from mp_events.config.settings.base import Settings
from mp_events.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_events.config.settings.publication import PublicationSettings

__all__ = ["EnvSettingsLoader", "PublicationSettings", "Settings", "SettingsLoader"]
