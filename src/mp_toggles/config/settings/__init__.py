"""Config settings – env-based configuration."""
from mp_toggles.config.settings.base import Settings
from mp_toggles.config.settings.factory import SettingsFactory
from mp_toggles.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_toggles.config.settings.toggles import ToggleSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "ToggleSettings",
]
