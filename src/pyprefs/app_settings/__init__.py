"""Shared application settings helpers."""

from .coercion import coerce_bool
from .config_model import (
    AppConfig,
    ApplicationConfig,
    DefaultsConfig,
    IntegrationConfig,
    MainWindowConfig,
    PolicyConfig,
    SecurityConfig,
    WorkspaceLockingConfig,
    normalize_linked_settings,
)
from .enforced import EnforcedSettings
from .paths import get_enforced_settings_file_path, get_settings_file_path
from .store import load_config, save_config

__all__ = [
    "AppConfig",
    "ApplicationConfig",
    "DefaultsConfig",
    "EnforcedSettings",
    "IntegrationConfig",
    "MainWindowConfig",
    "PolicyConfig",
    "SecurityConfig",
    "WorkspaceLockingConfig",
    "coerce_bool",
    "get_enforced_settings_file_path",
    "get_settings_file_path",
    "load_config",
    "normalize_linked_settings",
    "save_config",
]
