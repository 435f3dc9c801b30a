"""Enforced settings overlay.

An administrator can ship ``settings.enforced.json`` next to the user settings.
It has the same shape as the settings file; every option it names is applied
over the user's value in memory and shown read-only in the options dialog.
The user's own values are kept aside and written back when saving, so lifting
the enforcement restores them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pyprefs.logging_utils import get_logger

from .coercion import coerce_section
from .config_model import AppConfig
from .paths import get_enforced_settings_file_path
from .store import read_json_dict

_LOGGER = get_logger(__name__)


class EnforcedSettings:
    def __init__(self, values: dict[str, dict[str, Any]] | None = None) -> None:
        self._values: dict[str, dict[str, Any]] = {}
        self._user_values: dict[str, dict[str, Any]] = {}
        for section, options in (values or {}).items():
            cleaned = {str(name): value for name, value in coerce_section(options).items() if str(name).strip()}
            if cleaned:
                self._values[str(section)] = cleaned

    @classmethod
    def load(cls, path: Path | None = None) -> "EnforcedSettings":
        target = Path(path) if path is not None else get_enforced_settings_file_path()
        raw = read_json_dict(target)
        enforced = cls({k: v for k, v in raw.items() if isinstance(v, dict)})
        if enforced:
            _LOGGER.info("Enforced settings active: %d option(s) from %s", enforced.count(), target)
        return enforced

    def __bool__(self) -> bool:
        return bool(self._values)

    def count(self) -> int:
        return sum(len(options) for options in self._values.values())

    def is_enforced(self, section: str, name: str) -> bool:
        return name in self._values.get(section, {})

    def is_locked(self, target: Any, name: str) -> bool:
        section = getattr(type(target), "SECTION", None)
        if not section:
            return False
        return self.is_enforced(section, name)

    def apply(self, config: AppConfig) -> AppConfig:
        for section_name, options in self._values.items():
            section = config.section(section_name)
            if section is None:
                _LOGGER.warning("Enforced settings name unknown section %r", section_name)
                continue
            for name, value in options.items():
                if name not in section.option_names():
                    _LOGGER.warning("Enforced settings name unknown option %s.%s", section_name, name)
                    continue
                current = getattr(section, name)
                self._user_values.setdefault(section_name, {}).setdefault(name, current)
                setattr(section, name, section.coerce_option(name, value))
        return config

    def user_value(self, section: str, name: str, default: Any = None) -> Any:
        return self._user_values.get(section, {}).get(name, default)

    def restore_user_values(self, settings: dict[str, Any]) -> dict[str, Any]:
        """Put the user's own values of enforced options back into ``settings``."""
        for section_name, options in self._user_values.items():
            section = settings.get(section_name)
            if not isinstance(section, dict):
                continue
            section.update(options)
        return settings
