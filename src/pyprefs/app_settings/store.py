from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from pyprefs.logging_utils import get_logger

from .config_model import AppConfig
from .paths import get_settings_file_path

if TYPE_CHECKING:
    from .enforced import EnforcedSettings

_LOGGER = get_logger(__name__)


def read_json_dict(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        _LOGGER.exception("Could not read settings file %s; using defaults", path)
        return {}
    if not isinstance(raw, dict):
        _LOGGER.warning("Settings file %s does not hold an object; using defaults", path)
        return {}
    return raw


def load_config(path: Path | None = None) -> AppConfig:
    target = Path(path) if path is not None else get_settings_file_path()
    config = AppConfig.from_settings(read_json_dict(target))
    _LOGGER.info("Loaded settings from %s", target)
    return config


def save_config(config: AppConfig, path: Path | None = None, enforced: "EnforcedSettings | None" = None) -> Path:
    target = Path(path) if path is not None else get_settings_file_path()
    settings = config.to_settings()
    if enforced is not None:
        # Enforced values live only in memory; the file keeps the user's own.
        enforced.restore_user_values(settings)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(target.suffix + ".tmp")
    tmp.write_text(json.dumps(settings, indent=2, sort_keys=True), encoding="utf-8")
    tmp.replace(target)
    _LOGGER.info("Saved settings to %s", target)
    return target
