from __future__ import annotations

from typing import Any


def coerce_bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off", ""}:
            return False
    return default


def coerce_section(raw: Any) -> dict[str, Any]:
    return dict(raw) if isinstance(raw, dict) else {}


def coerce_int_clamped(value: object, default: int, min_value: int, max_value: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        num = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        num = default
    return max(min_value, min(max_value, num))


def coerce_text(value: object, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()
