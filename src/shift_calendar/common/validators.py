from __future__ import annotations

from typing import Any


def parse_bool(value: Any, default: bool = False) -> bool:
    """Interpret key/value setting strings ('true', '1', 'yes') as booleans."""

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    v = str(value).strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off", ""}:
        return False
    return default
