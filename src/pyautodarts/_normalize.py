"""Normalization helpers.

Centralizes defensive parsing of board manager payload values.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def non_negative_or_zero(value: Any) -> int:
    parsed = safe_int(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed


def safe_number(value: Any) -> int | float | None:
    """Parse *value* as a number, keeping integral values as ``int``."""
    parsed = safe_float(value)
    if parsed is None:
        return None
    if parsed.is_integer():
        return int(parsed)
    return parsed
