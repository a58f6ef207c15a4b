"""Helpers for safe log output.

The board manager occasionally returns HTML error pages or half-written
JSON.  Those bodies end up in WARNING logs, so they are cut down first.
"""

from __future__ import annotations

from typing import Any

from pyautodarts._constants import LOG_PAYLOAD_CHARS


def truncate_for_log(value: Any, *, max_chars: int = LOG_PAYLOAD_CHARS) -> str:
    """Return *value* as a string of at most *max_chars* characters plus a marker."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        text = value.decode("utf-8", errors="replace")
    else:
        text = str(value)
    if len(text) > max_chars:
        return f"{text[:max_chars]}…<truncated>"
    return text
