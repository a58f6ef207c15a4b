"""Throw snapshot models for ``/api/state``."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from pyautodarts._normalize import non_negative_or_zero, safe_str
from pyautodarts.models._base import AutodartsBaseModel


class Segment(AutodartsBaseModel):
    """A scored dartboard region.

    Parameters
    ----------
    name : str
        Board manager label, e.g. ``"T20"``, ``"D16"``, ``"25"`` or ``"Miss"``.
    number : int
        Face value of the segment (``0`` when missing or unparseable).
    multiplier : int
        Ring multiplier: 1 single, 2 double, 3 triple (``0`` when missing).
    """

    name: str = ""
    number: int = 0
    multiplier: int = 0

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("number", "multiplier", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int:
        return non_negative_or_zero(value)


class Dart(AutodartsBaseModel):
    """One thrown dart.  ``segment`` is ``None`` when the device reports none."""

    segment: Segment | None = None

    @field_validator("segment", mode="before")
    @classmethod
    def _require_object(cls, value: Any) -> Any:
        if isinstance(value, (dict, Segment)):
            return value
        return None


class BoardState(AutodartsBaseModel):
    """Reply of ``GET /api/state``.

    ``throws`` lists the darts of the current, possibly incomplete visit in
    throw order.  It is ``None`` when the field is missing or not a list;
    entries that are not objects become darts without a segment.
    """

    throws: list[Dart] | None = None

    @field_validator("throws", mode="before")
    @classmethod
    def _coerce_throws(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return None
        return [item if isinstance(item, (dict, Dart)) else {} for item in value]
