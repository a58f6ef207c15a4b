"""Board manager system metadata models (``/api/config``)."""

from __future__ import annotations

import json
from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from pyautodarts._constants import DEFAULT_CAM_FPS, DEFAULT_CAM_HEIGHT, DEFAULT_CAM_WIDTH
from pyautodarts._normalize import safe_number
from pyautodarts.models._base import AutodartsBaseModel

_DEFAULTS: dict[str, int] = {
    "width": DEFAULT_CAM_WIDTH,
    "height": DEFAULT_CAM_HEIGHT,
    "fps": DEFAULT_CAM_FPS,
}


class CameraInfo(AutodartsBaseModel):
    """Camera capture parameters.

    The board manager reports a single ``cam`` block shared by all cameras.
    Missing values fall back to the board manager defaults (1280x720 @ 20 fps).
    """

    width: int | float = DEFAULT_CAM_WIDTH
    height: int | float = DEFAULT_CAM_HEIGHT
    fps: int | float = DEFAULT_CAM_FPS

    @field_validator("width", "height", "fps", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any, info: ValidationInfo) -> int | float:
        parsed = safe_number(value)
        if parsed is None:
            return _DEFAULTS[info.field_name]
        return parsed

    def to_json(self) -> str:
        """Compact JSON as published to the ``system.camN`` states."""
        return json.dumps(
            {"width": self.width, "height": self.height, "fps": self.fps},
            separators=(",", ":"),
        )


class BoardConfig(AutodartsBaseModel):
    """Reply of ``GET /api/config``.  Only the camera block is modelled."""

    cam: CameraInfo = Field(default_factory=CameraInfo)

    @field_validator("cam", mode="before")
    @classmethod
    def _require_object(cls, value: Any) -> Any:
        if isinstance(value, (dict, CameraInfo)):
            return value
        return {}
