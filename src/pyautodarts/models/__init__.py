"""Pydantic models for board manager API payloads."""

from pyautodarts.models.board import BoardState, Dart, Segment
from pyautodarts.models.system import BoardConfig, CameraInfo

__all__ = [
    "BoardConfig",
    "BoardState",
    "CameraInfo",
    "Dart",
    "Segment",
]
