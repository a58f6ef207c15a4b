"""Dart scoring."""

from __future__ import annotations

from pyautodarts._constants import TRIPLE_MULTIPLIER
from pyautodarts.models.board import Dart


def calc_score(dart: Dart | None) -> int:
    """Points for a single dart: ``number * multiplier``, ``0`` without a segment."""
    if dart is None or dart.segment is None:
        return 0
    return dart.segment.number * dart.segment.multiplier


def is_triple(dart: Dart | None, min_score: float) -> bool:
    """Whether *dart* hit a triple ring and scored at least *min_score* points."""
    if dart is None or dart.segment is None:
        return False
    return dart.segment.multiplier == TRIPLE_MULTIPLIER and calc_score(dart) >= min_score
