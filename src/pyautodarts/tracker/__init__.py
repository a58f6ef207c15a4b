"""Throw/visit detection.

Turns the stream of polled ``/api/state`` snapshots into per-dart and
per-visit scoring events.
"""

from pyautodarts.tracker.scoring import calc_score, is_triple
from pyautodarts.tracker.signature import Signature, snapshot_signature
from pyautodarts.tracker.visit import TrackerEvents, TrackerState, VisitTracker

__all__ = [
    "Signature",
    "TrackerEvents",
    "TrackerState",
    "VisitTracker",
    "calc_score",
    "is_triple",
    "snapshot_signature",
]
