"""Visit detection state machine.

A visit is complete when the board manager reports exactly three darts
for the first time.  The board manager keeps reporting the completed
visit for a while before it resets the throws list, so completion is
edge-triggered on the transition from fewer than three darts.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from pyautodarts._constants import DARTS_PER_VISIT, DEFAULT_TRIPLE_MIN_SCORE
from pyautodarts.models.board import Dart
from pyautodarts.tracker.scoring import calc_score, is_triple
from pyautodarts.tracker.signature import Signature, snapshot_signature

_logger = logging.getLogger(__name__)


@dataclass
class TrackerState:
    """Mutable detection state, owned by the adapter for its whole lifetime.

    ``online`` starts out ``True`` so that the first failed poll is
    reported as a transition to offline.
    """

    last_signature: Signature | None = None
    last_throw_count: int = 0
    online: bool = True

    def reset(self) -> None:
        self.last_signature = None
        self.last_throw_count = 0
        self.online = True


class TrackerEvents(BaseModel):
    """Events derived from one new snapshot."""

    model_config = ConfigDict(frozen=True)

    throw_score: int
    is_triple: bool
    throw_count: int
    visit_score: int | None = None

    @property
    def visit_complete(self) -> bool:
        return self.visit_score is not None


class VisitTracker:
    """Derive dart and visit events from successive throw snapshots.

    Usage::

        tracker = VisitTracker(TrackerState(), triple_min_score=1)
        events = tracker.process(board_state.throws)
    """

    def __init__(self, state: TrackerState, *, triple_min_score: float = DEFAULT_TRIPLE_MIN_SCORE) -> None:
        self._state = state
        self._triple_min_score = triple_min_score

    @property
    def state(self) -> TrackerState:
        return self._state

    def process(self, throws: Sequence[Dart] | None) -> TrackerEvents | None:
        """Process one polled snapshot.

        Returns ``None`` when the snapshot carries no new information: it is
        missing, empty, or identical to the last processed one.  State is
        left untouched in that case.
        """
        if not isinstance(throws, Sequence) or not throws:
            return None

        signature = snapshot_signature(throws)
        if signature == self._state.last_signature:
            return None
        self._state.last_signature = signature

        count = len(throws)
        last_dart = throws[-1]
        visit_score: int | None = None
        if count == DARTS_PER_VISIT and self._state.last_throw_count < DARTS_PER_VISIT:
            visit_score = sum(calc_score(dart) for dart in throws[-DARTS_PER_VISIT:])
            _logger.debug("Visit complete: %d points", visit_score)

        self._state.last_throw_count = count

        return TrackerEvents(
            throw_score=calc_score(last_dart),
            is_triple=is_triple(last_dart, self._triple_min_score),
            throw_count=count,
            visit_score=visit_score,
        )
