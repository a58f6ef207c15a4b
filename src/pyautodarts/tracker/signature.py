"""Snapshot signatures for duplicate-poll suppression.

The board manager keeps reporting the same throws list until a new dart
lands or the visit is reset, so most polls carry nothing new.  A signature
is compared against the previous one; it is never persisted or parsed.

Only segment name and multiplier take part.  The face value is implied by
the name for every segment the board manager reports.
"""

from __future__ import annotations

from collections.abc import Sequence

from pyautodarts.models.board import Dart

Signature = tuple[tuple[str, int], ...]


def snapshot_signature(throws: Sequence[Dart]) -> Signature:
    """Return the ``(name, multiplier)`` sequence of *throws*."""
    pairs: list[tuple[str, int]] = []
    for dart in throws:
        segment = dart.segment
        if segment is None:
            pairs.append(("", 0))
        else:
            pairs.append((segment.name, segment.multiplier))
    return tuple(pairs)
