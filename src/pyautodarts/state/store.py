"""In-memory store for the published state tree.

Keeps the last-known value of every registered state and fans out each
write to subscribers.  Nothing is persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from pyautodarts.exceptions import AutodartsStateError
from pyautodarts.state.objects import ObjectKind, StateDefinition, ValueType

_logger = logging.getLogger(__name__)

StateListener = Callable[[str, "StateValue"], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _matches_type(value_type: ValueType | None, value: Any) -> bool:
    if value_type is None:
        return True
    if value_type == ValueType.BOOLEAN:
        return isinstance(value, bool)
    if value_type == ValueType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, str)


class StateValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    val: Any
    ack: bool = True
    ts: datetime


class StateStore:
    """Object registry and last-known values.

    Every ``set_state`` call is stored and announced, even when the value
    did not change, so consumers always see a fresh timestamp.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._objects: dict[str, StateDefinition] = {}
        self._values: dict[str, StateValue] = {}
        self._listeners: list[StateListener] = []

    def ensure_object(self, definition: StateDefinition) -> bool:
        """Register *definition* unless an object with the same id exists.

        Returns ``True`` when the object was created.
        """
        if definition.id in self._objects:
            return False
        self._objects[definition.id] = definition
        return True

    def ensure_objects(self, definitions: Iterable[StateDefinition]) -> None:
        for definition in definitions:
            self.ensure_object(definition)

    def get_object(self, object_id: str) -> StateDefinition | None:
        return self._objects.get(object_id)

    def set_state(self, state_id: str, value: Any, *, ack: bool = True) -> StateValue:
        """Write *value* to a registered state and notify subscribers."""
        definition = self._objects.get(state_id)
        if definition is None or definition.kind != ObjectKind.STATE:
            raise AutodartsStateError(f"Unknown state {state_id!r}")
        if not _matches_type(definition.value_type, value):
            raise AutodartsStateError(
                f"State {state_id!r} expects {definition.value_type}, got {type(value).__name__}"
            )

        entry = StateValue(val=value, ack=ack, ts=self._clock())
        self._values[state_id] = entry
        _logger.debug("State %s = %r", state_id, value)

        for listener in list(self._listeners):
            try:
                listener(state_id, entry)
            except Exception:
                _logger.warning("State listener failed for %s", state_id, exc_info=True)
        return entry

    def get_state(self, state_id: str) -> StateValue | None:
        return self._values.get(state_id)

    def get_value(self, state_id: str, default: Any = None) -> Any:
        entry = self._values.get(state_id)
        return default if entry is None else entry.val

    def snapshot(self) -> dict[str, Any]:
        """Plain ``{state_id: value}`` view of every written state."""
        return {state_id: entry.val for state_id, entry in self._values.items()}

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* on every write.  Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
