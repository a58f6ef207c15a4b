"""Pollers that turn board manager replies into published states."""

from __future__ import annotations

import asyncio
import logging

from pyautodarts._redact import truncate_for_log
from pyautodarts.client import AutodartsClient
from pyautodarts.exceptions import AutodartsConnectionError, AutodartsResponseError, AutodartsTransportError
from pyautodarts.models.system import CameraInfo
from pyautodarts.state.objects import CAMERA_STATE_IDS, StateId
from pyautodarts.state.store import StateStore
from pyautodarts.tracker.visit import TrackerEvents, VisitTracker

_logger = logging.getLogger(__name__)


class DevicePoller:
    """Fetch ``/api/state`` once per tick and publish throw/visit events.

    Ticks never overlap: a tick that starts while the previous one is still
    waiting on the board manager is skipped, so snapshots reach the tracker
    in order.
    """

    def __init__(self, client: AutodartsClient, tracker: VisitTracker, store: StateStore) -> None:
        self._client = client
        self._tracker = tracker
        self._store = store
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def online(self) -> bool:
        return self._tracker.state.online

    async def tick(self) -> bool:
        """Run one poll.  Returns ``False`` when skipped because one is in flight."""
        if self._in_flight:
            _logger.debug("State poll still in flight, skipping tick")
            return False
        self._in_flight = True
        try:
            await self._poll()
        finally:
            self._in_flight = False
        return True

    async def _poll(self) -> None:
        try:
            board = await self._client.get_state()
        except AutodartsConnectionError as exc:
            self._set_online(False, reason=str(exc))
            return
        except AutodartsResponseError as exc:
            # The board answered, the payload is just unusable.
            self._set_online(True)
            _logger.warning("Autodarts API error: %s | data: %s", exc, truncate_for_log(exc.payload))
            return

        self._set_online(True)
        events = self._tracker.process(board.throws)
        if events is not None:
            self._publish(events)

    def _set_online(self, online: bool, *, reason: str = "") -> None:
        state = self._tracker.state
        was_online = state.online
        state.online = online
        if was_online and not online:
            _logger.warning("Autodarts not reachable: %s", reason)
        elif online and not was_online:
            _logger.info("Autodarts reachable again")
        self._store.set_state(StateId.ONLINE, online)

    def _publish(self, events: TrackerEvents) -> None:
        self._store.set_state(StateId.THROW_CURRENT, events.throw_score)
        self._store.set_state(StateId.THROW_IS_TRIPLE, events.is_triple)
        if events.visit_score is not None:
            # Written even when equal to the previous visit.
            self._store.set_state(StateId.VISIT_SCORE, events.visit_score)


class MetadataPoller:
    """Refresh board manager version and camera config."""

    def __init__(self, client: AutodartsClient, store: StateStore) -> None:
        self._client = client
        self._store = store

    async def tick(self) -> None:
        await asyncio.gather(self.refresh_version(), self.refresh_config())

    async def refresh_version(self) -> str:
        """Publish the board manager version, or ``""`` when it cannot be read."""
        try:
            version = await self._client.get_version()
        except AutodartsTransportError as exc:
            _logger.warning("Version API not reachable: %s", exc)
            version = ""
        self._store.set_state(StateId.BOARD_VERSION, version)
        return version

    async def refresh_config(self) -> CameraInfo | None:
        """Publish the camera config to every camera slot.

        Nothing is published when the config cannot be read.
        """
        try:
            config = await self._client.get_config()
        except AutodartsResponseError as exc:
            _logger.warning("Failed to read config: %s | data: %s", exc, truncate_for_log(exc.payload))
            return None
        except AutodartsConnectionError as exc:
            if exc.timed_out:
                _logger.warning("Config API timeout")
            else:
                _logger.warning("Config API not reachable: %s", exc)
            return None

        payload = config.cam.to_json()
        for state_id in CAMERA_STATE_IDS:
            self._store.set_state(state_id, payload)
        return config.cam
