"""Adapter lifecycle: object registration, timers, shutdown."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyautodarts._timer import IntervalTimer
from pyautodarts.client import AutodartsClient
from pyautodarts.config import AutodartsConfig
from pyautodarts.poller import DevicePoller, MetadataPoller
from pyautodarts.state.objects import OBJECT_DEFINITIONS
from pyautodarts.state.store import StateStore
from pyautodarts.tracker.visit import TrackerState, VisitTracker

_logger = logging.getLogger(__name__)


class AutodartsAdapter:
    """Poll a board manager and keep the state tree up to date.

    Usage::

        async with AutodartsAdapter(config) as adapter:
            adapter.store.subscribe(on_change)
            await asyncio.Event().wait()
    """

    def __init__(
        self,
        config: AutodartsConfig,
        *,
        store: StateStore | None = None,
        client: AutodartsClient | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._store = store if store is not None else StateStore()
        self._client = client if client is not None else AutodartsClient(config, session=session)
        self._state = TrackerState()
        self._tracker = VisitTracker(self._state, triple_min_score=config.triple_min_score)
        self._device_poller = DevicePoller(self._client, self._tracker, self._store)
        self._metadata_poller = MetadataPoller(self._client, self._store)
        self._poll_timer: IntervalTimer | None = None
        self._metadata_timer: IntervalTimer | None = None

    @property
    def config(self) -> AutodartsConfig:
        return self._config

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def device_poller(self) -> DevicePoller:
        return self._device_poller

    @property
    def metadata_poller(self) -> MetadataPoller:
        return self._metadata_poller

    @property
    def is_running(self) -> bool:
        return self._poll_timer is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Register objects, reset detection state and start both timers."""
        if self.is_running:
            return
        _logger.info("Autodarts adapter started (%s)", self._config.base_url)

        self._store.ensure_objects(OBJECT_DEFINITIONS)
        self._state.reset()
        await self._client.__aenter__()

        self._poll_timer = IntervalTimer(self._device_poller.tick, self._config.interval, name="state-poll")
        self._poll_timer.start()
        self._metadata_timer = IntervalTimer(
            self._metadata_poller.tick,
            self._config.metadata_interval,
            name="metadata-poll",
        )
        self._metadata_timer.start()

    async def stop(self) -> None:
        """Cancel both timers and any request still in flight."""
        if not self.is_running:
            return
        for timer in (self._poll_timer, self._metadata_timer):
            if timer is not None:
                await timer.cancel()
        self._poll_timer = None
        self._metadata_timer = None
        await self._client.__aexit__(None, None, None)
        _logger.info("Autodarts adapter stopped")

    async def __aenter__(self) -> AutodartsAdapter:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
