"""Fixed-interval async timer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

_logger = logging.getLogger(__name__)


class IntervalTimer:
    """Run an async callback immediately and then every *interval* seconds.

    Each call runs as its own task so a slow callback does not shift the
    schedule.  Callers that must not overlap guard themselves.  Exceptions
    from a call are logged and never stop the timer.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[Any]],
        interval: float,
        *,
        name: str = "timer",
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._loop_task: asyncio.Task[None] | None = None
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def pending(self) -> int:
        """Number of callback tasks that have not finished yet."""
        return len(self._pending)

    def start(self) -> None:
        if self.is_running:
            return
        self._loop_task = asyncio.create_task(self._run(), name=f"{self._name}-loop")

    async def cancel(self) -> None:
        """Stop the schedule and cancel every callback still running."""
        tasks: list[asyncio.Task[None]] = list(self._pending)
        if self._loop_task is not None:
            tasks.append(self._loop_task)
            self._loop_task = None
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()

    async def _run(self) -> None:
        while True:
            task = asyncio.create_task(self._invoke(), name=f"{self._name}-tick")
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            await asyncio.sleep(self._interval)

    async def _invoke(self) -> None:
        try:
            await self._callback()
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.exception("%s callback failed", self._name)
