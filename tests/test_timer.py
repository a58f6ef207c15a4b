from __future__ import annotations

import asyncio

import pytest

from pyautodarts._timer import IntervalTimer


async def _wait_for(predicate, timeout: float = 2.0) -> None:  # type: ignore[no-untyped-def]
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached")
        await asyncio.sleep(0.005)


@pytest.mark.asyncio
async def test_fires_immediately_and_repeats() -> None:
    calls: list[int] = []

    async def _cb() -> None:
        calls.append(1)

    timer = IntervalTimer(_cb, 0.01, name="test")
    timer.start()
    await _wait_for(lambda: len(calls) >= 1)
    assert timer.is_running is True

    await _wait_for(lambda: len(calls) >= 3)
    await timer.cancel()
    assert timer.is_running is False


@pytest.mark.asyncio
async def test_callback_errors_do_not_stop_timer(caplog: pytest.LogCaptureFixture) -> None:
    calls: list[int] = []

    async def _cb() -> None:
        calls.append(1)
        raise RuntimeError("tick failed")

    timer = IntervalTimer(_cb, 0.01, name="failing")
    timer.start()
    await _wait_for(lambda: len(calls) >= 3)
    await timer.cancel()

    assert any("failing callback failed" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_cancel_stops_pending_callbacks() -> None:
    started = asyncio.Event()
    cancelled: list[bool] = []

    async def _cb() -> None:
        started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    timer = IntervalTimer(_cb, 60, name="slow")
    timer.start()
    await asyncio.wait_for(started.wait(), 1)
    assert timer.pending == 1

    await timer.cancel()

    assert cancelled == [True]
    assert timer.pending == 0
    assert timer.is_running is False


def test_rejects_non_positive_interval() -> None:
    async def _cb() -> None:
        return None

    with pytest.raises(ValueError):
        IntervalTimer(_cb, 0)
