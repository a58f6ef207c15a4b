from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest

from pyautodarts.client import AutodartsClient
from pyautodarts.config import AutodartsConfig
from pyautodarts.exceptions import AutodartsConnectionError, AutodartsResponseError
from pyautodarts.poller import DevicePoller, MetadataPoller
from pyautodarts.state.objects import OBJECT_DEFINITIONS, StateId
from pyautodarts.state.store import StateStore
from pyautodarts.tracker.visit import TrackerState, VisitTracker


class _FakeTransport:
    """Serves canned replies per endpoint; exceptions are raised."""

    def __init__(self, replies: dict[str, Any] | None = None) -> None:
        self.replies: dict[str, Any] = dict(replies or {})
        self.calls: list[str] = []

    def _reply(self, endpoint: str) -> Any:
        self.calls.append(endpoint)
        reply = self.replies[endpoint]
        if isinstance(reply, list):
            reply = reply.pop(0) if len(reply) > 1 else reply[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def get_text(self, endpoint: str) -> str:
        return str(self._reply(endpoint))

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        return dict(self._reply(endpoint))


def _throw(name: str, number: int, multiplier: int) -> dict[str, Any]:
    return {"segment": {"name": name, "number": number, "multiplier": multiplier}}


def _store() -> StateStore:
    store = StateStore()
    store.ensure_objects(OBJECT_DEFINITIONS)
    return store


def _device_poller(transport: Any, store: StateStore, *, min_score: float = 1) -> DevicePoller:
    client = AutodartsClient(AutodartsConfig(), transport=transport)
    return DevicePoller(client, VisitTracker(TrackerState(), triple_min_score=min_score), store)


def _refused() -> AutodartsConnectionError:
    return AutodartsConnectionError("Request to /api/state failed: refused", endpoint="/api/state")


@pytest.mark.asyncio
async def test_visit_published_once_for_three_darts() -> None:
    store = _store()
    visits: list[object] = []
    store.subscribe(lambda state_id, entry: visits.append(entry.val) if state_id == "visit.score" else None)
    snapshots = [
        {"throws": [_throw("T20", 20, 3)]},
        {"throws": [_throw("T20", 20, 3), _throw("S5", 5, 1)]},
        {"throws": [_throw("T20", 20, 3), _throw("S5", 5, 1), _throw("D16", 16, 2)]},
        {"throws": [_throw("T20", 20, 3), _throw("S5", 5, 1), _throw("D16", 16, 2)]},
    ]
    poller = _device_poller(_FakeTransport({"/api/state": snapshots}), store)

    for _ in range(5):
        assert await poller.tick() is True

    assert visits == [97]
    assert store.get_value(StateId.THROW_CURRENT) == 32
    assert store.get_value(StateId.THROW_IS_TRIPLE) is False
    assert store.get_value(StateId.ONLINE) is True


@pytest.mark.asyncio
async def test_throw_events_published_only_for_new_snapshots() -> None:
    store = _store()
    writes: list[str] = []
    store.subscribe(lambda state_id, entry: writes.append(state_id))
    poller = _device_poller(_FakeTransport({"/api/state": {"throws": [_throw("T20", 20, 3)]}}), store)

    await poller.tick()
    await poller.tick()

    assert writes == ["online", "throw.current", "throw.isTriple", "online"]
    assert store.get_value(StateId.THROW_CURRENT) == 60
    assert store.get_value(StateId.THROW_IS_TRIPLE) is True


@pytest.mark.asyncio
async def test_triple_threshold_from_config() -> None:
    store = _store()
    poller = _device_poller(_FakeTransport({"/api/state": {"throws": [_throw("T20", 20, 3)]}}), store, min_score=100)

    await poller.tick()

    assert store.get_value(StateId.THROW_CURRENT) == 60
    assert store.get_value(StateId.THROW_IS_TRIPLE) is False


@pytest.mark.asyncio
async def test_empty_or_missing_throws_only_publish_online() -> None:
    store = _store()
    transport = _FakeTransport({"/api/state": [{"throws": []}, {"status": "Takeout"}, {"throws": None}]})
    poller = _device_poller(transport, store)

    for _ in range(3):
        await poller.tick()

    assert store.snapshot() == {"online": True}


@pytest.mark.asyncio
async def test_connection_error_marks_offline_and_logs_transition_once(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="pyautodarts.poller")
    store = _store()
    online_writes: list[object] = []
    store.subscribe(lambda state_id, entry: online_writes.append(entry.val) if state_id == "online" else None)
    transport = _FakeTransport({"/api/state": [_refused(), _refused(), _refused(), {"throws": []}]})
    poller = _device_poller(transport, store)

    for _ in range(4):
        await poller.tick()

    assert online_writes == [False, False, False, True]
    unreachable = [r for r in caplog.records if "not reachable" in r.getMessage()]
    assert len(unreachable) == 1
    assert unreachable[0].levelno == logging.WARNING
    assert any("reachable again" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_timeout_treated_like_connection_error() -> None:
    store = _store()
    timeout = AutodartsConnectionError("timed out", endpoint="/api/state", timed_out=True)
    poller = _device_poller(_FakeTransport({"/api/state": timeout}), store)

    assert await poller.tick() is True

    assert store.get_value(StateId.ONLINE) is False
    assert poller.online is False


@pytest.mark.asyncio
async def test_malformed_payload_keeps_board_online(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="pyautodarts.poller")
    store = _store()
    body = "<html>" + "x" * 500
    error = AutodartsResponseError("Invalid JSON from /api/state", endpoint="/api/state", payload=body)
    poller = _device_poller(_FakeTransport({"/api/state": error}), store)

    await poller.tick()

    assert store.snapshot() == {"online": True}
    (record,) = [r for r in caplog.records if "Autodarts API error" in r.getMessage()]
    assert "<truncated>" in record.getMessage()
    assert "x" * 201 not in record.getMessage()


@pytest.mark.asyncio
async def test_overlapping_tick_is_skipped() -> None:
    store = _store()
    release = asyncio.Event()

    class _SlowTransport(_FakeTransport):
        async def get_json(self, endpoint: str) -> dict[str, Any]:
            self.calls.append(endpoint)
            await release.wait()
            return {"throws": [_throw("S1", 1, 1)]}

    transport = _SlowTransport()
    poller = _device_poller(transport, store)

    first = asyncio.create_task(poller.tick())
    await asyncio.sleep(0)
    assert poller.in_flight is True

    assert await poller.tick() is False
    assert transport.calls == ["/api/state"]

    release.set()
    assert await first is True
    assert poller.in_flight is False
    assert store.get_value(StateId.THROW_CURRENT) == 1


@pytest.mark.asyncio
async def test_in_flight_flag_cleared_after_unexpected_error() -> None:
    store = _store()
    poller = _device_poller(_FakeTransport({"/api/state": RuntimeError("bug")}), store)

    with pytest.raises(RuntimeError):
        await poller.tick()

    assert poller.in_flight is False


# ------------------------------------------------------------------
# MetadataPoller
# ------------------------------------------------------------------


def _metadata_poller(transport: Any, store: StateStore) -> MetadataPoller:
    return MetadataPoller(AutodartsClient(AutodartsConfig(), transport=transport), store)


@pytest.mark.asyncio
async def test_metadata_publishes_version_and_cameras() -> None:
    store = _store()
    transport = _FakeTransport(
        {"/api/version": " 0.23.1\n", "/api/config": {"cam": {"width": 1920, "height": 1080, "fps": 30}}}
    )

    await _metadata_poller(transport, store).tick()

    assert store.get_value(StateId.BOARD_VERSION) == "0.23.1"
    expected = '{"width":1920,"height":1080,"fps":30}'
    assert [store.get_value(f"system.cam{slot}") for slot in range(3)] == [expected] * 3


@pytest.mark.asyncio
async def test_version_failure_resets_to_empty_string() -> None:
    store = _store()
    transport = _FakeTransport(
        {"/api/version": ["1.0.0", AutodartsConnectionError("refused", endpoint="/api/version")]}
    )
    poller = _metadata_poller(transport, store)

    assert await poller.refresh_version() == "1.0.0"
    assert await poller.refresh_version() == ""
    assert store.get_value(StateId.BOARD_VERSION) == ""


@pytest.mark.asyncio
async def test_camera_defaults_when_block_missing() -> None:
    store = _store()
    cam = await _metadata_poller(_FakeTransport({"/api/config": {}}), store).refresh_config()

    assert cam is not None
    assert store.get_value("system.cam1") == '{"width":1280,"height":720,"fps":20}'


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        AutodartsResponseError("Invalid JSON from /api/config", endpoint="/api/config", payload="{"),
        AutodartsConnectionError("timed out", endpoint="/api/config", timed_out=True),
        AutodartsConnectionError("refused", endpoint="/api/config"),
    ],
)
async def test_config_failure_publishes_nothing(error: Exception, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="pyautodarts.poller")
    store = _store()

    assert await _metadata_poller(_FakeTransport({"/api/config": error}), store).refresh_config() is None

    assert store.snapshot() == {}
    assert len(caplog.records) == 1
