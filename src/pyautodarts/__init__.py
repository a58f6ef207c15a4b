"""pyautodarts - Async poller for the local Autodarts board manager API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyautodarts")
except PackageNotFoundError:
    __version__ = "0+local"
from pyautodarts.adapter import AutodartsAdapter
from pyautodarts.client import AutodartsClient
from pyautodarts.config import AutodartsConfig
from pyautodarts.exceptions import (
    AutodartsConfigError,
    AutodartsConnectionError,
    AutodartsError,
    AutodartsResponseError,
    AutodartsStateError,
    AutodartsTransportError,
)
from pyautodarts.models import BoardConfig, BoardState, CameraInfo, Dart, Segment
from pyautodarts.state.objects import StateId
from pyautodarts.state.store import StateStore, StateValue
from pyautodarts.tracker import TrackerEvents, TrackerState, VisitTracker, calc_score, snapshot_signature

__all__ = [
    "__version__",
    "AutodartsAdapter",
    "AutodartsClient",
    "AutodartsConfig",
    "AutodartsConfigError",
    "AutodartsConnectionError",
    "AutodartsError",
    "AutodartsResponseError",
    "AutodartsStateError",
    "AutodartsTransportError",
    "BoardConfig",
    "BoardState",
    "CameraInfo",
    "Dart",
    "Segment",
    "StateId",
    "StateStore",
    "StateValue",
    "TrackerEvents",
    "TrackerState",
    "VisitTracker",
    "calc_score",
    "snapshot_signature",
]
