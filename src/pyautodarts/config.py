"""Client configuration for pyautodarts."""

from __future__ import annotations

import dataclasses
import math
import os
from collections.abc import Mapping
from typing import Any

from pyautodarts._constants import (
    DEFAULT_HOST,
    DEFAULT_INTERVAL_MS,
    DEFAULT_PORT,
    DEFAULT_TRIPLE_MIN_SCORE,
    METADATA_INTERVAL_S,
    REQUEST_TIMEOUT_S,
)
from pyautodarts.exceptions import AutodartsConfigError


def _lenient_number(value: Any) -> float:
    """Coerce *value* to a number, falling back to ``0`` for anything unusable."""
    if isinstance(value, bool):
        return float(value)
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(result):
        return 0.0
    return result


def _as_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise AutodartsConfigError(f"{field_name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class AutodartsConfig:
    """Adapter configuration.

    Parameters
    ----------
    host : str
        Host name or IP of the machine running the board manager.
    port : int
        Board manager HTTP port.
    interval_ms : int
        Polling interval for ``/api/state`` in milliseconds.
    triple_min_score : float
        Minimum dart score for the triple flag.  A T1 (3 points) only
        counts when this is 3 or lower.
    request_timeout : float
        Upper bound in seconds for a single HTTP request.
    metadata_interval : float
        Seconds between version/camera config refreshes.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    interval_ms: int = DEFAULT_INTERVAL_MS
    triple_min_score: float = DEFAULT_TRIPLE_MIN_SCORE
    request_timeout: float = REQUEST_TIMEOUT_S
    metadata_interval: float = METADATA_INTERVAL_S

    def __post_init__(self) -> None:
        if not self.host or not self.host.strip():
            raise AutodartsConfigError("host must be non-empty")
        if not 0 < self.port < 65536:
            raise AutodartsConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.interval_ms <= 0:
            raise AutodartsConfigError(f"interval_ms must be positive, got {self.interval_ms}")
        if self.request_timeout <= 0:
            raise AutodartsConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.metadata_interval <= 0:
            raise AutodartsConfigError(f"metadata_interval must be positive, got {self.metadata_interval}")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def interval(self) -> float:
        """Polling interval in seconds."""
        return self.interval_ms / 1000.0

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> AutodartsConfig:
        """Create configuration from host-native adapter options.

        Recognizes ``host``, ``port``, ``interval`` (milliseconds) and
        ``tripleMinScore``.  Keys that are missing or ``None`` fall back
        to the defaults.  A non-numeric ``tripleMinScore`` counts as ``0``.
        """
        kwargs: dict[str, Any] = {}

        host = options.get("host")
        if host is not None:
            kwargs["host"] = str(host).strip()

        port = options.get("port")
        if port is not None:
            kwargs["port"] = _as_int(port, "port")

        interval = options.get("interval")
        if interval is not None:
            kwargs["interval_ms"] = _as_int(interval, "interval")

        min_score = options.get("tripleMinScore")
        if min_score is not None:
            kwargs["triple_min_score"] = _lenient_number(min_score)

        return cls(**kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> AutodartsConfig:
        """Create configuration from environment variables.

        Reads ``AUTODARTS_HOST``, ``AUTODARTS_PORT``, ``AUTODARTS_INTERVAL``,
        ``AUTODARTS_TRIPLE_MIN_SCORE`` and ``AUTODARTS_REQUEST_TIMEOUT``.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AutodartsConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        host = env.get("AUTODARTS_HOST")
        if host is not None:
            config_kwargs["host"] = host

        port_env = env.get("AUTODARTS_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _as_int(port_env, "AUTODARTS_PORT")

        interval_env = env.get("AUTODARTS_INTERVAL")
        if interval_env is not None and "interval_ms" not in overrides:
            config_kwargs["interval_ms"] = _as_int(interval_env, "AUTODARTS_INTERVAL")

        min_score_env = env.get("AUTODARTS_TRIPLE_MIN_SCORE")
        if min_score_env is not None and "triple_min_score" not in overrides:
            config_kwargs["triple_min_score"] = _lenient_number(min_score_env)

        timeout_env = env.get("AUTODARTS_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise AutodartsConfigError(f"AUTODARTS_REQUEST_TIMEOUT must be a number, got {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
