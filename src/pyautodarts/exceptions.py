"""Custom exception hierarchy for pyautodarts."""

from __future__ import annotations


class AutodartsError(Exception):
    """Base exception for all pyautodarts errors."""


class AutodartsConfigError(AutodartsError):
    """Invalid or missing configuration."""


class AutodartsStateError(AutodartsError):
    """Write to an unknown state id, or a value of the wrong type."""


class AutodartsTransportError(AutodartsError):
    """HTTP-level failure talking to the board manager."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class AutodartsConnectionError(AutodartsTransportError):
    """Board manager not reachable (connection refused, reset, or timed out).

    The device is considered offline until a later request succeeds.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
        timed_out: bool = False,
    ) -> None:
        self.timed_out = timed_out
        super().__init__(message, endpoint=endpoint)


class AutodartsResponseError(AutodartsTransportError):
    """Board manager answered, but the reply is unusable (non-2xx or invalid JSON).

    The device is still considered reachable.  ``payload`` carries the raw
    body so callers can log it for diagnostics.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        payload: str = "",
    ) -> None:
        self.payload = payload
        super().__init__(message, status_code=status_code, endpoint=endpoint)
