"""HTTP transport for the board manager's local REST API."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pyautodarts._constants import USER_AGENT
from pyautodarts.config import AutodartsConfig
from pyautodarts.exceptions import AutodartsConnectionError, AutodartsResponseError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, endpoint: str) -> str:
        ...

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        ...


class HttpTransport:
    """Plain GET transport with a hard per-request timeout.

    A request that exceeds ``config.request_timeout`` is aborted and its
    connection released before :class:`AutodartsConnectionError` is raised.
    """

    def __init__(self, config: AutodartsConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_text(self, endpoint: str) -> str:
        """GET *endpoint* and return the decoded body of a 2xx reply."""
        url = f"{self._config.base_url}{endpoint}"
        headers = {"accept-encoding": "identity", "user-agent": USER_AGENT}

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                status = resp.status
                body = await resp.read()
        except TimeoutError as exc:
            raise AutodartsConnectionError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
                timed_out=True,
            ) from exc
        except aiohttp.ClientError as exc:
            raise AutodartsConnectionError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        text = body.decode("utf-8", errors="replace")
        if not 200 <= status < 300:
            raise AutodartsResponseError(
                f"HTTP {status} from {endpoint}",
                status_code=status,
                endpoint=endpoint,
                payload=text,
            )
        return text

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        """GET *endpoint* and decode a JSON object body."""
        text = await self.get_text(endpoint)
        try:
            body: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise AutodartsResponseError(
                f"Invalid JSON from {endpoint}: {exc}",
                endpoint=endpoint,
                payload=text,
            ) from exc

        if not isinstance(body, dict):
            raise AutodartsResponseError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                endpoint=endpoint,
                payload=text,
            )
        return body
