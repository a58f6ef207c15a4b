"""High-level async client for the Autodarts board manager API."""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from pyautodarts._constants import CONFIG_ENDPOINT, STATE_ENDPOINT, VERSION_ENDPOINT
from pyautodarts._transport import HttpTransport, Transport
from pyautodarts.config import AutodartsConfig
from pyautodarts.exceptions import AutodartsError, AutodartsResponseError
from pyautodarts.models.board import BoardState
from pyautodarts.models.system import BoardConfig

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class AutodartsClient:
    """Async client for a local board manager.

    Usage::

        async with AutodartsClient(config) as client:
            state = await client.get_state()
            version = await client.get_version()
    """

    def __init__(
        self,
        config: AutodartsConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    @property
    def config(self) -> AutodartsConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AutodartsClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        _logger.debug("Board manager client opened for %s", self._config.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise AutodartsError("Client not initialized. Use 'async with AutodartsClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def _fetch_model(self, endpoint: str, model: type[ModelT]) -> ModelT:
        body = await self._require_transport().get_json(endpoint)
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            raise AutodartsResponseError(
                f"Unexpected payload shape from {endpoint}: {exc.error_count()} error(s)",
                endpoint=endpoint,
                payload=json.dumps(body, default=str),
            ) from exc

    async def get_state(self) -> BoardState:
        """Fetch the throws of the current visit."""
        return await self._fetch_model(STATE_ENDPOINT, BoardState)

    async def get_version(self) -> str:
        """Fetch the board manager version string."""
        text = await self._require_transport().get_text(VERSION_ENDPOINT)
        return text.strip()

    async def get_config(self) -> BoardConfig:
        """Fetch the board manager configuration (camera block only)."""
        return await self._fetch_model(CONFIG_ENDPOINT, BoardConfig)
