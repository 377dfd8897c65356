"""HTTP transport to the iT600 gateway's local API."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from .const import DEFAULT_PORT, DEFAULT_REQUEST_TIMEOUT
from .exceptions import IT600ConnectionError

_LOGGER = logging.getLogger(__name__)


class IT600Transport:
    """POST already-encrypted bodies to ``/deviceid/<command>``."""

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        request_timeout: int = DEFAULT_REQUEST_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._request_timeout = request_timeout
        self._session = session
        self._close_session = False

    @property
    def base_url(self) -> str:
        return f"http://{self._host}:{self._port}"

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._close_session = True
        return self._session

    async def send(self, command: str, payload: bytes) -> bytes:
        """Send one encrypted request and return the raw response body."""
        session = self._ensure_session()
        url = f"{self.base_url}/deviceid/{command}"

        try:
            async with asyncio.timeout(self._request_timeout):
                async with session.post(
                    url,
                    data=payload,
                    headers={"content-type": "application/json"},
                ) as resp:
                    return await resp.read()
        except TimeoutError as exc:
            _LOGGER.error("Timeout connecting to gateway at %s", self._host)
            raise IT600ConnectionError(
                "Timeout communicating with iT600 gateway"
            ) from exc
        except aiohttp.ClientError as exc:
            _LOGGER.debug("Transport error talking to %s: %s", url, exc)
            raise IT600ConnectionError(
                "Cannot reach iT600 gateway, check host / IP address"
            ) from exc

    async def probe(self) -> None:
        """Check whether anything answers HTTP on the gateway address.

        Any response, whatever its status, counts as reachable.
        """
        session = self._ensure_session()

        try:
            async with asyncio.timeout(self._request_timeout):
                async with session.get(f"{self.base_url}/") as resp:
                    _LOGGER.debug(
                        "Gateway probe answered with HTTP %s", resp.status
                    )
        except (TimeoutError, aiohttp.ClientError) as exc:
            raise IT600ConnectionError(
                "Cannot reach iT600 gateway, check host / IP address"
            ) from exc

    async def close(self) -> None:
        """Close the HTTP session if we own it."""
        if self._session and self._close_session:
            await self._session.close()
            self._session = None
            self._close_session = False
