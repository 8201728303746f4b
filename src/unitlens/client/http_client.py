"""Async HTTP client for a remote unitlens server."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from unitlens.runner.command import COMMAND_FAILED_STATUS

logger = logging.getLogger(__name__)


class UnitLensClient:
    """Fetches unit status, summary and journal text from a unitlens server.

    Example usage::

        async with UnitLensClient(base_url="http://pi.local:8080") as client:
            print(await client.unit_status("nginx.service"))
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Create the HTTP client. Safe to call when already connected."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.debug("Client created for %s", self._base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Client closed for %s", self._base_url)

    async def health(self) -> dict[str, str]:
        resp = await self._get("/health")
        return resp.json()

    async def summary(self) -> str:
        resp = await self._get("/summary")
        return resp.text

    async def unit_status(self, unit: str) -> str:
        resp = await self._get(f"/status/{_segment(unit)}")
        return resp.text

    async def unit_logs(self, unit: str, since: str | None = None) -> str:
        params = {"since": since} if since is not None else None
        resp = await self._get(f"/logs/{_segment(unit)}", params=params)
        return resp.text

    async def _get(self, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        """Send a GET request and translate failures into client errors."""
        if self._client is None:
            raise ClientError("Not connected to server")
        try:
            resp = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise ClientError(f"HTTP request to {path} failed: {e}") from e
        if resp.status_code == COMMAND_FAILED_STATUS:
            raise RemoteCommandError(resp.text)
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ClientError(
                f"HTTP request to {path} failed: {e}", status_code=resp.status_code
            ) from e
        return resp

    async def __aenter__(self) -> UnitLensClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


def _segment(value: str) -> str:
    """Quote a value so it stays a single path segment."""
    return quote(value, safe="")


class ClientError(Exception):
    """Raised when the server cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteCommandError(ClientError):
    """The remote command ran and failed; ``output`` is what it printed."""

    def __init__(self, output: str) -> None:
        super().__init__(output, status_code=COMMAND_FAILED_STATUS)
        self.output = output
