"""Async HTTP transport using httpx.AsyncClient."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

import httpx

from lineflux.errors import NotInfluxDBError, PingError, WriteError
from lineflux.transport.common import (
    VERSION_HEADER,
    build_url,
    error_message,
    ping_headers,
    request_timeout,
    write_headers,
    write_params,
)
from lineflux.transport.models import ClientConfig, ServerInfo, WriteOptions

if TYPE_CHECKING:
    from lineflux.protocol.base import PointEncoder, PointProtocol

logger = logging.getLogger(__name__)


class AsyncClient:
    """Async HTTP client for writing points to InfluxDB.

    Implements the AsyncPointWriter protocol. Requests go through a shared
    httpx.AsyncClient so connections are reused across writes. Cancelling the
    awaiting task cancels the request in flight.

    Example:
        ```python
        async with AsyncClient(ClientConfig(database="telegraf")) as client:
            info = await client.ping()
            await client.write(Points(batch))
        ```
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the AsyncClient.

        Args:
            config: Client configuration (default: ClientConfig()).
            http_client: httpx client to send requests with. A new one is
                created and owned by this client if not given.
        """
        self._config = config or ClientConfig()
        self._owns_client = http_client is None
        self._client = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=httpx.Timeout(self._config.timeout))
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def protocol(self) -> PointProtocol:
        return self._config.protocol

    async def ping(self) -> ServerInfo:
        """Check that the server is up and is an InfluxDB server.

        Raises:
            PingError: If the server does not answer with 204 No Content.
            NotInfluxDBError: If the response carries no InfluxDB version header.
        """
        response = await self._client.get(
            build_url(self._config.url, "/ping"),
            headers=ping_headers(self._config),
            timeout=self._config.timeout,
        )
        if response.status_code != 204:
            raise PingError(response.status_code, response.text.strip())

        version = response.headers.get(VERSION_HEADER)
        if not version:
            raise NotInfluxDBError()
        return ServerInfo(version=version)

    async def write(self, encoder: PointEncoder, options: WriteOptions | None = None) -> None:
        """Encode points and POST them to the /write endpoint.

        Raises:
            EncodingError: If the points cannot be encoded.
            NoDatabaseError: If no database is configured for this write.
            WriteError: If the server answers with a non-2xx status.
        """
        body = encoder.encode(self._config.protocol)
        params = write_params(self._config, options)

        logger.debug(f"Writing {len(body)} bytes to database {params['db']}")
        response = await self._client.post(
            build_url(self._config.url, "/write"),
            params=params,
            content=bytes(body),
            headers=write_headers(self._config),
            timeout=request_timeout(self._config, options),
        )
        if not response.is_success:
            message = error_message(response.text)
            logger.warning(f"Write rejected with status {response.status_code}: {message}")
            raise WriteError(response.status_code, message)

    async def close(self) -> None:
        """Close the underlying httpx client if this client created it."""
        if self._owns_client:
            await self._client.aclose()
