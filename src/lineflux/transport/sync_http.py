"""Blocking HTTP transport using the `requests` library."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

import requests

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


class Client:
    """HTTP client for writing points to InfluxDB.

    Implements the PointWriter protocol, so it can be used directly or behind
    a BufferedWriter. Errors raised by ``requests`` propagate unchanged.

    Example:
        >>> client = Client(ClientConfig(database="telegraf"))
        >>> client.write(Point("cpu", {"value": 2.0}))
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the Client.

        Args:
            config: Client configuration (default: ClientConfig()).
            session: Session to send requests with. A new one is created and
                owned by the client if not given.
        """
        self._config = config or ClientConfig()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def protocol(self) -> PointProtocol:
        return self._config.protocol

    def ping(self) -> ServerInfo:
        """Check that the server is up and is an InfluxDB server.

        Returns:
            The server version.

        Raises:
            PingError: If the server does not answer with 204 No Content.
            NotInfluxDBError: If the response carries no InfluxDB version header.
        """
        response = self._session.get(
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

    def write(self, encoder: PointEncoder, options: WriteOptions | None = None) -> None:
        """Encode points and POST them to the /write endpoint.

        Args:
            encoder: Points to write.
            options: Per-write database, retention policy and timeout.

        Raises:
            EncodingError: If the points cannot be encoded.
            NoDatabaseError: If no database is configured for this write.
            WriteError: If the server answers with a non-2xx status.
        """
        body = encoder.encode(self._config.protocol)
        params = write_params(self._config, options)

        logger.debug(f"Writing {len(body)} bytes to database {params['db']}")
        response = self._session.post(
            build_url(self._config.url, "/write"),
            params=params,
            data=bytes(body),
            headers=write_headers(self._config),
            timeout=request_timeout(self._config, options),
        )
        if response.status_code // 100 != 2:
            message = error_message(response.text)
            logger.warning(f"Write rejected with status {response.status_code}: {message}")
            raise WriteError(response.status_code, message)

    def close(self) -> None:
        """Close the underlying session if the client created it."""
        if self._owns_session:
            self._session.close()
