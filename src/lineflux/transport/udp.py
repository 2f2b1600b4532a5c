"""UDP transport.

The InfluxDB UDP listener only accepts line protocol and never answers, so a
write succeeds as soon as the datagram has been handed to the kernel.
"""

from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING, Any, Self

from lineflux.protocol.line import LINE_PROTOCOL_V1

if TYPE_CHECKING:
    from lineflux.protocol.base import PointEncoder, PointProtocol
    from lineflux.transport.models import WriteOptions

logger = logging.getLogger(__name__)


def parse_address(address: str | tuple[str, int]) -> tuple[str, int]:
    """Split a "host:port" string into a (host, port) tuple."""
    if isinstance(address, tuple):
        return address
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid udp address {address!r}, expected host:port")
    return host.strip("[]") or "localhost", int(port)


class UDPClient:
    """Sends points to an InfluxDB UDP listener.

    Implements the PointWriter protocol. Every write is sent as a single
    datagram, so batches must stay under the listener's payload limit.

    Example:
        >>> with UDPClient("localhost:8089") as client:
        ...     client.write(Point("cpu", {"value": 2.0}))
    """

    def __init__(self, address: str | tuple[str, int]) -> None:
        """Connect a datagram socket to the given address.

        Args:
            address: "host:port" string or (host, port) tuple.

        Raises:
            ValueError: If the address cannot be parsed.
            OSError: If the socket cannot be created or connected.
        """
        host, port = parse_address(address)
        family = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)[0][0]
        self._sock = socket.socket(family, socket.SOCK_DGRAM)
        try:
            self._sock.connect((host, port))
        except OSError:
            self._sock.close()
            raise
        self._address = (host, port)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def protocol(self) -> PointProtocol:
        return LINE_PROTOCOL_V1

    @property
    def address(self) -> tuple[str, int]:
        return self._address

    def write(self, encoder: PointEncoder, options: WriteOptions | None = None) -> None:
        """Encode points as line protocol and send them in one datagram.

        ``options`` is accepted for PointWriter compatibility and ignored: the
        UDP listener is bound to a database on the server side.
        """
        body = encoder.encode(LINE_PROTOCOL_V1)
        logger.debug(f"Sending {len(body)} bytes to {self._address[0]}:{self._address[1]}")
        self._sock.send(body)

    def close(self) -> None:
        self._sock.close()
