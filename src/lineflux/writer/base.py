"""Base Protocols for point writers.

A point writer is the sink at the end of a write path: it accepts anything
that can encode itself and delivers the bytes somewhere, usually over the
network. HTTP and UDP transports are interchangeable implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lineflux.protocol.base import PointEncoder, PointProtocol
    from lineflux.transport.models import WriteOptions


@runtime_checkable
class PointWriter(Protocol):
    """Protocol defining a blocking sink for encoded points.

    Example:
        >>> from lineflux.transport.udp import UDPClient
        >>> isinstance(UDPClient("127.0.0.1:8089"), PointWriter)
        True
    """

    @property
    def protocol(self) -> PointProtocol:
        """Wire format this writer sends."""
        ...

    def write(self, encoder: PointEncoder, options: WriteOptions | None = None) -> None:
        """Encode the points and deliver them.

        Args:
            encoder: Points to write.
            options: Per-write database, retention policy and timeout.

        Raises:
            LinefluxError: If encoding or delivery fails.
        """
        ...


@runtime_checkable
class AsyncPointWriter(Protocol):
    """Protocol defining an awaitable sink for encoded points.

    Unlike PointWriter, write() is a coroutine so the transport can perform
    network I/O without blocking the event loop.
    """

    @property
    def protocol(self) -> PointProtocol:
        """Wire format this writer sends."""
        ...

    async def write(self, encoder: PointEncoder, options: WriteOptions | None = None) -> None:
        """Encode the points and deliver them.

        Args:
            encoder: Points to write.
            options: Per-write database, retention policy and timeout.
        """
        ...
