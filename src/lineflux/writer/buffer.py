"""Fixed-capacity buffer of encoded points."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lineflux.errors import BufferFullError, MismatchedProtocolError
from lineflux.protocol.base import same_protocol

if TYPE_CHECKING:
    from lineflux.point.models import Point
    from lineflux.protocol.base import PointProtocol

DEFAULT_BUFFER_SIZE = 4096


class PointBuffer:
    """Holds points that were already encoded with one protocol.

    The buffer is bound to a protocol when it is created and can only be
    re-encoded as that protocol. Storage for ``capacity`` bytes is allocated up
    front and reused across ``reset()`` calls; it never grows.

    A PointBuffer is itself a PointEncoder, so a filled buffer can be handed
    straight to a PointWriter.

    Example:
        ```python
        buf = PointBuffer(LINE_PROTOCOL_V1)
        buf.write_point(Point("cpu", {"value": 2.0}))
        client.write(buf)
        buf.reset()
        ```
    """

    __slots__ = ("_protocol", "_data", "_length")

    def __init__(self, protocol: PointProtocol, capacity: int = DEFAULT_BUFFER_SIZE) -> None:
        """Initialize the buffer.

        Args:
            protocol: Protocol used to encode points written to this buffer.
            capacity: Number of bytes the buffer can hold.

        Raises:
            ValueError: If capacity is negative.
        """
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._protocol = protocol
        self._data = bytearray(capacity)
        self._length = 0

    @classmethod
    def from_bytes(cls, protocol: PointProtocol, data: bytes | memoryview) -> PointBuffer:
        """Wrap bytes already encoded with ``protocol`` in a buffer that fits them exactly."""
        buf = cls(protocol, len(data))
        buf.append(data)
        return buf

    @property
    def protocol(self) -> PointProtocol:
        return self._protocol

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def available(self) -> int:
        """Number of bytes that can still be written before the buffer is full."""
        return len(self._data) - self._length

    def __len__(self) -> int:
        return self._length

    def write_point(self, point: Point) -> None:
        """Encode a point with the bound protocol and append it.

        Args:
            point: The point to append.

        Raises:
            EncodingError: If the point cannot be encoded.
            BufferFullError: If the encoded point does not fit.

        The buffer is left untouched when an error is raised.
        """
        self.append(self._protocol.encode(point))

    def append(self, data: bytes | memoryview) -> None:
        """Append bytes that were already encoded with the bound protocol.

        Raises:
            BufferFullError: If the bytes do not fit. Nothing is appended.
        """
        if len(data) > self.available:
            raise BufferFullError(f"{len(data)} bytes do not fit, only {self.available} available")
        end = self._length + len(data)
        self._data[self._length : end] = data
        self._length = end

    def encode(self, protocol: PointProtocol) -> memoryview:
        """Return the encoded points without copying them.

        The view is only valid until the buffer is next written to or reset.

        Raises:
            MismatchedProtocolError: If ``protocol`` is not the bound protocol.
        """
        if not same_protocol(self._protocol, protocol):
            raise MismatchedProtocolError()
        return memoryview(self._data)[: self._length]

    def getvalue(self) -> bytes:
        """Return a copy of the encoded points."""
        return bytes(self._data[: self._length])

    def reset(self) -> None:
        """Discard the contents, keeping the allocated storage."""
        self._length = 0

    def __repr__(self) -> str:
        return (
            f"PointBuffer(protocol={self._protocol!r}, "
            f"length={self._length}, capacity={self.capacity})"
        )
