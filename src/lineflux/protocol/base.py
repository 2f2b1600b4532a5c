"""Base Protocols for point encoding.

A PointProtocol turns one point into bytes. A PointEncoder is anything that
can turn itself into bytes under a given PointProtocol: a single point, a
batch of points, or a buffer of already encoded points.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lineflux.point.models import Point


@runtime_checkable
class PointProtocol(Protocol):
    """Protocol defining a wire format for points.

    Two protocol objects describe the same wire format if and only if their
    identities compare equal. Buffers and writers use the identity to refuse
    bytes that were encoded in a different format.

    Example:
        >>> from lineflux.protocol.line import LineProtocolV1
        >>> isinstance(LineProtocolV1(), PointProtocol)
        True
    """

    @property
    def identity(self) -> Hashable:
        """Comparable token naming the wire format and its version."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type sent alongside encoded points."""
        ...

    def encode(self, point: Point) -> bytes:
        """Encode a single point.

        Args:
            point: The point to encode.

        Returns:
            The encoded point, including its line terminator.

        Raises:
            EncodingError: If the point is invalid. No bytes are produced.
        """
        ...


@runtime_checkable
class PointEncoder(Protocol):
    """Protocol for objects that can encode themselves with a PointProtocol."""

    def encode(self, protocol: PointProtocol) -> bytes | memoryview:
        """Encode the points held by this object.

        Args:
            protocol: Wire format to encode with.

        Returns:
            A bytes-like object holding the encoded points.
        """
        ...


def same_protocol(a: PointProtocol, b: PointProtocol) -> bool:
    """Return True if both protocols produce the same wire format."""
    return a is b or a.identity == b.identity
