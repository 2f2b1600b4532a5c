"""Wire protocols for encoding points."""

from lineflux.protocol.base import PointEncoder, PointProtocol, same_protocol
from lineflux.protocol.line import DEFAULT_PROTOCOL, LINE_PROTOCOL_V1, LineProtocolV1

__all__ = [
    "DEFAULT_PROTOCOL",
    "LINE_PROTOCOL_V1",
    "LineProtocolV1",
    "PointEncoder",
    "PointProtocol",
    "same_protocol",
]
