"""lineflux: InfluxDB line protocol encoding and batched writes.

Build points, encode them as line protocol, batch the encoded bytes in a
fixed-size buffer and hand them to an HTTP or UDP transport.
"""

from lineflux.errors import (
    BufferFullError,
    EncodingError,
    FieldTypeError,
    FieldValueError,
    LinefluxError,
    MismatchedProtocolError,
    NoDatabaseError,
    NoFieldsError,
    NoMeasurementError,
    NotInfluxDBError,
    PingError,
    TransportError,
    WriteError,
    WriterClosedError,
)
from lineflux.point import Point, Points, Tag, Tags, UInt
from lineflux.protocol import (
    DEFAULT_PROTOCOL,
    LINE_PROTOCOL_V1,
    LineProtocolV1,
    PointEncoder,
    PointProtocol,
)
from lineflux.transport import (
    AsyncClient,
    Client,
    ClientConfig,
    ServerInfo,
    UDPClient,
    WriteOptions,
)
from lineflux.writer import (
    DEFAULT_BUFFER_SIZE,
    AsyncBufferedWriter,
    AsyncPointWriter,
    BufferedWriter,
    PointBuffer,
    PointWriter,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_PROTOCOL",
    "LINE_PROTOCOL_V1",
    "AsyncBufferedWriter",
    "AsyncClient",
    "AsyncPointWriter",
    "BufferFullError",
    "BufferedWriter",
    "Client",
    "ClientConfig",
    "EncodingError",
    "FieldTypeError",
    "FieldValueError",
    "LineProtocolV1",
    "LinefluxError",
    "MismatchedProtocolError",
    "NoDatabaseError",
    "NoFieldsError",
    "NoMeasurementError",
    "NotInfluxDBError",
    "PingError",
    "Point",
    "PointBuffer",
    "PointEncoder",
    "PointProtocol",
    "PointWriter",
    "Points",
    "ServerInfo",
    "Tag",
    "Tags",
    "TransportError",
    "UDPClient",
    "UInt",
    "WriteError",
    "WriterClosedError",
    "WriteOptions",
]
