"""Exception hierarchy for lineflux.

Every error raised by the library derives from LinefluxError. Validation
errors are raised before a single byte is produced, so a failed encode never
leaves a partial line behind.
"""

from __future__ import annotations


class LinefluxError(Exception):
    """Base class for all lineflux errors."""


class EncodingError(LinefluxError):
    """A point could not be encoded."""


class NoMeasurementError(EncodingError):
    """Raised when a point has an empty measurement name."""

    def __init__(self, message: str = "no measurement name") -> None:
        super().__init__(message)


class NoFieldsError(EncodingError):
    """Raised when a point has no fields."""

    def __init__(self, message: str = "no fields") -> None:
        super().__init__(message)


class FieldTypeError(EncodingError, TypeError):
    """Raised when a field value is not one of the supported types."""


class FieldValueError(EncodingError, ValueError):
    """Raised when a field value has a supported type but cannot be represented."""


class MismatchedProtocolError(LinefluxError):
    """Raised when encoded points are re-encoded under a different protocol."""

    def __init__(self, message: str = "mismatched protocol") -> None:
        super().__init__(message)


class BufferFullError(LinefluxError):
    """Raised when an encoded point does not fit in a point buffer."""


class WriterClosedError(LinefluxError):
    """Raised when writing to a batching writer that has been closed."""

    def __init__(self, message: str = "cannot write to closed writer") -> None:
        super().__init__(message)


class TransportError(LinefluxError):
    """Base class for errors reported by a transport."""


class NoDatabaseError(TransportError):
    """Raised when no database was given for a write."""

    def __init__(self, message: str = "no database specified") -> None:
        super().__init__(message)


class NotInfluxDBError(TransportError):
    """Raised when a ping is answered by a server that is not InfluxDB."""

    def __init__(self, message: str = "not an influxdb server") -> None:
        super().__init__(message)


class PingError(TransportError):
    """Raised when the server does not answer a ping with 204 No Content."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class WriteError(TransportError):
    """Raised when the server rejects a write.

    Attributes:
        status_code: HTTP status code of the response.
        message: Error text reported by the server.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"write failed with status {self.status_code}: {self.message}"
