"""Line protocol encoding.

Each point becomes one line of text::

    <measurement>[,<tag_key>=<tag_value>...] <field_key>=<field_value>[,...] [<timestamp>]\\n

Measurement names, tag keys, tag values and field keys have commas, equals
signs and spaces escaped with a backslash. String field values are quoted, with
embedded quotes and backslashes escaped. Fields are written sorted by key.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from lineflux.errors import (
    FieldTypeError,
    FieldValueError,
    NoFieldsError,
    NoMeasurementError,
)
from lineflux.point.models import FieldValue, Point, UInt

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

_KEY_ESCAPES = str.maketrans({",": r"\,", "=": r"\=", " ": r"\ "})
_STRING_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"'})


def escape_key(value: str) -> str:
    """Escape a measurement name, tag key, tag value or field key."""
    return value.translate(_KEY_ESCAPES)


def escape_string(value: str) -> str:
    """Quote a string field value."""
    return '"' + value.translate(_STRING_ESCAPES) + '"'


def format_float(value: float) -> str:
    """Format a float as the shortest decimal that round-trips.

    Integral values drop the trailing ``.0`` so ``2.0`` is written as ``2``.
    """
    if not math.isfinite(value):
        raise FieldValueError(f"cannot encode non-finite float {value!r}")
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_field_value(key: str, value: FieldValue) -> str:
    """Format a field value according to its type.

    Raises:
        FieldTypeError: If the value is not a float, int, UInt, str or bool.
        FieldValueError: If an integer is out of range or a float is not finite.
    """
    # bool is a subclass of int and UInt is a subclass of int; order matters.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, UInt):
        if not 0 <= value <= UINT64_MAX:
            raise FieldValueError(f"field {key!r}: {int(value)} is out of range for uint64")
        return f"{int(value):d}u"
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise FieldValueError(
                f"field {key!r}: {value} is out of range for int64, wrap it in UInt if unsigned"
            )
        return f"{value:d}i"
    if isinstance(value, float):
        try:
            return format_float(value)
        except FieldValueError as e:
            raise FieldValueError(f"field {key!r}: {e}") from None
    if isinstance(value, str):
        return escape_string(value)
    raise FieldTypeError(f"field {key!r} has unsupported type {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class LineProtocolV1:
    """Version 1 of the line protocol.

    Instances are interchangeable: any two compare equal and share the same
    identity.

    Example:
        >>> LINE_PROTOCOL_V1.encode(Point("bool", {"value": True}))
        b'bool value=true\\n'
    """

    @property
    def identity(self) -> tuple[str, int]:
        return ("line", 1)

    @property
    def content_type(self) -> str:
        return "text/plain; charset=utf-8"

    def encode(self, point: Point) -> bytes:
        """Encode a point as one line, terminator included.

        Args:
            point: The point to encode.

        Returns:
            The UTF-8 encoded line.

        Raises:
            NoMeasurementError: If the point has no name.
            NoFieldsError: If the point has no fields.
            FieldTypeError: If a field has an unsupported type.
            FieldValueError: If a field key is empty or a value cannot be represented.
        """
        if not point.name:
            raise NoMeasurementError()
        if not point.fields:
            raise NoFieldsError()

        parts = [escape_key(point.name)]
        for tag in point.tags:
            parts.append(f",{escape_key(tag.key)}={escape_key(tag.value)}")

        fields = []
        for key in sorted(point.fields):
            if not isinstance(key, str) or not key:
                raise FieldValueError(f"field key must be a non-empty string, got {key!r}")
            fields.append(f"{escape_key(key)}={format_field_value(key, point.fields[key])}")
        parts.append(" ")
        parts.append(",".join(fields))

        if point.timestamp_ns is not None:
            parts.append(f" {point.timestamp_ns:d}")
        parts.append("\n")
        return "".join(parts).encode("utf-8")


LINE_PROTOCOL_V1 = LineProtocolV1()

# Protocol used by clients that are not given one explicitly.
DEFAULT_PROTOCOL = LINE_PROTOCOL_V1
