"""Domain models for measurement points.

This module defines the in-memory representation of a sample: its tags, its
typed fields and its timestamp. Encoding is delegated to a PointProtocol.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lineflux.protocol.base import PointProtocol

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class UInt(int):
    """Marks an integer field value as an unsigned 64-bit integer.

    Plain ``int`` values are written as signed integers. Wrap a value in
    ``UInt`` to have it written with the ``u`` suffix instead; the server must
    have unsigned integer support enabled for this to be accepted.

    Example:
        >>> Point("disk", {"free": UInt(2**63)})
    """

    def __repr__(self) -> str:
        return f"UInt({int(self)})"


FieldValue = float | int | UInt | str | bool


@dataclass(frozen=True, slots=True)
class Tag:
    """A key/value pair of strings that is indexed by the server.

    Attributes:
        key: Tag key, a non-empty string.
        value: Tag value, a non-empty string.
    """

    key: str
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not isinstance(self.value, str):
            raise TypeError("tag key and value must be strings")
        if not self.key:
            raise ValueError("tag key must not be empty")
        if not self.value:
            raise ValueError(f"tag {self.key!r} must not have an empty value")


class Tags(tuple[Tag, ...]):
    """An ordered, immutable sequence of tags.

    Tags are written in the order given. For canonical output the server
    expects them sorted by key; call ``sorted()`` before building the point.
    Keys should be unique, duplicates are not detected.
    """

    __slots__ = ()

    def __new__(cls, tags: Iterable[Tag | tuple[str, str]] = ()) -> Tags:
        return super().__new__(cls, (_as_tag(t) for t in tags))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> Tags:
        """Build tags from a mapping, keeping its iteration order."""
        return cls(Tag(k, v) for k, v in mapping.items())

    def sorted(self) -> Tags:
        """Return a copy sorted by key. Equal keys keep their relative order."""
        return Tags(sorted(self, key=lambda t: t.key))

    def is_sorted(self) -> bool:
        """Return True when keys are in non-decreasing order."""
        return all(a.key <= b.key for a, b in zip(self, self[1:]))

    def __str__(self) -> str:
        return ",".join(f"{t.key}={t.value}" for t in self)

    def __repr__(self) -> str:
        return f"Tags({list(self)!r})"


def _as_tag(value: Tag | tuple[str, str]) -> Tag:
    if isinstance(value, Tag):
        return value
    key, val = value
    return Tag(key, val)


def _to_nanoseconds(value: int | datetime) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"point time must be an int or datetime, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class Point:
    """A single measurement sample.

    Points are immutable once built. Validation of the name and fields happens
    when the point is encoded, so that an invalid point fails before any bytes
    reach a buffer.

    Attributes:
        name: Measurement name.
        fields: Read-only mapping of field keys to float, int, UInt, str or
            bool values. It is excluded from the hash.
        tags: Tags in the order they will be written.
        time: Nanoseconds since the epoch, a datetime, or None to let the
            server assign the time.

    Example:
        >>> pt = Point("cpu", {"value": 2.0}, tags=[("host", "server01")])
        >>> pt.encode(LINE_PROTOCOL_V1)
        b'cpu,host=server01 value=2\\n'
    """

    name: str
    fields: Mapping[str, FieldValue] = field(hash=False)
    tags: Tags = field(default_factory=Tags)
    time: int | datetime | None = None

    def __post_init__(self) -> None:
        tags = self.tags
        if isinstance(tags, Mapping):
            tags = Tags.from_mapping(tags)
        elif not isinstance(tags, Tags):
            tags = Tags(tags)
        object.__setattr__(self, "tags", tags)
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        if self.time is not None:
            object.__setattr__(self, "time", _to_nanoseconds(self.time))

    @property
    def timestamp_ns(self) -> int | None:
        """Timestamp in nanoseconds since the epoch, or None when unset."""
        return self.time  # type: ignore[return-value]

    def encode(self, protocol: PointProtocol) -> bytes:
        """Encode this point with the given protocol."""
        return protocol.encode(self)


class Points(tuple[Point, ...]):
    """A batch of points that are written together.

    The batch is encoded as the concatenation of each point's encoding, in
    order. Nothing is sorted or deduplicated across points.
    """

    __slots__ = ()

    def __new__(cls, points: Iterable[Point] = ()) -> Points:
        return super().__new__(cls, points)

    def encode(self, protocol: PointProtocol) -> bytes:
        """Encode every point, failing as a whole if any single point is invalid."""
        return b"".join(protocol.encode(pt) for pt in self)

    def __repr__(self) -> str:
        return f"Points({list(self)!r})"
