"""Pytest configuration and fixtures for lineflux tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from lineflux import LINE_PROTOCOL_V1, Point, PointProtocol

# 2009-11-10T23:00:00Z
FIXED_TIME_NS = 1_257_894_000_000_000_000


class RecordingWriter:
    """PointWriter that records every payload it is given."""

    def __init__(self, protocol: PointProtocol = LINE_PROTOCOL_V1) -> None:
        self._protocol = protocol
        self.writes: list[bytes] = []
        self.options: list[object] = []
        self.fail_with: Exception | None = None

    @property
    def protocol(self) -> PointProtocol:
        return self._protocol

    def write(self, encoder, options=None) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.writes.append(bytes(encoder.encode(self._protocol)))
        self.options.append(options)


class AsyncRecordingWriter(RecordingWriter):
    """AsyncPointWriter that records every payload it is given."""

    async def write(self, encoder, options=None) -> None:  # type: ignore[override]
        RecordingWriter.write(self, encoder, options)


class OtherProtocol:
    """A wire format that is not line protocol."""

    @property
    def identity(self) -> tuple[str, int]:
        return ("other", 1)

    @property
    def content_type(self) -> str:
        return "application/octet-stream"

    def encode(self, point: Point) -> bytes:
        return f"{point.name}\n".encode()


@pytest.fixture()
def recording_writer() -> RecordingWriter:
    """Provide a blocking sink that records payloads."""
    return RecordingWriter()


@pytest.fixture()
def async_recording_writer() -> AsyncRecordingWriter:
    """Provide an async sink that records payloads."""
    return AsyncRecordingWriter()


@pytest.fixture()
def other_protocol() -> OtherProtocol:
    """Provide a protocol whose identity differs from line protocol v1."""
    return OtherProtocol()


@pytest.fixture()
def cpu_point() -> Point:
    """Provide a point with one tag, one float field and a timestamp."""
    return Point("cpu", {"value": 2.0}, tags=[("host", "server01")], time=FIXED_TIME_NS)


@pytest.fixture()
def make_point() -> Callable[[int], Point]:
    """Provide a factory for untimed points whose encoding is always 7 bytes."""

    def factory(i: int) -> Point:
        return Point("m", {"v": i % 10})

    return factory


@pytest.fixture()
def make_recording_writer() -> Callable[[PointProtocol], RecordingWriter]:
    """Provide a factory for recording sinks bound to a given protocol."""
    return RecordingWriter
