"""Tests for PointBuffer."""

from __future__ import annotations

import pytest

from lineflux import (
    DEFAULT_BUFFER_SIZE,
    LINE_PROTOCOL_V1,
    BufferFullError,
    LineProtocolV1,
    MismatchedProtocolError,
    NoFieldsError,
    Point,
    PointBuffer,
    PointEncoder,
)


class TestPointBufferWrite:
    """Test cases for filling a PointBuffer."""

    def test_write_point(self, cpu_point: Point) -> None:
        """A written point is encoded with the bound protocol."""
        buf = PointBuffer(LINE_PROTOCOL_V1)
        buf.write_point(cpu_point)

        assert buf.getvalue() == (
            f"cpu,host=server01 value=2 {cpu_point.timestamp_ns}\n".encode()
        )
        assert len(buf) == len(buf.getvalue())

    def test_points_accumulate_in_order(self) -> None:
        """Successive points are appended."""
        buf = PointBuffer(LINE_PROTOCOL_V1)
        buf.write_point(Point("a", {"v": 1}))
        buf.write_point(Point("b", {"v": 2}))

        assert buf.getvalue() == b"a v=1i\nb v=2i\n"

    def test_invalid_point_leaves_buffer_unchanged(self) -> None:
        """An encoding failure does not touch the buffer."""
        buf = PointBuffer(LINE_PROTOCOL_V1)
        buf.write_point(Point("a", {"v": 1}))

        with pytest.raises(NoFieldsError):
            buf.write_point(Point("b", {}))

        assert buf.getvalue() == b"a v=1i\n"

    def test_overflow_raises_buffer_full(self) -> None:
        """A point that does not fit is rejected and nothing is appended."""
        buf = PointBuffer(LINE_PROTOCOL_V1, capacity=10)
        buf.write_point(Point("a", {"v": 1}))

        with pytest.raises(BufferFullError):
            buf.write_point(Point("b", {"v": 2}))

        assert buf.getvalue() == b"a v=1i\n"
        assert len(buf) <= buf.capacity

    def test_fill_to_exact_capacity(self) -> None:
        """A point that exactly fills the buffer is accepted."""
        buf = PointBuffer(LINE_PROTOCOL_V1, capacity=7)
        buf.write_point(Point("a", {"v": 1}))

        assert len(buf) == buf.capacity
        assert buf.available == 0

    def test_append_raw_bytes(self) -> None:
        """append() takes bytes that were already encoded."""
        buf = PointBuffer(LINE_PROTOCOL_V1, capacity=16)
        buf.append(b"a v=1i\n")
        buf.append(memoryview(b"b v=2i\n"))

        assert buf.getvalue() == b"a v=1i\nb v=2i\n"
        assert buf.available == 2


class TestPointBufferCapacity:
    """Test cases for capacity bookkeeping."""

    def test_default_capacity(self) -> None:
        """Buffers default to 4096 bytes."""
        assert PointBuffer(LINE_PROTOCOL_V1).capacity == DEFAULT_BUFFER_SIZE == 4096

    def test_new_buffer_is_empty(self) -> None:
        """A new buffer has all of its capacity available."""
        buf = PointBuffer(LINE_PROTOCOL_V1, capacity=128)

        assert len(buf) == 0
        assert buf.available == 128

    def test_reset_keeps_capacity(self) -> None:
        """reset() empties the buffer without shrinking it."""
        buf = PointBuffer(LINE_PROTOCOL_V1, capacity=128)
        buf.write_point(Point("a", {"v": 1}))
        buf.reset()

        assert len(buf) == 0
        assert buf.capacity == 128
        assert buf.getvalue() == b""

    def test_reuse_after_reset(self) -> None:
        """A reset buffer can be refilled."""
        buf = PointBuffer(LINE_PROTOCOL_V1, capacity=7)
        buf.write_point(Point("a", {"v": 1}))
        buf.reset()
        buf.write_point(Point("b", {"v": 2}))

        assert buf.getvalue() == b"b v=2i\n"

    def test_negative_capacity_rejected(self) -> None:
        """Capacity cannot be negative."""
        with pytest.raises(ValueError):
            PointBuffer(LINE_PROTOCOL_V1, capacity=-1)

    def test_from_bytes_fits_exactly(self) -> None:
        """from_bytes() sizes the buffer to the payload."""
        buf = PointBuffer.from_bytes(LINE_PROTOCOL_V1, b"a v=1i\n")

        assert buf.capacity == len(buf) == 7
        assert buf.protocol is LINE_PROTOCOL_V1


class TestPointBufferEncode:
    """Test cases for re-encoding a filled buffer."""

    def test_is_point_encoder(self) -> None:
        """PointBuffer conforms to PointEncoder."""
        assert isinstance(PointBuffer(LINE_PROTOCOL_V1), PointEncoder)

    def test_encode_same_protocol(self) -> None:
        """Encoding with the bound protocol returns the accumulated bytes."""
        buf = PointBuffer(LINE_PROTOCOL_V1)
        buf.write_point(Point("a", {"v": 1}))

        view = buf.encode(LINE_PROTOCOL_V1)

        assert isinstance(view, memoryview)
        assert bytes(view) == b"a v=1i\n"

    def test_encode_equivalent_protocol(self) -> None:
        """Another instance of the same wire format is accepted."""
        buf = PointBuffer(LINE_PROTOCOL_V1)
        buf.write_point(Point("a", {"v": 1}))

        assert bytes(buf.encode(LineProtocolV1())) == b"a v=1i\n"

    def test_encode_mismatched_protocol(self, other_protocol) -> None:
        """Encoding with a different protocol fails."""
        buf = PointBuffer(LINE_PROTOCOL_V1)
        buf.write_point(Point("a", {"v": 1}))

        with pytest.raises(MismatchedProtocolError):
            buf.encode(other_protocol)

    def test_encode_is_zero_copy(self) -> None:
        """The returned view shares memory with the buffer."""
        buf = PointBuffer(LINE_PROTOCOL_V1, capacity=16)
        buf.append(b"a v=1i\n")
        view = buf.encode(LINE_PROTOCOL_V1)

        buf.reset()
        buf.append(b"b v=2i\n")

        assert bytes(view) == b"b v=2i\n"

    def test_encode_empty_buffer(self) -> None:
        """An empty buffer encodes to no bytes."""
        assert bytes(PointBuffer(LINE_PROTOCOL_V1).encode(LINE_PROTOCOL_V1)) == b""
