"""Point buffers and batching writers."""

from lineflux.writer.base import AsyncPointWriter, PointWriter
from lineflux.writer.buffer import DEFAULT_BUFFER_SIZE, PointBuffer
from lineflux.writer.buffered import AsyncBufferedWriter, BufferedWriter

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "AsyncBufferedWriter",
    "AsyncPointWriter",
    "BufferedWriter",
    "PointBuffer",
    "PointWriter",
]
