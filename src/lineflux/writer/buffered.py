"""Batching writers that accumulate encoded points before sending them.

Both writers own a fixed-capacity PointBuffer bound to their sink's protocol.
Encoded points are appended to the buffer until the next write would not fit,
at which point the buffer is flushed to the sink as one batch. A payload
larger than the whole buffer is sent to the sink on its own.

Neither writer is safe to share between threads or tasks without external
locking.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

from lineflux.errors import WriterClosedError
from lineflux.writer.buffer import DEFAULT_BUFFER_SIZE, PointBuffer

if TYPE_CHECKING:
    from lineflux.protocol.base import PointEncoder, PointProtocol
    from lineflux.transport.models import WriteOptions
    from lineflux.writer.base import AsyncPointWriter, PointWriter

logger = logging.getLogger(__name__)


class BufferedWriter:
    """Batches encoded points in front of a blocking PointWriter.

    A single ``write()`` never splits its payload across two sink writes: it
    either lands whole in the buffer or is sent whole to the sink. If the sink
    fails during a flush, the buffered bytes are kept so that a later
    ``flush()`` resends exactly the same batch.

    BufferedWriter is itself a PointWriter, so writers can be stacked.

    Example:
        ```python
        with Client(ClientConfig(database="telegraf")) as client:
            with BufferedWriter(client, size=64 * 1024) as writer:
                for sample in samples:
                    writer.write(Point("cpu", {"value": sample}))
        ```
    """

    def __init__(self, writer: PointWriter, size: int = DEFAULT_BUFFER_SIZE) -> None:
        """Initialize the BufferedWriter.

        Args:
            writer: Sink that receives flushed batches.
            size: Buffer capacity in bytes (default: 4096).

        Raises:
            ValueError: If size is less than 1.
        """
        if size < 1:
            raise ValueError("size must be at least 1")
        self._writer = writer
        self._buf = PointBuffer(writer.protocol, size)
        self._closed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def protocol(self) -> PointProtocol:
        return self._writer.protocol

    @property
    def capacity(self) -> int:
        return self._buf.capacity

    @property
    def buffered(self) -> int:
        """Number of encoded bytes waiting to be flushed."""
        return len(self._buf)

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, encoder: PointEncoder, options: WriteOptions | None = None) -> None:
        """Encode points and buffer them, flushing first if they do not fit.

        Args:
            encoder: Points to write.
            options: Passed through to the sink on any write this call triggers.

        Raises:
            WriterClosedError: If the writer has been closed.
            EncodingError: If the points cannot be encoded. Nothing is buffered.
            LinefluxError: Any error raised by the sink, unchanged.
        """
        if self._closed:
            raise WriterClosedError()

        data = encoder.encode(self._writer.protocol)
        size = len(data)

        if size > self._buf.available:
            self.flush(options)

        if size > self._buf.capacity:
            logger.debug(f"Writing {size} bytes directly, buffer capacity is {self._buf.capacity}")
            self._writer.write(PointBuffer.from_bytes(self._buf.protocol, data), options)
            return

        self._buf.append(data)

    def flush(self, options: WriteOptions | None = None) -> None:
        """Send buffered points to the sink.

        The buffer is only cleared once the sink reports success.
        """
        if not len(self._buf):
            return
        logger.debug(f"Flushing {len(self._buf)} buffered bytes")
        self._writer.write(self._buf, options)
        self._buf.reset()

    def close(self, options: WriteOptions | None = None) -> None:
        """Flush remaining points and refuse further writes.

        The sink is not closed; it belongs to the caller.
        """
        if self._closed:
            return
        self.flush(options)
        self._closed = True


class AsyncBufferedWriter:
    """Batches encoded points in front of an AsyncPointWriter.

    Same batching rules as BufferedWriter, with awaitable write, flush and
    close. The writer holds no lock: tasks sharing one instance must
    serialize access themselves.

    Example:
        ```python
        async with AsyncClient(ClientConfig(database="telegraf")) as client:
            async with AsyncBufferedWriter(client) as writer:
                await writer.write(Points(batch))
        ```
    """

    def __init__(self, writer: AsyncPointWriter, size: int = DEFAULT_BUFFER_SIZE) -> None:
        """Initialize the AsyncBufferedWriter.

        Args:
            writer: Sink that receives flushed batches.
            size: Buffer capacity in bytes (default: 4096).

        Raises:
            ValueError: If size is less than 1.
        """
        if size < 1:
            raise ValueError("size must be at least 1")
        self._writer = writer
        self._buf = PointBuffer(writer.protocol, size)
        self._closed = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def protocol(self) -> PointProtocol:
        return self._writer.protocol

    @property
    def capacity(self) -> int:
        return self._buf.capacity

    @property
    def buffered(self) -> int:
        return len(self._buf)

    @property
    def closed(self) -> bool:
        return self._closed

    async def write(self, encoder: PointEncoder, options: WriteOptions | None = None) -> None:
        """Encode points and buffer them, flushing first if they do not fit."""
        if self._closed:
            raise WriterClosedError()

        data = encoder.encode(self._writer.protocol)
        size = len(data)

        if size > self._buf.available:
            await self.flush(options)

        if size > self._buf.capacity:
            logger.debug(f"Writing {size} bytes directly, buffer capacity is {self._buf.capacity}")
            await self._writer.write(PointBuffer.from_bytes(self._buf.protocol, data), options)
            return

        self._buf.append(data)

    async def flush(self, options: WriteOptions | None = None) -> None:
        """Send buffered points to the sink, clearing the buffer only on success."""
        if not len(self._buf):
            return
        logger.debug(f"Flushing {len(self._buf)} buffered bytes")
        await self._writer.write(self._buf, options)
        self._buf.reset()

    async def close(self, options: WriteOptions | None = None) -> None:
        """Flush remaining points and refuse further writes."""
        if self._closed:
            return
        await self.flush(options)
        self._closed = True
