"""Chunked byte streams that feed a ring buffer in a single execution context."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generator, Iterable, Optional

from loguru import logger

from circbuf.utils.constants import STREAM
from circbuf.utils.helpers import chunk_bytes


@dataclass
class ByteStream:
    chunk_size: int = STREAM.chunk_size

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {self.chunk_size}")

    def from_bytes(self, data: bytes) -> Generator[bytes, None, None]:
        yield from chunk_bytes(data, self.chunk_size)

    def from_file(self, path: str | Path) -> Generator[bytes, None, None]:
        with open(path, "rb") as fh:
            while True:
                chunk = fh.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk

    def stream(self, source: Iterable[bytes]) -> Generator[bytes, None, None]:
        for chunk in source:
            yield chunk


def _check_ring(ring_buffer: object) -> None:
    from circbuf.buffer.ring_buffer import RingBuffer

    if not isinstance(ring_buffer, RingBuffer):
        raise TypeError("ring_buffer must be a RingBuffer instance")


def feed_stream(stream: Iterable[bytes], ring_buffer: "RingBuffer") -> int:
    """Write chunks into ring buffer until one no longer fits whole.

    Returns the number of bytes accepted.
    """
    _check_ring(ring_buffer)
    total = 0
    for chunk in stream:
        if len(chunk) == 0:
            continue
        ok, count = ring_buffer.write(chunk)
        total += count
        if not ok or count < len(chunk):
            logger.debug("feed_stream stopped after {} bytes (buffer full)", total)
            break
    return total


def pump(
    stream: Iterable[bytes],
    ring_buffer: "RingBuffer",
    consume: Callable[[bytes], None],
    read_size: Optional[int] = None,
) -> int:
    """Pass every chunk through ring buffer to consume, draining as needed.

    Chunks larger than the free space are written in pieces, with reads of
    up to read_size bytes in between. Whatever is still buffered when the
    stream ends is drained too. Returns the number of bytes delivered.
    """
    _check_ring(ring_buffer)
    if read_size is None:
        read_size = STREAM.read_size
    if read_size <= 0:
        raise ValueError(f"read_size must be > 0, got {read_size}")

    delivered = 0

    def drain_once() -> None:
        nonlocal delivered
        data = ring_buffer.read_bytes(read_size)
        if data:
            delivered += len(data)
            consume(data)

    for chunk in stream:
        view = memoryview(chunk).cast("B")
        offset = 0
        while offset < len(view):
            ok, count = ring_buffer.write(view[offset:])
            offset += count
            if not ok or offset < len(view):
                drain_once()
        if ring_buffer.full():
            drain_once()

    while not ring_buffer.empty():
        drain_once()
    return delivered
