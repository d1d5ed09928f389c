"""Global constants shared across circbuf modules."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BufferConstants:
    default_capacity: int = 4096
    default_policy: str = "reject"


@dataclass(frozen=True)
class StreamConstants:
    chunk_size: int = 1024
    read_size: int = 1024


BUFFER = BufferConstants()
STREAM = StreamConstants()
