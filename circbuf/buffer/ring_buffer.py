"""Fixed-capacity circular byte buffer for bulk producer/consumer I/O."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Union

import numpy as np
from loguru import logger

from circbuf.utils.constants import BUFFER
from circbuf.utils.helpers import as_byte_view, wrap_index


class FullPolicy(Enum):
    """What a write does when the buffer has no space left."""

    REJECT_WRITE = "reject"
    OVERWRITE_OLDEST = "overwrite"

    @classmethod
    def from_flag(cls, overwrite_when_full: bool) -> "FullPolicy":
        return cls.OVERWRITE_OLDEST if overwrite_when_full else cls.REJECT_WRITE


class Transfer(NamedTuple):
    ok: bool
    count: int


REJECTED = Transfer(False, 0)


@dataclass(eq=False)
class RingBuffer:
    """Circular byte buffer over one fixed-length numpy ``uint8`` block.

    ``occupied`` is the single source of truth for how many unread bytes are
    stored; when it equals ``capacity`` the producer and consumer offsets
    coincide. Writes and reads move as many bytes as fit and report the
    count through :class:`Transfer`. A transfer of zero bytes is a failure,
    never an exception.

    Only one producer and one consumer may use an instance, and never
    concurrently. There is no internal locking.
    """

    capacity: int
    policy: Union[FullPolicy, bool] = FullPolicy.REJECT_WRITE
    storage: np.ndarray = field(init=False, repr=False)
    producer_offset: int = field(init=False, default=0)
    consumer_offset: int = field(init=False, default=0)
    occupied: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, (int, np.integer)):
            raise TypeError(f"capacity must be an int, got {type(self.capacity).__name__}")
        if self.capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {self.capacity}")
        self.capacity = int(self.capacity)
        if isinstance(self.policy, bool):
            self.policy = FullPolicy.from_flag(self.policy)
        else:
            self.policy = FullPolicy(self.policy)
        if self.policy is FullPolicy.OVERWRITE_OLDEST:
            raise NotImplementedError("OVERWRITE_OLDEST policy is not implemented")
        self.storage = np.zeros(self.capacity, dtype=np.uint8)

    def __setattr__(self, name: str, value: object) -> None:
        # capacity is fixed once storage has been allocated
        if name == "capacity" and "storage" in self.__dict__:
            raise AttributeError("capacity cannot be changed after construction")
        super().__setattr__(name, value)

    @classmethod
    def with_default_capacity(cls) -> "RingBuffer":
        return cls(BUFFER.default_capacity, FullPolicy(BUFFER.default_policy))

    # state

    def empty(self) -> bool:
        return self.occupied == 0

    def full(self) -> bool:
        return self.occupied == self.capacity

    def size(self) -> int:
        return self.occupied

    @property
    def free_space(self) -> int:
        return self.capacity - self.occupied

    def __len__(self) -> int:
        return self.occupied

    # producer

    def write(self, source: object, length: Optional[int] = None) -> Transfer:
        """Copy up to *length* bytes of *source* in at the producer offset.

        *length* defaults to the byte length of *source*. Fewer bytes are
        written when less space is free; check ``Transfer.count``.
        """
        data = as_byte_view(source, length)
        if data is None:
            logger.warning(
                "[RingBuffer id={}] write: invalid source {} (length={})",
                id(self), type(source).__name__, length,
            )
            return REJECTED

        count = min(self.free_space, data.size)
        if count <= 0:
            logger.debug(
                "[RingBuffer id={}] write rejected: requested={} free={}",
                id(self), data.size, self.free_space,
            )
            return REJECTED

        start = self.producer_offset
        tail = self.capacity - start
        if count <= tail:
            self.storage[start : start + count] = data[:count]
        else:
            self.storage[start:] = data[:tail]
            self.storage[: count - tail] = data[tail:count]

        self.producer_offset = wrap_index(start, count, self.capacity)
        self.occupied += count
        return Transfer(True, count)

    # consumer

    def read(self, destination: object, length: Optional[int] = None) -> Transfer:
        """Move up to *length* unread bytes into *destination*.

        *destination* must be writable; *length* defaults to its byte length.
        """
        out = as_byte_view(destination, length, writable=True)
        if out is None:
            logger.warning(
                "[RingBuffer id={}] read: invalid destination {} (length={})",
                id(self), type(destination).__name__, length,
            )
            return REJECTED

        count = min(self.occupied, out.size)
        if count <= 0:
            logger.debug(
                "[RingBuffer id={}] read rejected: requested={} occupied={}",
                id(self), out.size, self.occupied,
            )
            return REJECTED

        start = self.consumer_offset
        tail = self.capacity - start
        if count <= tail:
            out[:count] = self.storage[start : start + count]
        else:
            out[:tail] = self.storage[start:]
            out[tail:count] = self.storage[: count - tail]

        self.consumer_offset = wrap_index(start, count, self.capacity)
        self.occupied -= count
        return Transfer(True, count)

    def read_bytes(self, max_bytes: int) -> bytes:
        """Read up to *max_bytes* and return them, or ``b""`` if nothing moved."""
        if max_bytes <= 0:
            return b""
        out = bytearray(min(max_bytes, self.capacity))
        ok, count = self.read(out)
        if not ok:
            return b""
        return bytes(out[:count])

    def clear(self) -> None:
        # storage keeps stale bytes; they sit outside the occupied region
        self.occupied = 0
        self.producer_offset = 0
        self.consumer_offset = 0


__all__ = ["FullPolicy", "RingBuffer", "Transfer"]
