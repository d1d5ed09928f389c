"""Utility helpers shared by the buffer and stream modules."""
from __future__ import annotations

from typing import Iterable, Optional

import numpy as np


ByteArray = np.ndarray


def as_byte_view(
    data: object,
    length: Optional[int] = None,
    writable: bool = False,
) -> Optional[ByteArray]:
    """Return a flat uint8 view over *data*, limited to *length* bytes.

    Returns None when *data* does not expose a contiguous buffer, when a
    writable view is requested over read-only memory, or when *length*
    exceeds the bytes available. A non-positive *length* yields an empty view.
    """
    if data is None:
        return None
    try:
        raw = memoryview(data).cast("B")
    except TypeError:
        return None
    if writable and raw.readonly:
        return None
    if raw.nbytes == 0:
        view = np.zeros(0, dtype=np.uint8)
    else:
        view = np.frombuffer(raw, dtype=np.uint8)
    if length is None:
        return view
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
        return None
    if length > view.size:
        return None
    return view[: max(length, 0)]


def chunk_bytes(data: bytes, chunk_size: int) -> Iterable[bytes]:
    """Yield consecutive slices of size chunk_size from data."""
    for idx in range(0, len(data), chunk_size):
        yield bytes(data[idx : idx + chunk_size])


def wrap_index(index: int, count: int, capacity: int) -> int:
    """Advance index by count modulo capacity."""
    return (index + count) % capacity
