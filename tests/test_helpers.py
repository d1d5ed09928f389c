import numpy as np

from circbuf import get_version
from circbuf.utils.constants import BUFFER, STREAM
from circbuf.utils.helpers import as_byte_view, chunk_bytes, wrap_index


def test_as_byte_view_accepts_buffers():
    np.testing.assert_array_equal(as_byte_view(b"\x01\x02"), np.array([1, 2], dtype=np.uint8))
    assert as_byte_view(bytearray(4), 2).size == 2
    assert as_byte_view(b"abc", -3).size == 0
    assert as_byte_view(b"").size == 0
    # multi-byte dtypes are viewed as raw bytes
    assert as_byte_view(np.zeros(3, dtype=np.int32)).size == 12


def test_as_byte_view_rejects_invalid():
    assert as_byte_view(None) is None
    assert as_byte_view(3.5) is None
    assert as_byte_view(b"abc", 4) is None
    assert as_byte_view(b"abc", writable=True) is None
    assert as_byte_view(np.arange(10, dtype=np.uint8)[::2]) is None


def test_writable_view_shares_memory():
    target = bytearray(3)
    view = as_byte_view(target, writable=True)
    view[:] = [7, 8, 9]
    assert target == bytearray(b"\x07\x08\x09")


def test_chunk_bytes_and_wrap_index():
    assert list(chunk_bytes(b"abcde", 2)) == [b"ab", b"cd", b"e"]
    assert wrap_index(2, 1, 3) == 0
    assert wrap_index(1, 3, 3) == 1
    assert wrap_index(0, 2, 3) == 2


def test_constants_and_version():
    assert BUFFER.default_capacity > 0
    assert STREAM.chunk_size > 0 and STREAM.read_size > 0
    assert isinstance(get_version(), str)
