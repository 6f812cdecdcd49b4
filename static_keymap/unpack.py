# ==================================================
# static_keymap/unpack.py
# ==================================================
"""Scalar decode helpers for FSD-style buffers.

These mirror the bounds contract of the keymap prefix read: a 4-byte field
at ``offset`` must lie entirely inside the buffer.
"""
from __future__ import annotations

import struct

from .const import INT32_FMT, UINT32_FMT
from .errors import BufferTooShort

_uint32 = struct.Struct(UINT32_FMT)
_int32 = struct.Struct(INT32_FMT)


def byte_view(buffer) -> memoryview:
    """Flat unsigned-byte memoryview over ``buffer`` (no copy)."""
    try:
        view = memoryview(buffer)
    except TypeError:
        raise TypeError("expected a bytes-like object, got %s"
                        % type(buffer).__name__) from None
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def _check_word(size: int, offset: int, name: str):
    if not 0 <= offset <= size - 4:
        raise BufferTooShort("%s requires a buffer of at least 4 bytes" % name,
                             expected=offset + 4)


def read_uint32(buffer, offset: int = 0) -> int:
    view = byte_view(buffer)
    _check_word(view.nbytes, offset, "read_uint32")
    return _uint32.unpack_from(view, offset)[0]


def read_int32(buffer, offset: int = 0) -> int:
    view = byte_view(buffer)
    _check_word(view.nbytes, offset, "read_int32")
    return _int32.unpack_from(view, offset)[0]


def read_string(buffer, offset: int = 0) -> bytes:
    """Return the int32 length-prefixed byte string stored at ``offset``."""
    view = byte_view(buffer)
    _check_word(view.nbytes, offset, "read_string")
    length = _int32.unpack_from(view, offset)[0]
    remaining = view.nbytes - offset - 4
    if length < 0 or length > remaining:
        raise BufferTooShort("read_string expected %d bytes, %d available"
                             % (length, remaining), expected=length)
    start = offset + 4
    return bytes(view[start:start + length])
