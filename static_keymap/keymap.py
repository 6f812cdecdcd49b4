# ==================================================
# static_keymap/keymap.py
# ==================================================
from __future__ import annotations

import logging
import operator
import struct
from bisect import bisect_left
from typing import Optional, Tuple

import numpy as np

from .const import (COUNT_FMT, COUNT_SIZE, RECORD_DTYPE, RECORD_SIZE,
                    STRICT_DEFAULT, UINT32_MAX, VALIDATE_DEFAULT)
from .errors import (AlreadyInitialized, BufferTooShort, InvalidKeyType,
                     KeyNotFound, UnsortedKeys)
from .iterator import Projection, RecordIterator
from .unpack import byte_view

log = logging.getLogger(__name__)

_count = struct.Struct(COUNT_FMT)

_EMPTY = np.zeros(0, dtype=RECORD_DTYPE)
_EMPTY.flags.writeable = False


def _as_key(key) -> int:
    if isinstance(key, bool):
        raise InvalidKeyType("lookup called with non-integer key %r" % (key,))
    try:
        k = operator.index(key)
    except TypeError:
        raise InvalidKeyType("lookup called with non-integer key %r" % (key,)) from None
    if not 0 <= k <= UINT32_MAX:
        raise InvalidKeyType("key %d is outside the unsigned 32-bit range" % k)
    return k


class KeyedRecordTable:
    """Read-only uint32 -> (uint32, uint32) map over a borrowed buffer.

    The buffer holds a little-endian int32 record count followed by 12-byte
    ``(key, value1, value2)`` records sorted by key. Records are never
    copied: ``records`` is a numpy view into the caller's buffer, and the
    buffer object itself is retained until the table goes away.
    """

    def __init__(self):
        self._ref = None
        self._records = _EMPTY
        self._keys = _EMPTY["key"]
        self._length = 0

    @classmethod
    def from_buffer(cls, buffer, offset: int = 0, **kwargs) -> "KeyedRecordTable":
        table = cls()
        table.initialize(buffer, offset, **kwargs)
        return table

    # ------------------------------------------------------------------
    def initialize(self, buffer, offset: int = 0, *,
                   strict: bool = STRICT_DEFAULT,
                   validate: bool = VALIDATE_DEFAULT) -> None:
        if self._ref is not None:
            raise AlreadyInitialized("keymap is already initialized")

        view = byte_view(buffer)
        offset = operator.index(offset)
        size = view.nbytes

        if offset < 0 or offset > size - COUNT_SIZE:
            raise BufferTooShort("Initialize requires a buffer of at least 4 bytes",
                                 expected=COUNT_SIZE)

        length = _count.unpack_from(view, offset)[0]
        start = offset + COUNT_SIZE
        remaining = size - start

        # the declared count is checked against the byte count on purpose;
        # buffers written by older producers rely on this exact check
        if remaining < length:
            raise BufferTooShort("Not enough data in buffer, expected %d bytes" % length,
                                 expected=length)

        available = remaining // RECORD_SIZE
        if length < 0 or length > available:
            if strict and length < 0:
                raise BufferTooShort("Negative record count %d in prefix" % length)
            if strict:
                raise BufferTooShort(
                    "Record region holds %d complete records, %d declared"
                    % (available, length), expected=length * RECORD_SIZE)
            clamped = max(0, min(length, available))
            log.warning("keymap declares %d records but only %d are addressable",
                        length, clamped)
            length = clamped

        if length:
            region = view[start:start + length * RECORD_SIZE]
            records = np.frombuffer(region, dtype=RECORD_DTYPE, count=length)
            records.flags.writeable = False
        else:
            records = _EMPTY

        keys = records["key"]
        if validate and length > 1:
            bad = np.flatnonzero(keys[1:] <= keys[:-1])
            if bad.size:
                pos = int(bad[0]) + 1
                raise UnsortedKeys("key %d at record %d does not follow key %d"
                                   % (keys[pos], pos, keys[pos - 1]), position=pos)

        self._records = records
        self._keys = keys
        self._length = length
        # keep safety reference to the buffer owner
        self._ref = buffer
        log.debug("keymap initialized: %d records at offset %d", length, offset)

    # ------------------------------------------------------------------
    @property
    def buffer_owner(self):
        return self._ref

    @property
    def records(self) -> np.ndarray:
        """Read-only structured array over the record region (no copy)."""
        return self._records

    def __len__(self) -> int:
        return self._length

    def _find(self, key) -> int:
        k = _as_key(key)
        i = bisect_left(self._keys, k)
        if i < self._length and self._keys[i] == k:
            return i
        return -1

    def _record_at(self, index: int) -> Tuple[int, int, int]:
        return self._records[index].item()

    def get(self, key, default=None) -> Optional[Tuple[int, int]]:
        """Return ``(value1, value2)`` for ``key``, or ``default`` if absent."""
        i = self._find(key)
        if i < 0:
            return default
        _, v1, v2 = self._record_at(i)
        return (v1, v2)

    def __getitem__(self, key) -> Tuple[int, int]:
        i = self._find(key)
        if i < 0:
            raise KeyNotFound(_as_key(key))
        _, v1, v2 = self._record_at(i)
        return (v1, v2)

    def __contains__(self, key) -> bool:
        return self._find(key) >= 0

    # -- iteration ---------------------------------------------------------
    def iterkeys(self) -> RecordIterator:
        return RecordIterator(self, Projection.KEYS)

    def itervalues(self) -> RecordIterator:
        return RecordIterator(self, Projection.VALUES)

    def iteritems(self) -> RecordIterator:
        return RecordIterator(self, Projection.ITEMS)

    def _iterspecial(self, mode) -> RecordIterator:
        return RecordIterator(self, mode)

    __iter__ = iterkeys
    keys = iterkeys
    values = itervalues
    items = iteritems

    def __repr__(self):
        state = "%d records" % self._length if self._ref is not None else "uninitialized"
        return "<%s %s>" % (type(self).__name__, state)
