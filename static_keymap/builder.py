# ==================================================
# static_keymap/builder.py
# ==================================================
"""Encoders producing buffers in the layout KeyedRecordTable consumes."""
from __future__ import annotations

import operator
import struct
from typing import Iterable, Mapping, Tuple, Union

from .const import COUNT_FMT, RECORD_FMT, UINT32_MAX
from .keymap import _as_key

_record = struct.Struct(RECORD_FMT)
_count = struct.Struct(COUNT_FMT)

Records = Union[Iterable[Tuple[int, int, int]], Mapping[int, Tuple[int, int]]]


def _value(v) -> int:
    if not isinstance(v, bool):
        try:
            n = operator.index(v)
        except TypeError:
            pass
        else:
            if 0 <= n <= UINT32_MAX:
                return n
    raise ValueError("value %r is not an unsigned 32-bit integer" % (v,))


def pack_records(records: Records, *, sort: bool = True) -> bytes:
    """
    Encode ``(key, value1, value2)`` triples, or a mapping of
    ``key -> (value1, value2)``, as a count prefix followed by records.

    With ``sort=False`` the input order is written as-is; the caller is
    then responsible for key order.
    """
    if isinstance(records, Mapping):
        rows = []
        for k, v in records.items():
            v = tuple(v)
            if len(v) != 2:
                raise ValueError("value %r for key %r is not a (value1, value2) pair" % (v, k))
            rows.append((k, v[0], v[1]))
    else:
        rows = [tuple(r) for r in records]

    out = []
    for row in rows:
        if len(row) != 3:
            raise ValueError("record %r is not a (key, value1, value2) triple" % (row,))
        out.append((_as_key(row[0]), _value(row[1]), _value(row[2])))

    if sort:
        out.sort(key=lambda r: r[0])
        for a, b in zip(out, out[1:]):
            if a[0] == b[0]:
                raise ValueError("duplicate key %d" % a[0])

    buf = bytearray(_count.pack(len(out)))
    for row in out:
        buf += _record.pack(*row)
    return bytes(buf)


def pack_string(data: bytes) -> bytes:
    """Length-prefixed byte string, the counterpart of unpack.read_string."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return _count.pack(len(data)) + bytes(data)


__all__ = ["pack_records", "pack_string"]
