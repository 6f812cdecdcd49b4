# ==================================================
# static_keymap/iterator.py
# ==================================================
from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from .errors import InvalidIterationMode

if TYPE_CHECKING:
    from .keymap import KeyedRecordTable


class Projection(IntEnum):
    """Fields of a record yielded by a RecordIterator."""
    KEYS = 0
    VALUES = 1
    ITEMS = 2
    VALUES_NO_SIZE = 3   # value1 only
    ITEMS_NO_SIZE = 4    # (key, value1)

    @classmethod
    def coerce(cls, mode) -> "Projection":
        if isinstance(mode, bool):
            raise InvalidIterationMode("Invalid mode for RecordIterator: %r" % (mode,))
        try:
            return cls(mode)
        except ValueError:
            raise InvalidIterationMode("Invalid mode for RecordIterator: %r" % (mode,)) from None


def _keys(k, v1, v2):
    return k


def _values(k, v1, v2):
    return (v1, v2)


def _items(k, v1, v2):
    return (k, (v1, v2))


def _values_nosize(k, v1, v2):
    return v1


def _items_nosize(k, v1, v2):
    return (k, v1)


_PROJECT = {
    Projection.KEYS: _keys,
    Projection.VALUES: _values,
    Projection.ITEMS: _items,
    Projection.VALUES_NO_SIZE: _values_nosize,
    Projection.ITEMS_NO_SIZE: _items_nosize,
}


class RecordIterator:
    """Single-pass cursor over a KeyedRecordTable.

    Holds a reference to the table (and through it the buffer owner), so the
    records stay valid for as long as the iterator does.
    """
    __slots__ = ("table", "projection", "index", "_project")

    def __init__(self, table: "KeyedRecordTable", mode=Projection.KEYS):
        self.table = table
        self.projection = Projection.coerce(mode)
        self.index = 0
        self._project = _PROJECT[self.projection]

    def __iter__(self):
        return self

    def __next__(self):
        i = self.index
        if i < 0 or i >= len(self.table):
            raise StopIteration
        k, v1, v2 = self.table._record_at(i)
        self.index = i + 1
        return self._project(k, v1, v2)

    def __length_hint__(self) -> int:
        return max(0, len(self.table) - self.index)

    def __repr__(self):
        return "<RecordIterator %s %d/%d>" % (self.projection.name, self.index, len(self.table))
