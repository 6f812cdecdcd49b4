from .errors import (KeyMapError, BufferTooShort, InvalidKeyType, KeyNotFound,
                     InvalidIterationMode, AlreadyInitialized, UnsortedKeys)
from .iterator import Projection, RecordIterator
from .keymap import KeyedRecordTable
from .unpack import read_uint32, read_int32, read_string
from .builder import pack_records, pack_string
from .loader import open_keymap, write_keymap

__all__ = [
    "KeyedRecordTable", "RecordIterator", "Projection",
    "read_uint32", "read_int32", "read_string",
    "pack_records", "pack_string",
    "open_keymap", "write_keymap",
    "KeyMapError", "BufferTooShort", "InvalidKeyType", "KeyNotFound",
    "InvalidIterationMode", "AlreadyInitialized", "UnsortedKeys",
]
