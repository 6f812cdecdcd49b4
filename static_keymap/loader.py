# ==================================================
# static_keymap/loader.py
# ==================================================
from __future__ import annotations

import logging
import mmap
import os
import traceback
from pathlib import Path

from .compression import compress, decompress, is_compressed
from .errors import BufferTooShort
from .keymap import KeyedRecordTable

log = logging.getLogger(__name__)


def open_keymap(path: str | os.PathLike, offset: int = 0, **kwargs) -> KeyedRecordTable:
    """
    Open a keymap file.

    Plain files are memory-mapped read-only and the map becomes the table's
    buffer owner, so nothing is read until a record is touched. zstd
    compressed files are decompressed into memory first.
    """
    path = Path(path)
    with open(path, "rb") as f:
        if os.fstat(f.fileno()).st_size == 0:
            raise BufferTooShort("%s is empty" % path, expected=4)
        mm = mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)

    if is_compressed(mm):
        try:
            buffer = decompress(mm)
        finally:
            mm.close()
        log.debug("decompressed %s to %d bytes", path, len(buffer))
    else:
        buffer = mm

    try:
        table = KeyedRecordTable.from_buffer(buffer, offset, **kwargs)
    except Exception as exc:
        if buffer is mm:
            # failed frames still hold views exported from the map
            traceback.clear_frames(exc.__traceback__)
            try:
                mm.close()
            except BufferError:
                log.debug("map for %s still exported, left to the collector", path)
        raise
    log.debug("opened %s: %d records", path, len(table))
    return table


def write_keymap(path: str | os.PathLike, blob: bytes, *, compressed: bool = False) -> Path:
    """Write an encoded keymap buffer to ``path``, optionally zstd framed."""
    path = Path(path)
    data = compress(blob) if compressed else bytes(blob)
    with open(path, "wb") as f:
        f.write(data)
    return path
