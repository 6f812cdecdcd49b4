"""File loading: mmap-backed and zstd-compressed keymaps."""

import mmap

import pytest

from static_keymap import (BufferTooShort, UnsortedKeys, open_keymap, pack_records,
                           write_keymap)
from static_keymap.compression import compress, decompress, is_compressed


@pytest.fixture
def blob():
    return pack_records((i, i * 10, i * 20) for i in range(100))


def test_plain_file_is_memory_mapped(tmp_path, blob):
    path = write_keymap(tmp_path / "plain.km", blob)
    t = open_keymap(path)
    assert isinstance(t.buffer_owner, mmap.mmap)
    assert len(t) == 100
    assert t[42] == (420, 840)


def test_compressed_file(tmp_path, blob):
    path = write_keymap(tmp_path / "packed.km", blob, compressed=True)
    assert is_compressed(path.read_bytes())
    t = open_keymap(path)
    assert isinstance(t.buffer_owner, bytes)
    assert dict(t.iteritems()) == {i: (i * 10, i * 20) for i in range(100)}


def test_offset(tmp_path, blob):
    path = tmp_path / "offset.km"
    path.write_bytes(b"HDR!" + blob)
    t = open_keymap(path, 4)
    assert t[99] == (990, 1980)


def test_options_forwarded(tmp_path):
    path = write_keymap(tmp_path / "unsorted.km",
                        pack_records([(3, 0, 0), (1, 0, 0)], sort=False))
    with pytest.raises(UnsortedKeys):
        open_keymap(path, validate=True)


def test_empty_file(tmp_path):
    path = tmp_path / "empty.km"
    path.write_bytes(b"")
    with pytest.raises(BufferTooShort):
        open_keymap(path)


def test_truncated_file(tmp_path, blob):
    path = write_keymap(tmp_path / "trunc.km", blob[:50])
    with pytest.raises(BufferTooShort):
        open_keymap(path)


def test_compression_roundtrip(blob):
    packed = compress(blob)
    assert is_compressed(packed)
    assert not is_compressed(blob)
    assert decompress(packed) == blob


def test_streamed_compressed_file(tmp_path, blob):
    import zstandard as zstd

    cobj = zstd.ZstdCompressor().compressobj()
    path = tmp_path / "streamed.km"
    path.write_bytes(cobj.compress(blob) + cobj.flush())
    t = open_keymap(path)
    assert len(t) == 100
    assert t[7] == (70, 140)


@pytest.fixture
def opened_maps(monkeypatch):
    maps = []

    class TrackingMap(mmap.mmap):
        def __new__(cls, *args, **kwargs):
            m = super().__new__(cls, *args, **kwargs)
            maps.append(m)
            return m

    monkeypatch.setattr(mmap, "mmap", TrackingMap)
    return maps


def test_map_closed_when_truncated(tmp_path, blob, opened_maps):
    path = write_keymap(tmp_path / "trunc.km", blob[:50])
    with pytest.raises(BufferTooShort):
        open_keymap(path)
    assert len(opened_maps) == 1
    assert opened_maps[0].closed


def test_map_closed_when_unsorted(tmp_path, opened_maps):
    path = write_keymap(tmp_path / "unsorted.km",
                        pack_records([(3, 0, 0), (1, 0, 0)], sort=False))
    with pytest.raises(UnsortedKeys):
        open_keymap(path, validate=True)
    assert opened_maps[0].closed


def test_map_open_on_success(tmp_path, blob, opened_maps):
    t = open_keymap(write_keymap(tmp_path / "ok.km", blob))
    assert t.buffer_owner is opened_maps[0]
    assert not opened_maps[0].closed
