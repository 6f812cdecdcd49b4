# ==================================================
# static_keymap/compression.py
# ==================================================
"""zstd framing for keymap blobs stored on disk.

A compressed blob is a single zstd frame whose content is the plain keymap
buffer (count prefix + records). Decompression produces a new ``bytes``
object, which then becomes the table's buffer owner.
"""
import zstandard as zstd

ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"   # little-endian 0xFD2FB528

# -------- zstd wrappers ---------------------------------------------------

cctx = zstd.ZstdCompressor(level=3)
dctx = zstd.ZstdDecompressor()

def compress(data:bytes) -> bytes:
    return cctx.compress(bytes(data))

def decompress(data:bytes) -> bytes:
    # decompressobj handles frames written without a content size (streamed)
    return dctx.decompressobj().decompress(bytes(data))

def is_compressed(data) -> bool:
    return bytes(data[:4]) == ZSTD_MAGIC
