# ==================================================
# static_keymap/const.py
# ==================================================
import os

import numpy as np

COUNT_FMT = "<i"          # signed record count prefix
COUNT_SIZE = 4
RECORD_FMT = "<III"       # key, value1, value2
RECORD_SIZE = 12
UINT32_FMT = "<I"
INT32_FMT = "<i"
UINT32_MAX = 0xFFFFFFFF

# structured view over one record; itemsize must equal RECORD_SIZE
RECORD_DTYPE = np.dtype([("key", "<u4"), ("value1", "<u4"), ("value2", "<u4")])

# ── environment overrides ──────────────────────────────────────
STRICT_DEFAULT = os.getenv("STATIC_KEYMAP_STRICT", "1") != "0"
VALIDATE_DEFAULT = os.getenv("STATIC_KEYMAP_VALIDATE", "0") == "1"
