"""SDR IQ protocol constants.

Single source of truth for on-disk magic values and the auxi record layout.
Keep this file stable. Encoder, decoder and inspector read the same table.
"""
from __future__ import annotations

import struct
from typing import NamedTuple

# Chunk magics
MAGIC_DATA = b"data"  # Payload marker in the input container
MAGIC_AUXI = b"auxi"  # SDR metadata record

MARKER_LEN = 4

# Canonical RIFF/WAVE header before the data marker:
# [RIFF(4) | size(4) | WAVE(4) | "fmt "(4) | fmt_len(4) | fmt body(16)] = 36 bytes
CANONICAL_HEADER_LEN = 36

# Header scan bound: a canonical header ends long before this
MAX_HEADER_SCAN_BYTES = 64 * 1024

# Record: [Magic(4) | Size(4) | body(164)] = 172 bytes
AUXI_BODY_LEN = 164
AUXI_RECORD_LEN = 8 + AUXI_BODY_LEN

FILENAME_LEN = 48

# IQ channel modes
IQ_MODE_UNKNOWN = 0
IQ_MODE_LEFT = 1
IQ_MODE_RIGHT = 2
IQ_MODE_LEFTRIGHT = 3
IQ_MODE_IQ = 4
IQ_MODE_QI = 5
DEFAULT_IQ_MODE = IQ_MODE_IQ

IQ_MODES = {
    IQ_MODE_UNKNOWN: "UNKNOWN",
    IQ_MODE_LEFT: "LEFT",
    IQ_MODE_RIGHT: "RIGHT",
    IQ_MODE_LEFTRIGHT: "LEFTRIGHT",
    IQ_MODE_IQ: "IQ",
    IQ_MODE_QI: "QI",
}

LEVEL_DIFF_MIN = -32768
LEVEL_DIFF_MAX = 32767
# Documented input range tops out at +32768; the encoder clamps it
LEVEL_DIFF_INPUT_MAX = 32768
UINT32_MAX = 0xFFFFFFFF


class Field(NamedTuple):
    name: str
    offset: int
    fmt: str  # struct format, little-endian
    default: object = 0

    @property
    def size(self) -> int:
        return struct.calcsize(self.fmt)


# Windows SYSTEMTIME order, each member u16
SYSTEMTIME_PARTS = (
    "year",
    "month",
    "weekday",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
)


def _systemtime(prefix: str, base: int) -> list[Field]:
    return [Field(f"{prefix}_{part}", base + 2 * i, "<H") for i, part in enumerate(SYSTEMTIME_PARTS)]


# Reserved fields are named "reserved_*" and always stay zero.
AUXI_FIELDS: tuple[Field, ...] = tuple(
    [
        Field("marker", 0, "4s", MAGIC_AUXI),
        Field("record_size", 4, "<I", AUXI_BODY_LEN),
        *_systemtime("start", 8),
        *_systemtime("end", 24),
        Field("center_frequency", 40, "<I"),
        Field("ad_frequency", 44, "<I"),
        Field("if_frequency", 48, "<I"),
        Field("bandwidth", 52, "<I"),
        Field("iq_offset", 56, "<I"),
        Field("reserved_unused2", 60, "<I"),
        Field("level_diff", 64, "<h"),
        Field("reserved_unused3", 66, "B"),
        Field("iq_mode", 67, "B", DEFAULT_IQ_MODE),
        Field("center_frequency_lo", 68, "<I"),
        Field("center_frequency_hi", 72, "<I"),
        Field("prev_filename", 76, f"{FILENAME_LEN}s", b""),
        Field("next_filename", 124, f"{FILENAME_LEN}s", b""),
    ]
)

FIELDS_BY_NAME = {f.name: f for f in AUXI_FIELDS}
