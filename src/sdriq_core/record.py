"""auxi record encoding and decoding.

Both directions walk ``AUXI_FIELDS``; no offset is written anywhere else.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from warnings import warn

from sdriq_core.errors import UnrecognizedFormat
from sdriq_core.protocol import (
    AUXI_BODY_LEN,
    AUXI_FIELDS,
    AUXI_RECORD_LEN,
    DEFAULT_IQ_MODE,
    FILENAME_LEN,
    IQ_MODES,
    LEVEL_DIFF_MAX,
    LEVEL_DIFF_MIN,
    MAGIC_AUXI,
    SYSTEMTIME_PARTS,
)


@dataclass(frozen=True)
class MetadataParameters:
    """Values carried by one auxi record.

    Optional numeric fields left as None are written as zero, and missing
    filenames as 48 NUL bytes. Timestamps are wall-clock values and are
    copied field by field; tzinfo, if any, is ignored.
    """

    start: datetime
    end: datetime
    center_frequency: int
    ad_frequency: Optional[int] = None
    if_frequency: Optional[int] = None
    bandwidth: Optional[int] = None
    iq_offset: Optional[int] = None
    level_diff: Optional[int] = None
    iq_mode: int = DEFAULT_IQ_MODE
    frequency_high: Optional[int] = None
    prev_filename: Optional[str] = None
    next_filename: Optional[str] = None


def systemtime_values(prefix: str, t: datetime) -> dict[str, int]:
    """Split a datetime into SYSTEMTIME members (Sunday is weekday 0)."""
    parts = (
        t.year,
        t.month,
        t.isoweekday() % 7,
        t.day,
        t.hour,
        t.minute,
        t.second,
        t.microsecond // 1000,
    )
    return {f"{prefix}_{name}": value for name, value in zip(SYSTEMTIME_PARTS, parts)}


def encode_filename(name: str | None, label: str = "filename") -> bytes:
    if not name:
        return b""
    try:
        raw = name.encode("ascii")
    except UnicodeEncodeError:
        warn(f"{label} {name!r} is not ASCII; non-ASCII characters replaced with '?'")
        raw = name.encode("ascii", errors="replace")
    if len(raw) > FILENAME_LEN:
        warn(f"{label} is {len(raw)} bytes; truncated to {FILENAME_LEN}")
        raw = raw[:FILENAME_LEN]
    return raw


def clamp_level_diff(value: int) -> int:
    if value > LEVEL_DIFF_MAX or value < LEVEL_DIFF_MIN:
        clamped = max(LEVEL_DIFF_MIN, min(LEVEL_DIFF_MAX, value))
        warn(f"level_diff {value} outside signed 16-bit range; clamped to {clamped}")
        return clamped
    return value


def field_values(params: MetadataParameters) -> dict[str, object]:
    """Map a parameter set onto field-table names. Unmapped fields keep their default."""
    values: dict[str, object] = {}
    values.update(systemtime_values("start", params.start))
    values.update(systemtime_values("end", params.end))
    values["center_frequency"] = params.center_frequency
    # CenterFrqLo mirrors CenterFreq; readers treat CenterFrqHi as valid only when they match.
    values["center_frequency_lo"] = params.center_frequency

    optional = {
        "ad_frequency": params.ad_frequency,
        "if_frequency": params.if_frequency,
        "bandwidth": params.bandwidth,
        "iq_offset": params.iq_offset,
        "center_frequency_hi": params.frequency_high,
    }
    values.update({k: v for k, v in optional.items() if v is not None})

    if params.level_diff is not None:
        values["level_diff"] = clamp_level_diff(int(params.level_diff))
    if params.iq_mode is not None:
        values["iq_mode"] = int(params.iq_mode)

    values["prev_filename"] = encode_filename(params.prev_filename, "prev_filename")
    values["next_filename"] = encode_filename(params.next_filename, "next_filename")
    return values


def encode_record(params: MetadataParameters) -> bytes:
    """Encode ``params`` as the fixed 172-byte auxi record."""
    values = field_values(params)
    buf = bytearray(AUXI_RECORD_LEN)
    for field in AUXI_FIELDS:
        if field.name.startswith("reserved_"):
            continue
        struct.pack_into(field.fmt, buf, field.offset, values.get(field.name, field.default))
    return bytes(buf)


def _to_datetime(values: dict, prefix: str) -> datetime:
    try:
        return datetime(
            values[f"{prefix}_year"],
            values[f"{prefix}_month"],
            values[f"{prefix}_day"],
            values[f"{prefix}_hour"],
            values[f"{prefix}_minute"],
            values[f"{prefix}_second"],
            values[f"{prefix}_millisecond"] * 1000,
        )
    except ValueError as e:
        raise UnrecognizedFormat(f"auxi: invalid {prefix} time: {e}") from e


def decode_record(buf: bytes) -> dict:
    """Read an auxi record back into a plain dict.

    Raises UnrecognizedFormat if the buffer is short, the marker is wrong or
    the size field is not the fixed body length.
    """
    if len(buf) < AUXI_RECORD_LEN:
        raise UnrecognizedFormat(f"auxi: record is {len(buf)} bytes, expected {AUXI_RECORD_LEN}")

    raw = {f.name: struct.unpack_from(f.fmt, buf, f.offset)[0] for f in AUXI_FIELDS}

    if raw["marker"] != MAGIC_AUXI:
        raise UnrecognizedFormat(f"auxi: bad marker {raw['marker']!r}")
    if raw["record_size"] != AUXI_BODY_LEN:
        raise UnrecognizedFormat(f"auxi: size field {raw['record_size']}, expected {AUXI_BODY_LEN}")

    return {
        "start": _to_datetime(raw, "start"),
        "start_weekday": raw["start_weekday"],
        "end": _to_datetime(raw, "end"),
        "end_weekday": raw["end_weekday"],
        "center_frequency": raw["center_frequency"],
        "ad_frequency": raw["ad_frequency"],
        "if_frequency": raw["if_frequency"],
        "bandwidth": raw["bandwidth"],
        "iq_offset": raw["iq_offset"],
        "level_diff": raw["level_diff"],
        "iq_mode": raw["iq_mode"],
        "iq_mode_name": IQ_MODES.get(raw["iq_mode"], "INVALID"),
        "center_frequency_lo": raw["center_frequency_lo"],
        "center_frequency_hi": raw["center_frequency_hi"],
        "prev_filename": raw["prev_filename"].rstrip(b"\x00").decode("ascii", errors="replace"),
        "next_filename": raw["next_filename"].rstrip(b"\x00").decode("ascii", errors="replace"),
    }
