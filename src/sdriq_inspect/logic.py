from pathlib import Path
from sdriq_core.errors import UnrecognizedFormat
from sdriq_core.protocol import (
    AUXI_RECORD_LEN,
    CANONICAL_HEADER_LEN,
    MAGIC_AUXI,
    MAGIC_DATA,
    MARKER_LEN,
    MAX_HEADER_SCAN_BYTES,
)
from sdriq_core.record import decode_record
from sdriq_convert.scan import scan_file
from .const import ERRORS

def _fail(code: str, **detail) -> dict:
    err = {"code": code, "message": ERRORS[code], **detail}
    return {"status": "FAIL", "error_count": 1, "errors": [err]}

def _jsonable(record: dict) -> dict:
    out = dict(record)
    for k in ("start", "end"):
        out[k] = record[k].isoformat(timespec="milliseconds")
    return out

def inspect_file(path: Path) -> dict:
    try:
        scan = scan_file(path, MAGIC_AUXI, max_bytes=MAX_HEADER_SCAN_BYTES)
    except UnrecognizedFormat as e:
        return _fail("E_NO_AUXI", detail=str(e))
    except OSError as e:
        return _fail("E_IO", path=str(path), detail=str(e))

    offset = len(scan.prefix)
    if offset != CANONICAL_HEADER_LEN:
        return _fail("E_HEADER_SIZE", offset=offset, expected=CANONICAL_HEADER_LEN)

    try:
        with open(path, "rb") as f:
            f.seek(offset)
            raw = f.read(AUXI_RECORD_LEN)
            next_marker = f.read(MARKER_LEN)
    except OSError as e:
        return _fail("E_IO", path=str(path), detail=str(e))

    try:
        record = decode_record(raw)
    except UnrecognizedFormat as e:
        return _fail("E_AUXI_LAYOUT", detail=str(e))

    if next_marker != MAGIC_DATA:
        return _fail("E_NO_DATA", offset=offset + AUXI_RECORD_LEN, found=next_marker.decode("latin-1"))

    return {"status": "PASS", "error_count": 0, "errors": [], "record": _jsonable(record)}
