"""WAV to SDR IQ conversion: scan, validate, encode, splice."""
from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from sdriq_core.errors import UnrecognizedFormat
from sdriq_core.protocol import AUXI_RECORD_LEN, CANONICAL_HEADER_LEN, MAGIC_DATA, MAX_HEADER_SCAN_BYTES
from sdriq_core.record import MetadataParameters, encode_record
from sdriq_convert.scan import scan_file
from sdriq_convert.splice import splice_header


class SpliceResult(NamedTuple):
    output_path: Path
    header_len: int
    record_len: int
    payload_len: int
    output_size: int


def convert_file(
    input_path: Path,
    output_path: Path,
    params: MetadataParameters,
    atomic: bool = False,
) -> SpliceResult:
    """Insert an auxi record between the WAV header and its data chunk.

    Sample data is never decoded; every byte from the ``data`` marker onward
    is copied unchanged.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    print(f"Converting: {input_path}")

    # 1. Locate header/payload boundary
    scan = scan_file(input_path, MAGIC_DATA, max_bytes=MAX_HEADER_SCAN_BYTES)
    header = scan.prefix
    if len(header) != CANONICAL_HEADER_LEN:
        raise UnrecognizedFormat(
            f"scan: header before 'data' is {len(header)} bytes, expected {CANONICAL_HEADER_LEN}"
        )

    # 2. Encode record
    record = encode_record(params)

    # 3. Rewrite [header][data...] as [header][auxi][data...]
    size = splice_header(input_path, output_path, len(header), header + record, atomic=atomic)

    result = SpliceResult(
        output_path=output_path,
        header_len=len(header),
        record_len=AUXI_RECORD_LEN,
        payload_len=size - len(header) - AUXI_RECORD_LEN,
        output_size=size,
    )
    print(f"PASS: SDR IQ file written to {output_path}")
    print(f"  Center frequency: {params.center_frequency} Hz")
    print(f"  Payload bytes: {result.payload_len}")
    return result
