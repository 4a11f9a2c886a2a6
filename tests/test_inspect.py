import tracemalloc
from datetime import datetime

from sdriq_core.record import MetadataParameters, encode_record
from sdriq_inspect.logic import inspect_file

T0 = datetime(2025, 1, 2, 3, 4, 5)
RECORD = encode_record(MetadataParameters(start=T0, end=T0, center_frequency=14_074_000))


def test_inspect_pass(tmp_path):
    p = tmp_path / "ok.wav"
    p.write_bytes(bytes(36) + RECORD + b"data" + bytes(8))
    res = inspect_file(p)
    assert res["status"] == "PASS"
    assert res["record"]["center_frequency"] == 14_074_000
    assert res["record"]["start"] == "2025-01-02T03:04:05.000"


def test_inspect_plain_wav(tmp_path):
    p = tmp_path / "plain.wav"
    p.write_bytes(bytes(36) + b"data" + bytes(8))
    assert inspect_file(p)["errors"][0]["code"] == "E_NO_AUXI"


def test_inspect_wrong_offset(tmp_path):
    p = tmp_path / "off.wav"
    p.write_bytes(bytes(40) + RECORD + b"data")
    res = inspect_file(p)
    assert res["status"] == "FAIL"
    assert res["errors"][0]["code"] == "E_HEADER_SIZE"
    assert res["errors"][0]["offset"] == 40


def test_inspect_missing_data_after_record(tmp_path):
    p = tmp_path / "nodata.wav"
    p.write_bytes(bytes(36) + RECORD + b"LIST")
    assert inspect_file(p)["errors"][0]["code"] == "E_NO_DATA"


def test_inspect_truncated_record(tmp_path):
    p = tmp_path / "short.wav"
    p.write_bytes(bytes(36) + RECORD[:100])
    assert inspect_file(p)["errors"][0]["code"] == "E_AUXI_LAYOUT"


def test_inspect_plain_recording_reads_only_header(tmp_path):
    p = tmp_path / "big.wav"
    p.write_bytes(bytes(36) + b"data" + bytes(8 * 1024 * 1024))
    tracemalloc.start()
    try:
        res = inspect_file(p)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    assert res["errors"][0]["code"] == "E_NO_AUXI"
    assert peak < 1024 * 1024


def test_inspect_directory_is_io_error(tmp_path):
    res = inspect_file(tmp_path)
    assert res["status"] == "FAIL"
    assert res["errors"][0]["code"] == "E_IO"


def test_inspect_missing_file_is_io_error(tmp_path):
    res = inspect_file(tmp_path / "gone.wav")
    assert res["errors"][0]["code"] == "E_IO"
    assert res["errors"][0]["path"].endswith("gone.wav")
