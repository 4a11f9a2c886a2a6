import json
import subprocess
from pathlib import Path

def run(cmd, cwd):
    return subprocess.run(cmd, cwd=cwd, shell=True, check=False, capture_output=True, text=True)

def test_convert_inspect_and_corrupt(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    rec_dir = tmp_path / "recordings"
    out = tmp_path / "out.wav"

    # Generate
    r = run(f"python tools/sim_recording.py {rec_dir} --samples 480", cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    wav = next(rec_dir.glob("rec-*.wav"))

    # Convert
    r = run(
        f"python -m sdriq_convert.cli {wav} -o {out} -f 7100000 "
        f"--start 2025-01-02T03:04:05.678 --ad-frequency 48000 --next-file part2.wav",
        cwd=repo,
    )
    assert r.returncode == 0, r.stderr + r.stdout
    assert "PASS" in r.stdout
    assert out.stat().st_size == wav.stat().st_size + 172
    assert out.read_bytes()[208:] == wav.read_bytes()[36:]

    # Inspect
    r = run(f"python -m sdriq_inspect.cli {out}", cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    report = json.loads(r.stdout)
    assert report["status"] == "PASS"
    rec = report["record"]
    assert rec["center_frequency"] == 7100000
    assert rec["ad_frequency"] == 48000
    assert rec["start"] == "2025-01-02T03:04:05.678"
    assert rec["end"] == "2025-01-02T03:09:05.678"
    assert rec["next_filename"] == "part2.wav"

    # Corrupt and ensure failure
    r = run(f"python scripts/corrupt_one_byte.py {out}", cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    r = run(f"python -m sdriq_inspect.cli {out}", cwd=repo)
    assert r.returncode != 0
    assert json.loads(r.stdout)["errors"][0]["code"] == "E_AUXI_LAYOUT"

def test_convert_rejects_plain_file(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    bad = tmp_path / "bad.wav"
    bad.write_bytes(b"RIFF" + bytes(64))
    r = run(f"python -m sdriq_convert.cli {bad} -o {tmp_path / 'out.wav'} -f 1000 --start 2025-01-01", cwd=repo)
    assert r.returncode == 1
    assert "FATAL: scan:" in r.stdout
    assert not (tmp_path / "out.wav").exists()

def test_convert_rejects_out_of_range_options(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    wav = tmp_path / "in.wav"
    wav.write_bytes(bytes(36) + b"data" + bytes(8))
    out = tmp_path / "out.wav"
    base = f"python -m sdriq_convert.cli {wav} -o {out} -f 1000 --start 2025-01-01"

    for extra in ("--iq-mode 6", "--level-diff 32769", "--level-diff -32769", "-f 4294967296"):
        r = run(f"{base} {extra}", cwd=repo)
        assert r.returncode == 2, extra
        assert "Invalid value" in r.stderr, extra
        assert not out.exists()

    r = run(f"{base} --level-diff 32768 --iq-mode 5", cwd=repo)
    assert r.returncode == 0, r.stderr + r.stdout
    assert out.read_bytes()[36 + 67] == 5
