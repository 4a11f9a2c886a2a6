"""Generate synthetic IQ WAV recordings with the canonical 36-byte header."""
import math
import random
import struct
import uuid
from pathlib import Path

SAMPLE_RATE = 48000
BITS = 16
CHANNELS = 2  # I, Q

def wav_header(data_len: int, sample_rate: int = SAMPLE_RATE) -> bytes:
    """RIFF/WAVE header up to (not including) the data marker."""
    block_align = CHANNELS * BITS // 8
    return (
        b"RIFF"
        + struct.pack("<I", 4 + 24 + 8 + data_len)
        + b"WAVE"
        + b"fmt "
        + struct.pack("<IHHIIHH", 16, 1, CHANNELS, sample_rate, sample_rate * block_align, block_align, BITS)
    )

def iq_tone(n_samples: int, offset_hz: float, sample_rate: int = SAMPLE_RATE) -> bytes:
    out = bytearray()
    for n in range(n_samples):
        phase = 2 * math.pi * offset_hz * n / sample_rate
        i = int(12000 * math.cos(phase)) + random.randint(-200, 200)
        q = int(12000 * math.sin(phase)) + random.randint(-200, 200)
        out += struct.pack("<hh", i, q)
    return bytes(out)

def generate_recording(output_dir: str, n_samples: int = 4800, offset_hz: float = 1000.0) -> Path:
    data = iq_tone(n_samples, offset_hz)
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"rec-{str(uuid.uuid4())[:8]}.wav"
    with open(path, "wb") as f:
        f.write(wav_header(len(data)))
        f.write(b"data" + struct.pack("<I", len(data)))
        f.write(data)
    print(f"GENERATED: {path}")
    return path

if __name__ == "__main__":
    import sys

    # python tools/sim_recording.py OUT_DIR [--samples N]
    args = [a for a in sys.argv[1:] if a]

    n = 4800
    if "--samples" in args:
        i = args.index("--samples")
        if i + 1 >= len(args):
            raise SystemExit("--samples requires a value")
        n = int(args[i + 1])
        args = args[:i] + args[i + 2:]

    out = args[0] if args else "simulated_recordings"
    generate_recording(out, n_samples=n)
