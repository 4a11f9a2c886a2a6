import sys
from pathlib import Path

def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_byte.py <file>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < 208:
        print("File too small to hold an auxi chunk.")
        raise SystemExit(2)

    # WAV header is 36 bytes; auxi marker is 4, size field is 4.
    # We flip the low byte of the size field so the record no longer decodes.
    idx = 36 + 4
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
