"""Convert a multipart recording, linking each part to its neighbours."""
from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

from sdriq_convert.convert import convert_file
from sdriq_core.record import MetadataParameters


def main() -> None:
    if len(sys.argv) < 5:
        print("Usage: python multipart.py <out_dir> <center_hz> <start_iso> <part.wav>...")
        print("Example: python multipart.py out/ 7100000 2025-01-02T03:04:05 p1.wav p2.wav p3.wav")
        sys.exit(1)

    out_dir = Path(sys.argv[1])
    center = int(sys.argv[2])
    start = datetime.fromisoformat(sys.argv[3])
    parts = [Path(p) for p in sys.argv[4:]]

    out_dir.mkdir(parents=True, exist_ok=True)
    names = [p.name for p in parts]

    # Each part is assumed to cover five minutes.
    span = timedelta(minutes=5)
    for i, part in enumerate(parts):
        params = MetadataParameters(
            start=start + i * span,
            end=start + (i + 1) * span,
            center_frequency=center,
            prev_filename=names[i - 1] if i > 0 else None,
            next_filename=names[i + 1] if i + 1 < len(names) else None,
        )
        convert_file(part, out_dir / part.name, params)


if __name__ == "__main__":
    main()
