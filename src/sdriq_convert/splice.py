"""Splice writer: swap the head of a file for a longer header.

Protocol:
  1. copy input -> output (skipped when they are the same file)
  2. read output[prefix_len:] into memory
  3. rewrite output as new_header || tail

The tail is fully buffered before the destructive write, so the new header
may be longer than the bytes it replaces. Nothing here is atomic unless
``atomic=True``, which runs the same protocol on a temporary file next to the
output and renames it into place on success.
"""
from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from sdriq_core.errors import IoFailure, PrefixExceedsFileSize


def _same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except FileNotFoundError:
        return False


def _file_size(path: Path) -> int:
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise IoFailure("stat", path, e) from e


def _splice_in_place(input_path: Path, work_path: Path, prefix_len: int, new_header: bytes) -> int:
    if not _same_file(input_path, work_path):
        try:
            shutil.copyfile(input_path, work_path)
        except OSError as e:
            raise IoFailure("copy", work_path, e) from e

    try:
        with open(work_path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            # Input may have changed between scan and splice.
            if prefix_len > size:
                raise PrefixExceedsFileSize(prefix_len, size)
            f.seek(prefix_len)
            tail = f.read()
    except OSError as e:
        raise IoFailure("read", work_path, e) from e

    if len(tail) != size - prefix_len:
        raise IoFailure("read", work_path, OSError(f"short read: {len(tail)} of {size - prefix_len} bytes"))

    try:
        with open(work_path, "wb") as f:
            f.write(new_header)
            f.write(tail)
    except OSError as e:
        raise IoFailure("write", work_path, e) from e

    return len(new_header) + len(tail)


def splice_header(
    input_path: Path,
    output_path: Path,
    prefix_len: int,
    new_header: bytes,
    atomic: bool = False,
) -> int:
    """Write ``new_header || input[prefix_len:]`` to ``output_path``.

    Returns the size of the written file. The input file is only modified
    when it is also the output.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    # Checked before any output exists.
    size = _file_size(input_path)
    if prefix_len > size:
        raise PrefixExceedsFileSize(prefix_len, size)

    if not atomic:
        return _splice_in_place(input_path, output_path, prefix_len, new_header)

    out_dir = output_path.resolve().parent
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=out_dir)
    except OSError as e:
        raise IoFailure("tempfile", out_dir, e) from e
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        written = _splice_in_place(input_path, tmp_path, prefix_len, new_header)
        # mkstemp files are 0600; take the existing output's mode, else the input's.
        mode_src = output_path if output_path.exists() else input_path
        try:
            shutil.copymode(mode_src, tmp_path)
        except OSError as e:
            raise IoFailure("chmod", tmp_path, e) from e
        try:
            os.replace(tmp_path, output_path)
        except OSError as e:
            raise IoFailure("rename", output_path, e) from e
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    return written
