"""Error taxonomy for the scan / encode / splice pipeline."""
from __future__ import annotations


class SdrIqError(Exception):
    """Base for every terminal failure of a conversion."""


class UnrecognizedFormat(SdrIqError, ValueError):
    """Input is not a recognized container variant, or a record is malformed."""


class PrefixExceedsFileSize(SdrIqError, ValueError):
    def __init__(self, prefix_len: int, file_size: int):
        self.prefix_len = prefix_len
        self.file_size = file_size
        super().__init__(f"splice: cannot remove {prefix_len} bytes from file of size {file_size}")


class IoFailure(SdrIqError, OSError):
    """Filesystem error during a named stage (copy, read, write, rename)."""

    def __init__(self, stage: str, path, cause: OSError):
        self.stage = stage
        self.path = str(path)
        self.cause = cause
        super().__init__(f"{stage}: {self.path}: {cause.strerror or cause}")
