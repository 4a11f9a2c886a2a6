"""Boundary scanner: find the header/payload split without parsing chunks."""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, NamedTuple, Optional

from sdriq_core.errors import IoFailure, UnrecognizedFormat
from sdriq_core.protocol import MAGIC_DATA

CHUNK_SIZE = 64 * 1024


class MarkerMatcher:
    """Byte-at-a-time automaton over a fixed marker.

    State ``n`` means the last ``n`` bytes fed equal ``marker[:n]``. On a
    mismatch the state falls back along the marker's failure links, so a
    byte is never compared more than a bounded number of times.
    """

    def __init__(self, marker: bytes):
        if not marker:
            raise ValueError("marker must not be empty")
        self.marker = marker
        self.state = 0
        self._fail = self._failure_links(marker)

    @staticmethod
    def _failure_links(marker: bytes) -> list[int]:
        fail = [0] * len(marker)
        k = 0
        for i in range(1, len(marker)):
            while k and marker[i] != marker[k]:
                k = fail[k - 1]
            if marker[i] == marker[k]:
                k += 1
            fail[i] = k
        return fail

    def feed(self, byte: int) -> bool:
        """Advance by one byte. Returns True when the marker is complete."""
        while self.state and byte != self.marker[self.state]:
            self.state = self._fail[self.state - 1]
        if byte == self.marker[self.state]:
            self.state += 1
        if self.state == len(self.marker):
            self.state = self._fail[-1]
            return True
        return False


class ScanResult(NamedTuple):
    prefix: bytes  # everything before the marker
    end_offset: int  # offset just past the marker


def scan_for_marker(f: BinaryIO, marker: bytes = MAGIC_DATA, max_bytes: Optional[int] = None) -> ScanResult:
    """Scan ``f`` from its current position for the first ``marker``.

    The source is read in blocks but matched byte by byte. If the source is
    seekable it is left positioned just past the marker. With ``max_bytes``
    set, at most that many bytes are read and a marker ending beyond them is
    not found.
    """
    matcher = MarkerMatcher(marker)
    consumed = bytearray()
    start = f.tell() if f.seekable() else 0
    name = marker.decode("latin-1")

    while True:
        want = CHUNK_SIZE
        if max_bytes is not None:
            want = min(want, max_bytes - len(consumed))
            if want <= 0:
                raise UnrecognizedFormat(f"scan: no {name!r} chunk within the first {max_bytes} bytes")
        chunk = f.read(want)
        if not chunk:
            raise UnrecognizedFormat(
                f"scan: end of file after {len(consumed)} bytes without finding {name!r} chunk"
            )
        for i, byte in enumerate(chunk):
            if matcher.feed(byte):
                consumed += chunk[: i + 1]
                end = len(consumed)
                if f.seekable():
                    f.seek(start + end)
                return ScanResult(bytes(consumed[: end - len(marker)]), end)
        consumed += chunk


def scan_file(path: Path, marker: bytes = MAGIC_DATA, max_bytes: Optional[int] = None) -> ScanResult:
    try:
        with open(path, "rb") as f:
            return scan_for_marker(f, marker, max_bytes)
    except OSError as e:
        raise IoFailure("scan", path, e) from e
