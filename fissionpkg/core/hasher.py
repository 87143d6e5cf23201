"""SHA-256 helpers for archive checksums.

``HashingReader`` lets a single read of a file feed both an upload and its
checksum, so the recorded digest always describes the bytes that were sent.
"""

from __future__ import annotations

import hashlib
from typing import BinaryIO


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


class HashingReader:
    """Read-only binary file wrapper that hashes everything read through it.

    Not seekable: each byte passes through the digest exactly once.

    Parameters
    ----------
    fileobj:
        A binary file opened for reading.
    """

    def __init__(self, fileobj: BinaryIO) -> None:
        self._file = fileobj
        self._hash = hashlib.sha256()
        self._bytes_read = 0

    @property
    def name(self) -> str:
        return getattr(self._file, "name", "upload")

    @property
    def bytes_read(self) -> int:
        """Number of bytes consumed (and hashed) so far."""
        return self._bytes_read

    def read(self, size: int = -1) -> bytes:
        chunk = self._file.read(size)
        if chunk:
            self._hash.update(chunk)
            self._bytes_read += len(chunk)
        return chunk

    def fileno(self) -> int:
        return self._file.fileno()

    def hexdigest(self) -> str:
        return self._hash.hexdigest()
