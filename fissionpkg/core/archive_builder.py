"""Archive builder — turns a local file into an ``Archive`` descriptor.

Small files are embedded as literal archives.  Files at or above the
literal size limit are uploaded to the storage service behind the
controller and referenced by URL plus SHA-256 checksum.

The checksum is computed while the upload streams the file, so the
digest always matches the bytes the storage service received.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import httpx

from fissionpkg.client.controller import ControllerClient
from fissionpkg.client.storage import StorageClient
from fissionpkg.config import ARCHIVE_LITERAL_SIZE_LIMIT
from fissionpkg.core.errors import ArchiveError
from fissionpkg.core.hasher import HashingReader, sha256_hex
from fissionpkg.models.archive import Archive, ArchiveType

logger = logging.getLogger(__name__)


def file_size(path: Path | str) -> int:
    """Return the size of ``path`` in bytes."""
    try:
        return os.stat(path).st_size
    except OSError as exc:
        raise ArchiveError(f"stat {path}", exc) from exc


def get_contents(path: Path | str) -> bytes:
    """Read the whole file."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ArchiveError(f"read {path}", exc) from exc


def create_archive(
    controller: ControllerClient,
    path: Path | str,
    *,
    literal_size_limit: int | None = None,
) -> Archive:
    """Build an archive for ``path``, uploading it when it is too big to inline.

    Parameters
    ----------
    controller:
        Client for the controller; its URL locates the storage proxy.
    path:
        Local file to package.
    literal_size_limit:
        Files strictly smaller than this are embedded.  Defaults to
        ``ARCHIVE_LITERAL_SIZE_LIMIT``.

    Raises
    ------
    ArchiveError
        If the file cannot be stat'd or read, or changes during upload.
    StorageError
        If the upload fails.
    """
    limit = ARCHIVE_LITERAL_SIZE_LIMIT if literal_size_limit is None else literal_size_limit
    size = file_size(path)

    if size < limit:
        logger.debug("Embedding %s as literal archive (%d bytes)", path, size)
        return Archive.from_literal(get_contents(path))

    return _upload_archive(controller, Path(path), size)


def _upload_archive(controller: ControllerClient, path: Path, size: int) -> Archive:
    storage = StorageClient(controller.storage_url, http=controller.http)

    try:
        with open(path, "rb") as f:
            reader = HashingReader(f)
            archive_id = storage.upload(reader, path.name, size)
    except OSError as exc:
        raise ArchiveError(f"read {path}", exc) from exc

    if reader.bytes_read != size:
        raise ArchiveError(
            f"calculate checksum for file {path}",
            f"uploaded {reader.bytes_read} bytes, expected {size}",
        )

    archive = Archive.from_url(storage.get_url(archive_id), reader.hexdigest())
    logger.info("Archive %s stored at %s", path, archive.url)
    return archive


def fetch_archive(archive: Archive, *, http: httpx.Client | None = None) -> bytes:
    """Return the content of an archive, verifying the checksum of URL archives.

    Raises
    ------
    ArchiveError
        If the download fails or the content does not match the checksum.
    """
    if archive.type == ArchiveType.LITERAL:
        return archive.literal or b""

    client = http if http is not None else httpx.Client()
    try:
        response = client.get(archive.url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise ArchiveError(f"download archive {archive.url}", exc) from exc
    finally:
        if http is None:
            client.close()

    data = response.content
    if archive.checksum is not None and sha256_hex(data) != archive.checksum.sum:
        raise ArchiveError(
            f"verify archive {archive.url}",
            f"checksum mismatch (expected {archive.checksum.sum})",
        )
    return data
