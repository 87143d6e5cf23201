"""Storage service client — uploads archive blobs too large to inline.

The storage service is reached through the controller's proxy
(``<controller>/proxy/storage``).  Uploads are multipart form posts; the
service answers with an opaque archive id, from which a download URL is
derived.
"""

from __future__ import annotations

import logging
from typing import BinaryIO
from urllib.parse import quote

import httpx

from fissionpkg.core.errors import StorageError
from fissionpkg.core.hasher import HashingReader

logger = logging.getLogger(__name__)

ARCHIVE_PATH = "/v1/archive"


class StorageClient:
    """Synchronous client for the storage service archive API.

    Parameters
    ----------
    url:
        Base URL of the storage service (no trailing slash needed).
    http:
        Optional pre-built ``httpx.Client``; the caller keeps ownership.
    timeout:
        Request timeout in seconds, ``None`` for no timeout.
    """

    def __init__(
        self,
        url: str,
        *,
        http: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> StorageClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def upload(self, fileobj: BinaryIO | HashingReader, filename: str, size: int) -> str:
        """Upload file content and return the storage service's archive id.

        The body is streamed from ``fileobj``; it is read exactly once.
        """
        logger.debug("Uploading %s (%d bytes) to %s", filename, size, self.url)
        try:
            response = self._http.post(
                f"{self.url}{ARCHIVE_PATH}",
                files={"uploadfile": (filename, fileobj, "application/octet-stream")},
                headers={"X-File-Size": str(size)},
            )
        except httpx.HTTPError as exc:
            raise StorageError(f"upload file {filename}", exc) from exc

        if response.status_code >= 400:
            raise StorageError(
                f"upload file {filename}",
                f"HTTP {response.status_code}: {response.text.strip()}",
            )

        try:
            archive_id = response.json()["id"]
        except (ValueError, KeyError, TypeError) as exc:
            raise StorageError(
                f"upload file {filename}", f"unexpected response: {response.text!r}"
            ) from exc

        logger.info("Uploaded %s as archive %s", filename, archive_id)
        return archive_id

    def get_url(self, archive_id: str) -> str:
        """Return the download URL for an archive id."""
        return f"{self.url}{ARCHIVE_PATH}?id={quote(archive_id, safe='')}"
