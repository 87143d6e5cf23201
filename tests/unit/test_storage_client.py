"""Tests for the storage service client."""

from __future__ import annotations

import io

import httpx
import pytest

from fissionpkg.client.storage import StorageClient
from fissionpkg.core.errors import StorageError

STORAGE_URL = "http://controller.test/proxy/storage"


class TestStorageClient:
    def test_upload_returns_id(self, http_client, fake_fission):
        storage = StorageClient(STORAGE_URL, http=http_client)
        archive_id = storage.upload(io.BytesIO(b"payload"), "code.zip", 7)
        assert archive_id == "archive-1"
        assert fake_fission.uploads["archive-1"] == b"payload"

    def test_upload_uses_uploadfile_field(self, http_client, fake_fission):
        StorageClient(STORAGE_URL, http=http_client).upload(io.BytesIO(b"x"), "code.zip", 1)
        body = fake_fission.requests[0].content
        assert b'name="uploadfile"' in body
        assert b'filename="code.zip"' in body

    def test_get_url_quotes_id(self):
        storage = StorageClient(STORAGE_URL + "/")
        assert storage.get_url("a b/c") == f"{STORAGE_URL}/v1/archive?id=a%20b%2Fc"
        storage.close()

    def test_error_status(self, http_client, fake_fission):
        fake_fission.fail_with[("POST", "/proxy/storage/v1/archive")] = 503
        storage = StorageClient(STORAGE_URL, http=http_client)
        with pytest.raises(StorageError, match="HTTP 503"):
            storage.upload(io.BytesIO(b"x"), "code.zip", 1)

    def test_malformed_response(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="ok"))
        with httpx.Client(transport=transport) as http:
            storage = StorageClient(STORAGE_URL, http=http)
            with pytest.raises(StorageError, match="unexpected response"):
                storage.upload(io.BytesIO(b"x"), "code.zip", 1)
