"""Shared test fixtures for fissionpkg.

HTTP never leaves the process: ``FakeFission`` answers both the controller
package API and the proxied storage service through ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest

from fissionpkg.client.controller import ControllerClient

SERVER_URL = "http://controller.test"


class FakeFission:
    """In-memory stand-in for a Fission controller and its storage proxy."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.uploads: dict[str, bytes] = {}
        self.upload_headers: list[httpx.Headers] = []
        self.packages: dict[tuple[str, str], dict] = {}
        self.fail_with: dict[tuple[str, str], int] = {}
        self.replies: dict[tuple[str, str], httpx.Response] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = request.read()
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.fail_with:
            return httpx.Response(self.fail_with[key], text="injected failure")
        if key in self.replies:
            return self.replies[key]

        path = request.url.path
        if path == "/proxy/storage/v1/archive":
            if request.method == "POST":
                archive_id = f"archive-{len(self.uploads) + 1}"
                self.uploads[archive_id] = _multipart_payload(body)
                self.upload_headers.append(request.headers)
                return httpx.Response(200, json={"id": archive_id})
            archive_id = request.url.params["id"]
            if archive_id not in self.uploads:
                return httpx.Response(404, text="archive not found")
            return httpx.Response(200, content=self.uploads[archive_id])

        if path == "/v1/packages":
            if request.method == "POST":
                pkg = json.loads(body)
                meta = pkg["metadata"]
                self.packages[(meta["namespace"], meta["name"])] = pkg
                return httpx.Response(
                    201, json={**meta, "resourceVersion": "1", "uid": "uid-1"}
                )
            return httpx.Response(200, json=list(self.packages.values()))

        if path.startswith("/v1/packages/"):
            name = path.rsplit("/", 1)[-1]
            namespace = request.url.params.get("namespace", "default")
            pkg = self.packages.get((namespace, name))
            if pkg is None:
                return httpx.Response(404, text=f"package {name} not found")
            if request.method == "DELETE":
                del self.packages[(namespace, name)]
                return httpx.Response(200)
            return httpx.Response(200, json=pkg)

        return httpx.Response(404, text="no route")

    @property
    def created(self) -> list[dict]:
        return list(self.packages.values())


def _multipart_payload(body: bytes) -> bytes:
    """Extract the file part from a recorded multipart upload body."""
    _headers, _, rest = body.partition(b"\r\n\r\n")
    return rest.rsplit(b"\r\n--", 1)[0]


@pytest.fixture
def fake_fission() -> FakeFission:
    return FakeFission()


@pytest.fixture
def http_client(fake_fission: FakeFission) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(fake_fission.handler))
    yield client
    client.close()


@pytest.fixture
def controller(http_client: httpx.Client) -> ControllerClient:
    """Provide a ControllerClient wired to the fake controller."""
    return ControllerClient(SERVER_URL, http=http_client)


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory fixture: write a file into the temp directory."""

    def _factory(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _factory
