"""Controller API client — package records.

Wraps a synchronous ``httpx.Client`` behind the handful of package
operations this tool needs.  Every failure is raised as a
``ControllerError``; nothing here exits the process.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from fissionpkg.core.errors import ConfigurationError, ControllerError, describe_validation_error
from fissionpkg.models.package import DEFAULT_NAMESPACE, ObjectMeta, Package

logger = logging.getLogger(__name__)

PACKAGES_PATH = "/v1/packages"
STORAGE_PROXY_PATH = "/proxy/storage"

ModelT = TypeVar("ModelT", bound=BaseModel)


def normalize_server_url(server_url: str) -> str:
    """Return ``server_url`` with an HTTP scheme, defaulting to ``http://``.

    Raises
    ------
    ConfigurationError
        If no URL was given.
    """
    if not server_url:
        raise ConfigurationError("Need --server or FISSION_URL set to your fission server.")
    if server_url.startswith(("http://", "https://")):
        return server_url
    return "http://" + server_url


def get_client(server_url: str, *, timeout: float | None = None) -> ControllerClient:
    """Resolve the server URL and build a controller client for it."""
    return ControllerClient(normalize_server_url(server_url), timeout=timeout)


class ControllerClient:
    """Client for the controller's package API.

    Parameters
    ----------
    url:
        Controller base URL, already carrying its scheme.
    http:
        Optional pre-built ``httpx.Client``; the caller keeps ownership.
        Passing one lets tests inject an ``httpx.MockTransport``.
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
        self.url = url
        self.timeout = timeout
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def http(self) -> httpx.Client:
        """The underlying HTTP client, shared with derived service clients."""
        return self._http

    @property
    def storage_url(self) -> str:
        """Base URL of the storage service proxied by this controller."""
        return self.url.rstrip("/") + STORAGE_PROXY_PATH

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> ControllerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Packages
    # ------------------------------------------------------------------

    def package_create(self, pkg: Package) -> ObjectMeta:
        """Submit a package record; returns the metadata the controller assigned."""
        data = self._request("POST", PACKAGES_PATH, "create package", json=pkg.to_payload())
        return _parse(ObjectMeta, data, "create package")

    def package_get(self, name: str, namespace: str = DEFAULT_NAMESPACE) -> Package:
        data = self._request(
            "GET",
            f"{PACKAGES_PATH}/{name}",
            f"get package {name}",
            params={"namespace": namespace},
        )
        return _parse(Package, data, f"get package {name}")

    def package_list(self) -> list[Package]:
        data = self._request("GET", PACKAGES_PATH, "list packages")
        if data is not None and not isinstance(data, list):
            raise ControllerError("list packages", "unexpected response: expected a list")
        return [_parse(Package, item, "list packages") for item in data or []]

    def package_delete(self, name: str, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._request(
            "DELETE",
            f"{PACKAGES_PATH}/{name}",
            f"delete package {name}",
            params={"namespace": namespace},
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, action: str, **kwargs: Any) -> Any:
        url = self.url.rstrip("/") + path
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ControllerError(action, exc) from exc

        if response.status_code >= 400:
            raise ControllerError(
                action,
                f"HTTP {response.status_code}: {response.text.strip()}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ControllerError(action, f"invalid JSON response: {exc}") from exc


def _parse(model: type[ModelT], data: Any, action: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ControllerError(
            action, f"unexpected response: {describe_validation_error(exc)}"
        ) from exc
