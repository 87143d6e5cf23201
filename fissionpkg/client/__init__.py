"""HTTP clients for the controller and the storage service it proxies."""

from fissionpkg.client.controller import ControllerClient, get_client, normalize_server_url
from fissionpkg.client.storage import StorageClient

__all__ = ["ControllerClient", "StorageClient", "get_client", "normalize_server_url"]
