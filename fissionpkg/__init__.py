"""fissionpkg: register deployable packages with a Fission controller.

Small files are embedded directly in the package record; larger ones are
uploaded to the controller's storage service and referenced by URL with a
SHA-256 checksum.  A package with source code is created ``pending`` for
the build manager to compile; one with only a deployment archive is
created ``succeeded``.
"""

__version__ = "0.1.0"

from fissionpkg.client.controller import ControllerClient, get_client
from fissionpkg.core.archive_builder import create_archive
from fissionpkg.core.errors import FissionError
from fissionpkg.core.packages import create_package

__all__ = [
    "ControllerClient",
    "FissionError",
    "create_archive",
    "create_package",
    "get_client",
    "__version__",
]
