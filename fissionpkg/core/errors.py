"""Error types raised by fissionpkg operations.

Library code raises; it never exits the process.  The CLI is the single
place that turns a ``FissionError`` into the one-line stderr message and
exit status 1.
"""

from __future__ import annotations

from pydantic import ValidationError


def describe_validation_error(exc: ValidationError) -> str:
    """Condense a pydantic ``ValidationError`` to ``<field>: <reason>`` on one line."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "body"
    extra = exc.error_count() - 1
    suffix = f" (and {extra} more)" if extra else ""
    return f"{location}: {first['msg']}{suffix}"


class FissionError(RuntimeError):
    """Base class for every failure surfaced by fissionpkg.

    Parameters
    ----------
    action:
        What was being attempted, phrased so that ``"Failed to <action>"``
        reads naturally (e.g. ``"stat ./hello.txt"``).
    cause:
        The underlying error message, if any.
    """

    def __init__(
        self, action: str, cause: object | None = None, *, message: str | None = None
    ) -> None:
        self.action = action
        self.cause = cause
        if message is None:
            message = f"Failed to {action}"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message)


class ConfigurationError(FissionError):
    """Raised when client configuration is missing or invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("configure client", message=message)


class ArchiveError(FissionError):
    """Raised when a local file cannot be turned into an archive."""


class ControllerError(FissionError):
    """Raised when the controller API rejects or fails a request."""

    def __init__(
        self, action: str, cause: object | None = None, *, status_code: int | None = None
    ) -> None:
        self.status_code = status_code
        super().__init__(action, cause)


class StorageError(FissionError):
    """Raised when the storage service upload fails."""
