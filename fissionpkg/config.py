"""Client configuration — env-driven.

Uses pydantic-settings so every option can come from a ``FISSION_*``
environment variable or a ``.env`` file.  Command-line flags take
precedence; this module only supplies the fallbacks.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fissionpkg.core.errors import ConfigurationError, describe_validation_error

# Archives smaller than this are embedded in the package record itself.
ARCHIVE_LITERAL_SIZE_LIMIT = 256 * 1024


class ClientConfig(BaseSettings):
    """Fission client settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FISSION_URL=http://controller.fission:8888
        export FISSION_NAMESPACE=staging
        export FISSION_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FISSION_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Controller base URL, fallback for --server
    url: str = ""
    namespace: str = "default"

    # Archives
    literal_size_limit: int = ARCHIVE_LITERAL_SIZE_LIMIT

    # HTTP; None disables timeouts
    timeout: float | None = None

    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_config() -> ClientConfig:
    """Read settings from the environment.

    Raises
    ------
    ConfigurationError
        If a ``FISSION_*`` value does not parse.
    """
    try:
        return ClientConfig()
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration: {describe_validation_error(exc)}"
        ) from exc
