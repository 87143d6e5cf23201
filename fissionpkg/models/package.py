"""Package record models as exchanged with the controller API."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fissionpkg.models.archive import Archive

DEFAULT_NAMESPACE = "default"


class BuildStatus(str, Enum):
    """Build state of a package.

    Packages created by this client start as ``PENDING`` (a source archive
    awaits compilation by the build manager) or ``SUCCEEDED`` (the
    deployment archive is final).  The other states are set server-side.
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NONE = "none"


class EnvironmentReference(BaseModel):
    """Namespace-qualified reference to the environment a package runs in."""

    model_config = ConfigDict(frozen=True)

    namespace: str = DEFAULT_NAMESPACE
    name: str


class PackageSpec(BaseModel):
    """What a package is made of.

    At least one of ``source`` or ``deployment`` is expected for the package
    to be useful; that is not enforced here.
    """

    model_config = ConfigDict(frozen=True)

    environment: EnvironmentReference
    source: Archive | None = None
    deployment: Archive | None = None
    buildcmd: str = ""
    description: str = ""

    @field_validator("source", "deployment", mode="before")
    @classmethod
    def drop_empty_archive(cls, value: object) -> object:
        # Unset archives come back from the controller as zero-valued objects.
        if isinstance(value, dict) and not value.get("type"):
            return None
        return value


class PackageStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    buildstatus: BuildStatus = BuildStatus.NONE
    buildlog: str = ""

    @field_validator("buildstatus", mode="before")
    @classmethod
    def empty_status_is_none(cls, value: object) -> object:
        return value or BuildStatus.NONE


class ObjectMeta(BaseModel):
    """Identity metadata assigned to (or returned for) a package."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str
    namespace: str = DEFAULT_NAMESPACE
    resource_version: str = Field(default="", alias="resourceVersion")
    uid: str = ""
    creation_timestamp: str | None = Field(default=None, alias="creationTimestamp")


class Package(BaseModel):
    """A package record: identity, spec and build status."""

    model_config = ConfigDict(frozen=True)

    metadata: ObjectMeta
    spec: PackageSpec
    status: PackageStatus = PackageStatus()

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready body for the controller's package API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
