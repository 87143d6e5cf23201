"""fissionpkg data models — all Pydantic v2, all frozen (immutable)."""

from fissionpkg.models.archive import Archive, ArchiveType, Checksum, ChecksumType
from fissionpkg.models.package import (
    DEFAULT_NAMESPACE,
    BuildStatus,
    EnvironmentReference,
    ObjectMeta,
    Package,
    PackageSpec,
    PackageStatus,
)

__all__ = [
    # archives
    "ArchiveType",
    "ChecksumType",
    "Checksum",
    "Archive",
    # packages
    "DEFAULT_NAMESPACE",
    "BuildStatus",
    "EnvironmentReference",
    "PackageSpec",
    "PackageStatus",
    "ObjectMeta",
    "Package",
]
