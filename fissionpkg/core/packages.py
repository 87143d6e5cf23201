"""Package submission — build archives, pick a build status, create the record.

A package with a source archive is created ``pending``: the build manager
compiles it later and may replace the deployment archive.  A package with
only a deployment archive is created ``succeeded`` and is final as given.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from pathlib import Path

from fissionpkg.client.controller import ControllerClient
from fissionpkg.core.archive_builder import create_archive
from fissionpkg.models.archive import Archive
from fissionpkg.models.package import (
    DEFAULT_NAMESPACE,
    BuildStatus,
    EnvironmentReference,
    ObjectMeta,
    Package,
    PackageSpec,
    PackageStatus,
)

logger = logging.getLogger(__name__)

DEPLOYMENT_OVERWRITE_NOTICE = (
    "Deployment may be overwritten by builder manager after source package compilation"
)


def new_package_name() -> str:
    """Random lowercase package name; uniqueness is probabilistic only."""
    return str(uuid.uuid4()).lower()


def build_status_for(source: Archive | None) -> BuildStatus:
    """``PENDING`` when there is source to build, ``SUCCEEDED`` otherwise."""
    return BuildStatus.PENDING if source is not None else BuildStatus.SUCCEEDED


def create_package(
    controller: ControllerClient,
    env_name: str,
    src_path: Path | str = "",
    deploy_path: Path | str = "",
    buildcmd: str = "",
    description: str = "",
    *,
    namespace: str = DEFAULT_NAMESPACE,
    literal_size_limit: int | None = None,
    notify: Callable[[str], None] | None = None,
) -> ObjectMeta:
    """Create a package from local source and/or deployment files.

    Parameters
    ----------
    controller:
        Controller client the package is submitted to.
    env_name:
        Name of the environment the package targets.
    src_path, deploy_path:
        Local files; an empty value means "not supplied".
    buildcmd:
        Build command for the build manager; omitted when empty.
    description:
        Free-text description stored with the package.
    notify:
        Receives informational messages meant for the user.

    Returns
    -------
    ObjectMeta
        Identity metadata returned by the controller.

    Raises
    ------
    FissionError
        On any file, upload or submission failure.  Archives already
        uploaded are left in storage.
    """
    deployment: Archive | None = None
    source: Archive | None = None

    if deploy_path:
        deployment = create_archive(
            controller, deploy_path, literal_size_limit=literal_size_limit
        )
        if src_path:
            logger.info(DEPLOYMENT_OVERWRITE_NOTICE)
            if notify is not None:
                notify(DEPLOYMENT_OVERWRITE_NOTICE)

    if src_path:
        source = create_archive(controller, src_path, literal_size_limit=literal_size_limit)

    spec = PackageSpec(
        environment=EnvironmentReference(namespace=namespace, name=env_name),
        source=source,
        deployment=deployment,
        buildcmd=buildcmd or "",
        description=description,
    )
    pkg = Package(
        metadata=ObjectMeta(name=new_package_name(), namespace=namespace),
        spec=spec,
        status=PackageStatus(buildstatus=build_status_for(source)),
    )

    logger.debug(
        "Submitting package %s (env=%s, status=%s)",
        pkg.metadata.name,
        env_name,
        pkg.status.buildstatus.value,
    )
    return controller.package_create(pkg)
