"""``fission-pkg`` package commands — create, inspect, list, delete, fetch.

Every command resolves the controller from ``--server`` (falling back to
``FISSION_URL``) and maps any ``FissionError`` to a single line on stderr
and exit status 1.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from fissionpkg.client.controller import ControllerClient, get_client
from fissionpkg.config import ClientConfig, load_config
from fissionpkg.core.archive_builder import fetch_archive
from fissionpkg.core.errors import FissionError
from fissionpkg.core.packages import create_package
from fissionpkg.models.archive import Archive, ArchiveType

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_SERVER_HELP = "Fission controller URL (defaults to $FISSION_URL)."
_NAMESPACE_HELP = "Namespace of the package (defaults to $FISSION_NAMESPACE or 'default')."


@contextmanager
def _controller(server: str | None) -> Iterator[tuple[ControllerClient, ClientConfig]]:
    """Yield a controller client, turning library errors into the exit contract."""
    try:
        settings = load_config()
        with get_client(server or settings.url, timeout=settings.timeout) as client:
            yield client, settings
    except FissionError as exc:
        err_console.print(str(exc), markup=False, soft_wrap=True)
        raise typer.Exit(code=1)


def create_cmd(
    env: str = typer.Option(..., "--env", help="Environment name for the package."),
    src: str = typer.Option("", "--src", help="Source archive file to build."),
    deploy: str = typer.Option("", "--deploy", help="Deployment archive file."),
    buildcmd: str = typer.Option("", "--buildcmd", help="Build command for the builder."),
    desc: str = typer.Option("", "--desc", help="Package description."),
    namespace: str | None = typer.Option(None, "--namespace", help=_NAMESPACE_HELP),
    server: str | None = typer.Option(None, "--server", help=_SERVER_HELP),
) -> None:
    """Create a package from a source and/or deployment archive."""
    if not src and not deploy:
        err_console.print(
            "Need --src or --deploy to create a package.", markup=False, soft_wrap=True
        )
        raise typer.Exit(code=1)

    with _controller(server) as (client, settings):
        meta = create_package(
            client,
            env,
            src_path=src,
            deploy_path=deploy,
            buildcmd=buildcmd,
            description=desc,
            namespace=namespace or settings.namespace,
            literal_size_limit=settings.literal_size_limit,
            notify=lambda message: console.print(message, markup=False, soft_wrap=True),
        )
    console.print(f"Package '{meta.name}' created", markup=False, soft_wrap=True)


def info_cmd(
    name: str = typer.Option(..., "--name", help="Package name."),
    namespace: str | None = typer.Option(None, "--namespace", help=_NAMESPACE_HELP),
    server: str | None = typer.Option(None, "--server", help=_SERVER_HELP),
) -> None:
    """Show a package's environment, archives and build status."""
    with _controller(server) as (client, settings):
        pkg = client.package_get(name, namespace or settings.namespace)

    table = Table(title=f"Package {pkg.metadata.name}", show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Namespace", pkg.metadata.namespace)
    table.add_row("Environment", pkg.spec.environment.name)
    table.add_row("Status", pkg.status.buildstatus.value)
    table.add_row("Source", _describe_archive(pkg.spec.source))
    table.add_row("Deployment", _describe_archive(pkg.spec.deployment))
    if pkg.spec.buildcmd:
        table.add_row("Build command", pkg.spec.buildcmd)
    if pkg.spec.description:
        table.add_row("Description", pkg.spec.description)
    console.print(table)

    if pkg.status.buildlog:
        console.print("[bold]Build log[/bold]")
        console.print(pkg.status.buildlog, markup=False)


def list_cmd(
    server: str | None = typer.Option(None, "--server", help=_SERVER_HELP),
) -> None:
    """List all packages."""
    with _controller(server) as (client, _settings):
        packages = client.package_list()

    if not packages:
        console.print("[dim]No packages found.[/dim]")
        return

    table = Table(title="Packages")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Namespace")
    table.add_column("Environment")
    table.add_column("Build status")
    for pkg in packages:
        table.add_row(
            pkg.metadata.name,
            pkg.metadata.namespace,
            pkg.spec.environment.name,
            pkg.status.buildstatus.value,
        )
    console.print(table)


def delete_cmd(
    name: str = typer.Option(..., "--name", help="Package name."),
    namespace: str | None = typer.Option(None, "--namespace", help=_NAMESPACE_HELP),
    server: str | None = typer.Option(None, "--server", help=_SERVER_HELP),
) -> None:
    """Delete a package."""
    with _controller(server) as (client, settings):
        client.package_delete(name, namespace or settings.namespace)
    console.print(f"Package '{name}' deleted", markup=False, soft_wrap=True)


def getsrc_cmd(
    name: str = typer.Option(..., "--name", help="Package name."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file."),
    namespace: str | None = typer.Option(None, "--namespace", help=_NAMESPACE_HELP),
    server: str | None = typer.Option(None, "--server", help=_SERVER_HELP),
) -> None:
    """Download a package's source archive."""
    _get_archive(name, "source", output, namespace, server)


def getdeploy_cmd(
    name: str = typer.Option(..., "--name", help="Package name."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file."),
    namespace: str | None = typer.Option(None, "--namespace", help=_NAMESPACE_HELP),
    server: str | None = typer.Option(None, "--server", help=_SERVER_HELP),
) -> None:
    """Download a package's deployment archive."""
    _get_archive(name, "deployment", output, namespace, server)


def _get_archive(
    name: str,
    which: str,
    output: Path | None,
    namespace: str | None,
    server: str | None,
) -> None:
    with _controller(server) as (client, settings):
        pkg = client.package_get(name, namespace or settings.namespace)
        archive: Archive | None = getattr(pkg.spec, which)
        if archive is None:
            err_console.print(
                f"Package '{name}' has no {which} archive", markup=False, soft_wrap=True
            )
            raise typer.Exit(code=1)
        data = fetch_archive(archive, http=client.http)

    if output is None:
        typer.echo(data, nl=False)
        return
    try:
        output.write_bytes(data)
    except OSError as exc:
        err_console.print(f"Failed to write {output}: {exc}", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)


def _describe_archive(archive: Archive | None) -> str:
    if archive is None:
        return "-"
    if archive.type == ArchiveType.LITERAL:
        return f"literal ({archive.size_hint} bytes)"
    checksum = archive.checksum.sum if archive.checksum else "-"
    return f"{archive.url} (sha256 {checksum})"
