"""Main Typer application — registers the package commands.

Entry point: ``fission-pkg`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from fissionpkg.cli.commands.package import (
    create_cmd,
    delete_cmd,
    err_console,
    getdeploy_cmd,
    getsrc_cmd,
    info_cmd,
    list_cmd,
)
from fissionpkg.config import load_config
from fissionpkg.core.errors import ConfigurationError

app = typer.Typer(
    name="fission-pkg",
    help="Create and manage Fission packages.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="create", help="Create a package from source and/or deployment files.")(create_cmd)
app.command(name="info", help="Show package details and build status.")(info_cmd)
app.command(name="list", help="List packages.")(list_cmd)
app.command(name="delete", help="Delete a package.")(delete_cmd)
app.command(name="getsrc", help="Download a package's source archive.")(getsrc_cmd)
app.command(name="getdeploy", help="Download a package's deployment archive.")(getdeploy_cmd)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Fission package client."""
    try:
        settings = load_config()
    except ConfigurationError as exc:
        err_console.print(str(exc), markup=False, soft_wrap=True)
        raise typer.Exit(code=1)

    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
