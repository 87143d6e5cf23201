"""fissionpkg CLI — Typer-based command-line interface.

Provides the ``fission-pkg`` command with subcommands for creating,
inspecting, listing, deleting and downloading packages.

All output uses Rich for formatted terminal display.
"""
