"""Bootpack command line interface."""

from __future__ import annotations

from typing import Optional

import typer

from bootpack import __version__
from bootpack.cli.commands import fetch_kernel_command, pack_command
from bootpack.cli.helpers import console

app = typer.Typer(
    name="bootpack",
    help="Assemble initrd bundles and manage cached kernel builds",
    add_completion=False,
    no_args_is_help=True,
)

app.command("pack")(pack_command)
app.command("fetch-kernel")(fetch_kernel_command)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"bootpack {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Assemble initrd bundles and manage cached kernel builds."""


def main():
    app()


__all__ = ["app", "main"]
