"""``bootpack fetch-kernel`` command."""

from __future__ import annotations

from functools import partial

import typer

from bootpack.cli.helpers import configure_logging, console, fail
from bootpack.exceptions import BootpackError
from bootpack.kernel.cache import resolve_kernel
from bootpack.kernel.fetch import fetch_kernel


def fetch_kernel_command(
    version: str = typer.Argument(..., help="Kernel version to resolve"),
    local: bool = typer.Option(
        False,
        "--local",
        help="Cache next to the installed package instead of the home directory",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Show progress; pass twice for debug output",
    ),
) -> None:
    """Print the path of a kernel build, downloading it when not cached."""
    configure_logging(verbose)

    fetcher = partial(fetch_kernel, show_progress=True, console=console)
    try:
        path = resolve_kernel(version, local, fetcher=fetcher)
    except (BootpackError, OSError) as e:
        raise fail(e)

    typer.echo(str(path))
