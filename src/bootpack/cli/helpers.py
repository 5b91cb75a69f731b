"""Shared console, logging and argument helpers for the CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from bootpack.pack.models import SourceDirectory

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: int = 0) -> logging.Logger:
    """Route the ``bootpack`` logger through rich.

    Without ``--verbose`` only warnings are shown; one ``-v`` shows progress
    and two show debug detail.
    """
    level = logging.WARNING
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO

    logger = logging.getLogger("bootpack")
    logger.setLevel(level)
    logger.propagate = False

    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


def _is_drive_prefix(value: str) -> bool:
    return len(value) == 1 and value.isalpha()


def parse_source(value: str) -> SourceDirectory:
    """Parse a ``DIR`` or ``DIR:PACKAGE_PATH`` argument.

    A single-letter prefix before the colon is treated as a Windows drive.
    Package paths may be nested (``lib/core``) but always use ``/``.
    """
    directory, sep, package_path = value.rpartition(":")
    if not sep or not directory or _is_drive_prefix(directory):
        directory, package_path = value, ""
    if not directory:
        raise typer.BadParameter(f"missing directory in {value!r}")
    if "\\" in package_path:
        raise typer.BadParameter(f"package path in {value!r} must use / separators")
    return SourceDirectory(directory=Path(directory), package_path=package_path)


def fail(message: object) -> typer.Exit:
    """Print an error and return the exit to raise."""
    console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(1)
