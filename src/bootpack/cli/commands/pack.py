"""``bootpack pack`` command."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer

from bootpack.cli.helpers import configure_logging, console, fail, parse_source
from bootpack.core.constants import DEFAULT_OUTPUT
from bootpack.exceptions import BootpackError
from bootpack.pack.assemble import PackOptions, pack
from bootpack.runtime.settings import load_settings


def pack_command(
    sources: List[str] = typer.Argument(
        ...,
        metavar="SOURCE...",
        help="Source directories as DIR or DIR:PACKAGE_PATH",
    ),
    output: str = typer.Option(
        DEFAULT_OUTPUT,
        "--output",
        "-o",
        help="Bundle file to write",
    ),
    entry: Optional[str] = typer.Option(
        None,
        "--entry",
        help="System entry bundle name (defaults to the runtime library loader)",
    ),
    app_entry: Optional[str] = typer.Option(
        None,
        "--app-entry",
        help="Application entry name passed to the image (defaults to /)",
    ),
    list_files: bool = typer.Option(
        False,
        "--list",
        help="List the files that would be packed and exit",
    ),
    ignore: List[str] = typer.Option(
        [],
        "--ignore",
        help="Extra ignore pattern (repeatable)",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Show progress; pass twice for debug output",
    ),
) -> None:
    """Package source directories into an initrd bundle."""
    configure_logging(verbose)

    try:
        settings = load_settings()
        opts = PackOptions(
            dirs=[parse_source(source) for source in sources],
            output=output,
            system_entry=entry,
            app_entry=app_entry,
            list_files=list_files,
            ignore=[*settings.ignore, *ignore],
        )
        result = asyncio.run(pack(opts))
    except (BootpackError, OSError) as e:
        raise fail(e)

    if result.listed:
        for bundle_entry in result.entries:
            typer.echo(bundle_entry.relative_path)
        return

    bundle = result.bundle
    console.print(
        f"[green]Packed[/green] {len(bundle.entries)} files into [bold]{bundle.output}[/bold]"
    )
    console.print(f"[cyan]System entry:[/cyan] {bundle.index_name}")
    console.print(f"[cyan]App entry:[/cyan] {bundle.app_index_name}")
