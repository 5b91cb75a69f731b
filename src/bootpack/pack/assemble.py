"""The ``pack`` operation: collect, scan, then list or emit."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from bootpack.core.constants import DEFAULT_APP_INDEX_NAME, DEFAULT_OUTPUT
from bootpack.exceptions import MissingDescriptorError
from bootpack.pack.collector import collect_files
from bootpack.pack.emitter import emit_bundle
from bootpack.pack.manifest import build_manifest
from bootpack.pack.models import PackResult, SourceDirectory
from bootpack.pack.walker import Walker, walk_directory
from bootpack.pack.writer import Writer, write_initrd


@dataclass(frozen=True)
class PackOptions:
    """Options for a single ``pack`` run.

    Attributes:
        dirs: Source directories to merge
        output: Bundle file to write
        system_entry: Explicit system entry bundle name
        app_entry: Application entry name handed to the writer
        list_files: Only scan and report entries, write nothing
        ignore: Ignore patterns applied to every directory
    """

    dirs: Sequence[SourceDirectory]
    output: str | Path = DEFAULT_OUTPUT
    system_entry: str | None = None
    app_entry: str | None = None
    list_files: bool = False
    ignore: Sequence[str] = field(default_factory=tuple)


async def pack(
    opts: PackOptions,
    *,
    walker: Walker = walk_directory,
    writer: Writer = write_initrd,
) -> PackResult:
    """Package source directories into an initrd bundle.

    In listing mode the full scan still runs, so duplicate or broken
    descriptors and name collisions are reported, but a missing descriptor
    is tolerated and nothing is written.

    Raises:
        EnumerationError: A source directory could not be walked
        DescriptorError: Descriptor duplicated, invalid, or (outside listing
            mode) missing
        BundleNameCollisionError: Two files share a bundle name
        OSError: The output could not be written
    """
    records = await collect_files(opts.dirs, opts.ignore, walker=walker)
    manifest = build_manifest(records, system_entry=opts.system_entry)

    if opts.list_files:
        return PackResult(entries=manifest.entries, listed=True)

    if manifest.core_config is None or manifest.entry_point is None:
        raise MissingDescriptorError()

    bundle = await emit_bundle(
        manifest,
        opts.output,
        app_index_name=opts.app_entry or DEFAULT_APP_INDEX_NAME,
        writer=writer,
    )
    return PackResult(entries=manifest.entries, bundle=bundle)
