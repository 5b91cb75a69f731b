"""Bundle emission: hand the manifest to the writer and wait for completion."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from bootpack.core.constants import DEFAULT_APP_INDEX_NAME
from bootpack.pack.models import Bundle, CoreConfig, Manifest
from bootpack.pack.writer import Writer, write_initrd

logger = logging.getLogger(__name__)


def _write(
    output: Path,
    manifest: Manifest,
    core_config: CoreConfig,
    index_name: str,
    app_index_name: str,
    writer: Writer,
) -> None:
    with open(output, "wb") as stream:
        writer(stream, manifest.entries, core_config, index_name, app_index_name)


async def emit_bundle(
    manifest: Manifest,
    output: str | Path,
    *,
    app_index_name: str = DEFAULT_APP_INDEX_NAME,
    writer: Writer = write_initrd,
) -> Bundle:
    """Write *manifest* to *output* and return the bundle metadata.

    The manifest must carry a core config and entry point. Errors raised
    while opening, writing or closing the output propagate unchanged and
    a partially written file is left in place.
    """
    if manifest.core_config is None or manifest.entry_point is None:
        raise ValueError("cannot emit a bundle without a runtime library config")

    destination = Path(output).resolve()
    index_name = manifest.entry_point.name
    logger.debug(f"Writing {len(manifest.entries)} entries to {destination}")
    await asyncio.to_thread(
        _write,
        destination,
        manifest,
        manifest.core_config,
        index_name,
        app_index_name,
        writer,
    )

    return Bundle(
        entries=manifest.entries,
        index_name=index_name,
        app_index_name=app_index_name,
        output=destination,
    )
