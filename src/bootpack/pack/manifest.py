"""Manifest building: raw file records to named bundle entries.

A single pass over the collected records:
- drops hidden files (base name starting with ".")
- names every remaining file ``<package path>/<relative path>``
- loads the runtime library descriptor and resolves the entry point
- refuses a second descriptor and any repeated bundle name

Whether a missing descriptor is an error depends on the caller (listing
mode tolerates it), so ``build_manifest`` only reports what it found.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from bootpack.core.constants import DESCRIPTOR_FILENAME, HIDDEN_FILE_PREFIX
from bootpack.core.paths import join_bundle_name
from bootpack.exceptions import BundleNameCollisionError, DuplicateDescriptorError
from bootpack.pack.descriptor import load_core_config
from bootpack.pack.entry import resolve_entry_point
from bootpack.pack.models import (
    BundleEntry,
    CoreConfig,
    EntryPoint,
    Manifest,
    RawFileRecord,
)

logger = logging.getLogger(__name__)


def is_hidden(path: str) -> bool:
    return os.path.basename(path).startswith(HIDDEN_FILE_PREFIX)


def build_manifest(
    records: Iterable[RawFileRecord],
    *,
    system_entry: str | None = None,
) -> Manifest:
    """Build bundle entries and resolve the core config in one scan.

    Args:
        records: Collected file records, in manifest order
        system_entry: Explicit system entry bundle name, if any

    Returns:
        Manifest with entries plus the descriptor results (None if absent)

    Raises:
        DuplicateDescriptorError: If a second descriptor is found
        InvalidDescriptorError: If the descriptor cannot be parsed
        BundleNameCollisionError: If two files share a bundle name
    """
    entries: list[BundleEntry] = []
    sources_by_name: dict[str, str] = {}
    core_config: CoreConfig | None = None
    entry_point: EntryPoint | None = None
    descriptor_dir: str | None = None

    for record in records:
        if is_hidden(record.path):
            continue

        if os.path.basename(record.path) == DESCRIPTOR_FILENAME:
            found_dir = os.path.dirname(record.path)
            if core_config is not None:
                raise DuplicateDescriptorError(descriptor_dir or "", found_dir)

            core_config = load_core_config(record.path)
            descriptor_dir = found_dir
            entry_point = resolve_entry_point(
                record.path,
                record.owner_directory,
                record.package_path,
                system_entry,
            )
            logger.info(f'System entry point "{entry_point.name}"')

        relative_path = os.path.relpath(record.path, record.owner_directory)
        name = join_bundle_name(record.package_path, relative_path)
        if name in sources_by_name:
            raise BundleNameCollisionError(name, sources_by_name[name], record.path)
        sources_by_name[name] = record.path

        entries.append(
            BundleEntry(path=record.path, relative_path=relative_path, name=name)
        )

    if entry_point is not None and not system_entry and entry_point.name not in sources_by_name:
        logger.warning(f'System entry point "{entry_point.name}" is not part of the bundle')

    return Manifest(
        entries=tuple(entries),
        core_config=core_config,
        entry_point=entry_point,
        descriptor_dir=descriptor_dir,
    )
