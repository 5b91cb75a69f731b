"""System entry point resolution."""

from __future__ import annotations

import os
from pathlib import Path

from bootpack.core.constants import LOADER_RELATIVE_PARTS
from bootpack.core.paths import join_bundle_name
from bootpack.pack.models import EntryPoint


def resolve_entry_point(
    descriptor_path: str,
    owner_directory: str,
    package_path: str,
    system_entry: str | None = None,
) -> EntryPoint:
    """Resolve where the image starts executing.

    An explicit *system_entry* is already a bundle name and is used as given.
    Otherwise the loader next to the descriptor (``js/__loader.js``) is used
    and its name derived the same way as any other bundle entry.
    """
    if system_entry:
        return EntryPoint(path=Path(system_entry).resolve(), name=system_entry)

    loader = os.path.join(os.path.dirname(descriptor_path), *LOADER_RELATIVE_PARTS)
    relative = os.path.relpath(loader, owner_directory)
    return EntryPoint(
        path=Path(loader).resolve(),
        name=join_bundle_name(package_path, relative),
    )
