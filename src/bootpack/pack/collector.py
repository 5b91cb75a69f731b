"""Directory collection for bundle assembly.

Every source directory is walked concurrently in a worker thread. Results
are joined in the order the directories were given, so an unchanged input
tree always produces the same record list. The first walk failure cancels
the outstanding walks and is raised on its own; no partial result escapes.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Sequence

from bootpack.exceptions import EnumerationError
from bootpack.pack.models import RawFileRecord, SourceDirectory
from bootpack.pack.walker import Walker, walk_directory

logger = logging.getLogger(__name__)


async def _enumerate(
    source: SourceDirectory,
    ignore: Sequence[str],
    walker: Walker,
) -> list[RawFileRecord]:
    directory = str(source.directory)
    patterns = [*source.ignore, *ignore]
    try:
        paths = await asyncio.to_thread(walker, directory, patterns)
    except OSError as e:
        raise EnumerationError(directory, str(e)) from e

    logger.info(
        f'Adding directory "{directory}" (at "{source.package_path}")... {len(paths)} files'
    )
    owner = os.path.abspath(directory)
    return [
        RawFileRecord(path=path, owner_directory=owner, package_path=source.package_path)
        for path in paths
    ]


async def collect_files(
    directories: Sequence[SourceDirectory],
    ignore: Sequence[str] = (),
    *,
    walker: Walker = walk_directory,
) -> list[RawFileRecord]:
    """Walk all source directories and tag each file with its owner.

    Args:
        directories: Source directories, in the order their records should appear
        ignore: Global ignore patterns added to each directory's own patterns
        walker: Enumeration function ``(directory, patterns) -> paths``

    Returns:
        Records for every file, grouped by directory in issuance order

    Raises:
        EnumerationError: For the first directory that could not be walked
    """
    tasks = [
        asyncio.create_task(_enumerate(source, ignore, walker))
        for source in directories
    ]
    try:
        per_directory = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Let cancelled tasks settle so none report after the failure.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    records: list[RawFileRecord] = []
    for batch in per_directory:
        records.extend(batch)
    return records
