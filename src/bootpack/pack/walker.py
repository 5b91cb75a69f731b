"""Recursive directory walker used to enumerate bundle sources."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Sequence
from typing import Callable

from bootpack.exceptions import EnumerationError

Walker = Callable[[str, Sequence[str]], list[str]]


def is_ignored(name: str, relative: str, patterns: Sequence[str]) -> bool:
    """Return True if a base name or slash-separated relative path matches a pattern."""
    for pattern in patterns:
        if fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(relative, pattern):
            return True
    return False


def walk_directory(directory: str, ignore: Sequence[str] = ()) -> list[str]:
    """Return absolute paths of all files under *directory*, sorted.

    Directories matching an ignore pattern are pruned; files matching one
    are skipped. Symlinked directories are not followed.

    Raises:
        EnumerationError: If the directory is missing or any walk step fails.
    """
    root = os.path.abspath(directory)
    if not os.path.isdir(root):
        raise EnumerationError(directory, "not a directory")

    def _raise(err: OSError) -> None:
        raise EnumerationError(directory, str(err)) from err

    files: list[str] = []
    for current, dirnames, filenames in os.walk(root, onerror=_raise):
        rel_dir = os.path.relpath(current, root)
        prefix = "" if rel_dir == os.curdir else rel_dir.replace(os.sep, "/") + "/"
        dirnames[:] = [d for d in dirnames if not is_ignored(d, prefix + d, ignore)]
        for name in filenames:
            if is_ignored(name, prefix + name, ignore):
                continue
            files.append(os.path.join(current, name))

    files.sort()
    return files
