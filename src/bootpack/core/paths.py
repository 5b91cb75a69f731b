"""Bundle path normalization."""

from __future__ import annotations

import sys


def to_bundle_path(path: str, platform: str | None = None) -> str:
    """Return *path* using forward slashes, as stored inside a bundle.

    Windows paths have their backslashes converted; on every other
    platform the path is returned unchanged (a backslash is a legal
    filename character there).

    Args:
        path: Filesystem path, usually relative to a source directory.
        platform: Target platform name in ``sys.platform`` form. Defaults
            to the running interpreter's platform.
    """
    if platform is None:
        platform = sys.platform
    if platform == "win32":
        return path.replace("\\", "/")
    return path


def join_bundle_name(package_path: str, relative_path: str, platform: str | None = None) -> str:
    """Build the bundle name of a file from its package path and relative path."""
    return f"{package_path}/{to_bundle_path(relative_path, platform)}"
