"""Kernel cache resolution.

Fetched kernels live in ``<base>/.kernel-cache/kernel.<version>``, where
``<base>`` is the installed package directory for local resolution and the
user's home/profile directory otherwise. A cached file is trusted as-is;
only a missing one triggers a fetch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from bootpack.core.constants import DOWNLOAD_SUFFIX, KERNEL_ARTIFACT_NAME, KERNEL_CACHE_DIRNAME
from bootpack.exceptions import InvalidKernelVersionError
from bootpack.runtime.home import get_install_base, get_user_base

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, bool], Path]


@dataclass(frozen=True)
class KernelCachePaths:
    """Cache locations for one kernel version."""

    root: Path
    result: Path
    download: Path


def validate_version(version: str) -> str:
    """Return *version* if it is safe to embed in a cache file name."""
    if not version or version.startswith(".") or "/" in version or "\\" in version:
        raise InvalidKernelVersionError(version)
    return version


def get_cache_root(local: bool = False) -> Path:
    base = get_install_base() if local else get_user_base()
    return (base / KERNEL_CACHE_DIRNAME).resolve()


def kernel_cache_paths(version: str, local: bool = False) -> KernelCachePaths:
    """Return the cache root and versioned file names for *version*."""
    validate_version(version)
    root = get_cache_root(local)
    result = root / f"{KERNEL_ARTIFACT_NAME}.{version}"
    return KernelCachePaths(
        root=root,
        result=result,
        download=root / f"{result.name}{DOWNLOAD_SUFFIX}",
    )


def resolve_kernel(version: str, local: bool = False, *, fetcher: Fetcher | None = None) -> Path:
    """Return a local path to the kernel build *version*.

    Args:
        version: Kernel version identifier
        local: Cache next to the installed package instead of the user's home
        fetcher: Download function ``(version, local) -> path``; defaults to
            :func:`bootpack.kernel.fetch.fetch_kernel`

    Returns:
        Path to the cached kernel file

    Raises:
        InvalidKernelVersionError: If *version* cannot name a cache file
        KernelFetchError: Propagated unchanged from the default fetcher
    """
    paths = kernel_cache_paths(version, local)
    paths.root.mkdir(parents=True, exist_ok=True)

    if paths.result.is_file():
        logger.info(f"Using cached kernel {paths.result}")
        return paths.result

    if paths.download.is_file():
        logger.debug(f"Removing incomplete download {paths.download}")
        paths.download.unlink()

    if fetcher is None:
        from bootpack.kernel.fetch import fetch_kernel

        fetcher = fetch_kernel

    logger.info(f"Kernel {version} not cached, fetching")
    return fetcher(version, local)
