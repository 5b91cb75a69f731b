"""Kernel build resolution and caching."""

from .cache import KernelCachePaths, get_cache_root, kernel_cache_paths, resolve_kernel
from .fetch import fetch_kernel

__all__ = [
    "KernelCachePaths",
    "fetch_kernel",
    "get_cache_root",
    "kernel_cache_paths",
    "resolve_kernel",
]
