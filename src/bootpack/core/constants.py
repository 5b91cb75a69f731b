"""Shared constants for bundle assembly and the kernel cache."""

from __future__ import annotations

# Runtime library descriptor that marks the core sources inside an input tree.
DESCRIPTOR_FILENAME = "runtimecorelib.json"

# Files whose base name starts with this marker never enter a bundle.
HIDDEN_FILE_PREFIX = "."

# Loader location relative to the directory holding the descriptor.
LOADER_RELATIVE_PARTS: tuple[str, ...] = ("js", "__loader.js")

DEFAULT_OUTPUT = ".initrd"
DEFAULT_APP_INDEX_NAME = "/"

KERNEL_CACHE_DIRNAME = ".kernel-cache"
KERNEL_ARTIFACT_NAME = "kernel"
DOWNLOAD_SUFFIX = ".download"

DEFAULT_DOWNLOAD_TIMEOUT = 60.0
