"""Filesystem helpers shared by the test suite."""

from __future__ import annotations

import json
from pathlib import Path


def write_file(root: Path, relative: str, content: str = "") -> Path:
    """Create ``root/relative`` (and parents) with *content*."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_descriptor(root: Path, relative: str = "runtimecorelib.json", **fields) -> Path:
    """Write a runtime library descriptor with a default ``kernelVersion``."""
    data = {"kernelVersion": "1.2.0", **fields}
    return write_file(root, relative, json.dumps(data))
