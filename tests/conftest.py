from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests.utils import write_descriptor, write_file


@pytest.fixture()
def core_dir(tmp_path: Path) -> Path:
    """A runtime library tree: descriptor, loader and one module."""
    root = tmp_path / "core"
    write_descriptor(root)
    write_file(root, "js/__loader.js", "// loader")
    write_file(root, "js/modules/fs.js", "module.exports = {};")
    return root


@pytest.fixture()
def app_dir(tmp_path: Path) -> Path:
    """An application tree without a descriptor."""
    root = tmp_path / "app"
    write_file(root, "index.js", "console.log('hi');")
    write_file(root, "lib/util.js", "module.exports = {};")
    write_file(root, ".eslintrc", "{}")
    return root


@pytest.fixture()
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME/USERPROFILE and BOOTPACK_HOME at temp dirs."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("BOOTPACK_HOME", str(home / ".bootpack"))
    monkeypatch.delenv("BOOTPACK_KERNEL_URL", raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_bootpack_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees bootpack records in every test."""
    yield
    logger = logging.getLogger("bootpack")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
