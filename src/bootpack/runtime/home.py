"""Global runtime home directory and kernel cache location.

Provides the canonical functions for locating:
- The user-global ~/.bootpack/ directory holding config.yaml (cross-platform)
- The base directory under which fetched kernels are cached
"""

from __future__ import annotations

import os
from pathlib import Path


def _is_windows() -> bool:
    """Return True when running on Windows."""
    return os.name == "nt"


def get_bootpack_home() -> Path:
    """Return the path to the user-global ~/.bootpack/ directory.

    Resolution order:
    1. BOOTPACK_HOME environment variable (all platforms)
    2. ~/.bootpack/ on macOS/Linux (Path.home() / ".bootpack")
    3. %LOCALAPPDATA%\\bootpack\\ on Windows (via platformdirs)

    Returns:
        Path: Absolute path to the global runtime directory.
    """
    if env_home := os.environ.get("BOOTPACK_HOME"):
        return Path(env_home)

    if _is_windows():
        from platformdirs import user_data_dir

        return Path(user_data_dir("bootpack"))

    return Path.home() / ".bootpack"


def home_env_var() -> str:
    """Return the environment variable naming the user's home directory."""
    return "USERPROFILE" if _is_windows() else "HOME"


def get_user_base() -> Path:
    """Return the invoking user's home/profile directory.

    Reads ``USERPROFILE`` on Windows and ``HOME`` elsewhere, falling back to
    ``Path.home()`` when the variable is unset or empty.
    """
    if value := os.environ.get(home_env_var()):
        return Path(value)
    return Path.home()


def get_install_base() -> Path:
    """Return the directory of the installed bootpack package."""
    return Path(__file__).resolve().parent.parent
