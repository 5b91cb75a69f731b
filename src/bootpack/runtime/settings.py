"""User settings for bootpack.

Settings are stored in ~/.bootpack/config.yaml:

    pack:
      ignore: ["*.map", "node_modules"]
    kernel:
      url: "https://example.org/kernels/{version}/kernel"
      timeout: 60

Every key is optional. ``BOOTPACK_KERNEL_URL`` overrides ``kernel.url``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from bootpack.core.constants import DEFAULT_DOWNLOAD_TIMEOUT
from bootpack.exceptions import SettingsError
from bootpack.runtime.home import get_bootpack_home

logger = logging.getLogger(__name__)

KERNEL_URL_ENV_VAR = "BOOTPACK_KERNEL_URL"


@dataclass
class BootpackSettings:
    """Resolved user settings.

    Attributes:
        ignore: Ignore patterns applied to every source directory
        kernel_url: Download URL template containing ``{version}``, if any
        download_timeout: HTTP timeout for kernel downloads, in seconds
    """

    ignore: list[str] = field(default_factory=list)
    kernel_url: str | None = None
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT


def _section(data: dict[str, Any], key: str, config_file: Path) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise SettingsError(f"Invalid '{key}' section in {config_file}: expected a mapping")
    return section


def load_settings(home: Path | None = None) -> BootpackSettings:
    """Load settings from ``<home>/config.yaml`` and the environment.

    Args:
        home: Runtime home directory (defaults to ``get_bootpack_home()``)

    Returns:
        BootpackSettings instance (defaults if not configured)

    Raises:
        SettingsError: If the file is not valid YAML or has wrongly typed values
    """
    if home is None:
        home = get_bootpack_home()
    config_file = home / "config.yaml"

    settings = BootpackSettings()
    if config_file.exists():
        yaml = YAML(typ="safe")
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.load(f) or {}
        except Exception as e:
            logger.error(f"Failed to load settings: {e}")
            raise SettingsError(f"Invalid YAML in {config_file}: {e}") from e

        if not isinstance(data, dict):
            raise SettingsError(f"Invalid settings in {config_file}: expected a mapping")

        pack_section = _section(data, "pack", config_file)
        ignore = pack_section.get("ignore", [])
        if isinstance(ignore, str):
            ignore = [ignore]
        if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
            raise SettingsError(
                f"Invalid pack.ignore in {config_file}: expected a list of patterns"
            )
        settings.ignore = list(ignore)

        kernel_section = _section(data, "kernel", config_file)
        url = kernel_section.get("url")
        if url is not None and not isinstance(url, str):
            raise SettingsError(f"Invalid kernel.url in {config_file}: expected a string")
        settings.kernel_url = url

        timeout = kernel_section.get("timeout", DEFAULT_DOWNLOAD_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise SettingsError(
                f"Invalid kernel.timeout in {config_file}: expected a positive number"
            )
        settings.download_timeout = float(timeout)
    else:
        logger.debug(f"Settings file not found: {config_file}")

    if env_url := os.environ.get(KERNEL_URL_ENV_VAR):
        settings.kernel_url = env_url

    return settings
