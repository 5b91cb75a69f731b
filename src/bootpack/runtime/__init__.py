"""Runtime home discovery and user settings."""

from .home import get_bootpack_home, get_install_base, get_user_base
from .settings import BootpackSettings, load_settings

__all__ = [
    "BootpackSettings",
    "get_bootpack_home",
    "get_install_base",
    "get_user_base",
    "load_settings",
]
