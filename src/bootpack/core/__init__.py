"""Core helpers shared by the pack and kernel subsystems."""

from .constants import DESCRIPTOR_FILENAME, HIDDEN_FILE_PREFIX
from .paths import join_bundle_name, to_bundle_path

__all__ = [
    "DESCRIPTOR_FILENAME",
    "HIDDEN_FILE_PREFIX",
    "join_bundle_name",
    "to_bundle_path",
]
