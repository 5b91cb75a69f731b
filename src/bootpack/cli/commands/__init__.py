"""CLI command modules for bootpack."""

from .fetch_kernel import fetch_kernel_command
from .pack import pack_command

__all__ = ["fetch_kernel_command", "pack_command"]
