"""Bootpack - initrd bundle assembly and kernel cache tooling.

Usage:
    bootpack pack ./app:app ./node_modules/runtimecore:core -o .initrd
    bootpack pack ./app --list
    bootpack fetch-kernel 0.2.14
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
