"""Initrd bundle assembly."""

from .assemble import PackOptions, pack
from .collector import collect_files
from .emitter import emit_bundle
from .manifest import build_manifest
from .models import (
    Bundle,
    BundleEntry,
    CoreConfig,
    EntryPoint,
    Manifest,
    PackResult,
    RawFileRecord,
    SourceDirectory,
)

__all__ = [
    "Bundle",
    "BundleEntry",
    "CoreConfig",
    "EntryPoint",
    "Manifest",
    "PackOptions",
    "PackResult",
    "RawFileRecord",
    "SourceDirectory",
    "build_manifest",
    "collect_files",
    "emit_bundle",
    "pack",
]
