"""Data structures passed between the assembly stages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class SourceDirectory:
    """An input directory and the package path its files are namespaced under."""

    directory: Path
    package_path: str = ""
    ignore: tuple[str, ...] = ()


@dataclass(frozen=True)
class RawFileRecord:
    """A file found under a source directory, before any filtering."""

    path: str
    owner_directory: str
    package_path: str


class CoreConfig(BaseModel):
    """Parsed runtime library descriptor.

    Only ``kernelVersion`` is required; any other descriptor fields are kept
    so the writer can embed the full config.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    kernel_version: str = Field(..., alias="kernelVersion", min_length=1)

    @field_validator("kernel_version", mode="before")
    @classmethod
    def coerce_numeric_version(cls, v: Any) -> Any:
        """Accept numeric versions such as ``2``; zero stays invalid."""
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v:
            return str(v)
        return v


@dataclass(frozen=True)
class BundleEntry:
    """A file as it will be addressable inside the bundle."""

    path: str
    relative_path: str
    name: str


@dataclass(frozen=True)
class EntryPoint:
    """Boot entry point: filesystem location plus bundle name."""

    path: Path
    name: str


@dataclass(frozen=True)
class Manifest:
    """Result of scanning all collected files."""

    entries: tuple[BundleEntry, ...]
    core_config: CoreConfig | None = None
    entry_point: EntryPoint | None = None
    descriptor_dir: str | None = None

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]


@dataclass(frozen=True)
class Bundle:
    """An assembled bundle as handed to the writer."""

    entries: tuple[BundleEntry, ...]
    index_name: str
    app_index_name: str
    output: Path | None = None


@dataclass(frozen=True)
class PackResult:
    """Outcome of a ``pack`` run.

    ``bundle`` is None in listing mode, where nothing is written.
    """

    entries: tuple[BundleEntry, ...]
    listed: bool = False
    bundle: Bundle | None = None
