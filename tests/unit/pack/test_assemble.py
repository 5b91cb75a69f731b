"""Tests for bootpack.pack.assemble, emitter and the default writer."""

from __future__ import annotations

import json
import struct
from pathlib import Path

import pytest

from bootpack.exceptions import (
    BundleEntryTooLargeError,
    BundleNameCollisionError,
    DuplicateDescriptorError,
    EnumerationError,
    InvalidDescriptorError,
    MissingDescriptorError,
)
from bootpack.pack.assemble import PackOptions, pack
from bootpack.pack.collector import collect_files
from bootpack.pack.emitter import emit_bundle
from bootpack.pack.manifest import build_manifest
from bootpack.pack.models import BundleEntry, CoreConfig, Manifest, SourceDirectory
from bootpack.pack.writer import MAGIC, VERSION, write_initrd
from tests.utils import write_descriptor, write_file


class RecordingWriter:
    """Writer stand-in that records its arguments and writes a marker."""

    def __init__(self) -> None:
        self.calls: list[dict] = []

    def __call__(self, stream, entries, core_config, index_name, app_index_name) -> None:
        self.calls.append(
            {
                "names": [e.name for e in entries],
                "kernel_version": core_config.kernel_version,
                "index_name": index_name,
                "app_index_name": app_index_name,
            }
        )
        stream.write(b"bundle")


def read_initrd(path: Path) -> tuple[dict, dict[str, bytes]]:
    """Decode an image produced by ``write_initrd``."""
    data = path.read_bytes()
    assert data[:8] == MAGIC
    offset = 8
    (version,) = struct.unpack_from("<H", data, offset)
    assert version == VERSION
    offset += 2
    (header_len,) = struct.unpack_from("<I", data, offset)
    offset += 4
    header = json.loads(data[offset:offset + header_len])
    offset += header_len
    (count,) = struct.unpack_from("<I", data, offset)
    offset += 4
    files: dict[str, bytes] = {}
    for _ in range(count):
        (name_len,) = struct.unpack_from("<H", data, offset)
        offset += 2
        name = data[offset:offset + name_len].decode("utf-8")
        offset += name_len
        (size,) = struct.unpack_from("<I", data, offset)
        offset += 4
        files[name] = data[offset:offset + size]
        offset += size
    assert offset == len(data)
    return header, files


class TestPack:
    @pytest.mark.asyncio
    async def test_packs_core_and_app(self, core_dir: Path, app_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "out" / ".initrd"
        output.parent.mkdir()
        writer = RecordingWriter()

        result = await pack(
            PackOptions(
                dirs=[SourceDirectory(app_dir, "app"), SourceDirectory(core_dir, "core")],
                output=output,
            ),
            writer=writer,
        )

        assert result.listed is False
        assert result.bundle is not None
        assert result.bundle.index_name == "core/js/__loader.js"
        assert result.bundle.app_index_name == "/"
        assert result.bundle.output == output.resolve()
        assert output.read_bytes() == b"bundle"
        assert writer.calls == [
            {
                "names": [
                    "app/index.js",
                    "app/lib/util.js",
                    "core/js/__loader.js",
                    "core/js/modules/fs.js",
                    "core/runtimecorelib.json",
                ],
                "kernel_version": "1.2.0",
                "index_name": "core/js/__loader.js",
                "app_index_name": "/",
            }
        ]

    @pytest.mark.asyncio
    async def test_app_entry_is_passed_to_writer(self, core_dir: Path, tmp_path: Path) -> None:
        writer = RecordingWriter()

        result = await pack(
            PackOptions(
                dirs=[SourceDirectory(core_dir, "core")],
                output=tmp_path / "img",
                app_entry="/app/index.js",
            ),
            writer=writer,
        )

        assert result.bundle is not None
        assert result.bundle.app_index_name == "/app/index.js"
        assert writer.calls[0]["app_index_name"] == "/app/index.js"

    @pytest.mark.asyncio
    async def test_missing_descriptor_fails(self, app_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "img"
        with pytest.raises(MissingDescriptorError):
            await pack(PackOptions(dirs=[SourceDirectory(app_dir, "app")], output=output))
        assert not output.exists()

    @pytest.mark.asyncio
    async def test_listing_tolerates_missing_descriptor(self, app_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "img"

        result = await pack(
            PackOptions(dirs=[SourceDirectory(app_dir, "app")], output=output, list_files=True)
        )

        assert result.listed is True
        assert result.bundle is None
        assert sorted(e.relative_path for e in result.entries) == ["index.js", str(Path("lib/util.js"))]
        assert not output.exists()

    @pytest.mark.asyncio
    async def test_listing_still_reports_invalid_descriptor(self, tmp_path: Path) -> None:
        root = tmp_path / "core"
        write_file(root, "runtimecorelib.json", "{}")

        with pytest.raises(InvalidDescriptorError):
            await pack(PackOptions(dirs=[SourceDirectory(root, "core")], list_files=True))

    @pytest.mark.asyncio
    async def test_listing_still_reports_duplicate_descriptor(self, tmp_path: Path) -> None:
        write_descriptor(tmp_path / "a")
        write_descriptor(tmp_path / "b")

        with pytest.raises(DuplicateDescriptorError):
            await pack(
                PackOptions(
                    dirs=[SourceDirectory(tmp_path / "a", "a"), SourceDirectory(tmp_path / "b", "b")],
                    list_files=True,
                )
            )

    @pytest.mark.asyncio
    async def test_collision_across_directories(self, core_dir: Path, tmp_path: Path) -> None:
        other = tmp_path / "other"
        write_file(other, "js/__loader.js")
        output = tmp_path / "img"

        with pytest.raises(BundleNameCollisionError):
            await pack(
                PackOptions(
                    dirs=[SourceDirectory(core_dir, "core"), SourceDirectory(other, "core")],
                    output=output,
                )
            )
        assert not output.exists()

    @pytest.mark.asyncio
    async def test_enumeration_failure_is_terminal(self, core_dir: Path, tmp_path: Path) -> None:
        with pytest.raises(EnumerationError):
            await pack(
                PackOptions(
                    dirs=[SourceDirectory(core_dir, "core"), SourceDirectory(tmp_path / "missing", "x")],
                    output=tmp_path / "img",
                )
            )

    @pytest.mark.asyncio
    async def test_global_ignore_patterns(self, core_dir: Path, tmp_path: Path) -> None:
        write_file(core_dir, "js/modules/fs.js.map")

        result = await pack(
            PackOptions(
                dirs=[SourceDirectory(core_dir, "core")],
                output=tmp_path / "img",
                ignore=["*.map"],
            ),
            writer=RecordingWriter(),
        )

        assert "core/js/modules/fs.js.map" not in [e.name for e in result.entries]

    @pytest.mark.asyncio
    async def test_repeated_runs_give_identical_names(self, core_dir: Path, app_dir: Path, tmp_path: Path) -> None:
        opts = PackOptions(
            dirs=[SourceDirectory(core_dir, "core"), SourceDirectory(app_dir, "app")],
            output=tmp_path / "img",
        )

        first = await pack(opts, writer=RecordingWriter())
        second = await pack(opts, writer=RecordingWriter())

        assert [e.name for e in first.entries] == [e.name for e in second.entries]

    @pytest.mark.asyncio
    async def test_default_writer_round_trip(self, core_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "img"

        await pack(PackOptions(dirs=[SourceDirectory(core_dir, "core")], output=output))

        header, files = read_initrd(output)
        assert header["kernelVersion"] == "1.2.0"
        assert header["indexName"] == "core/js/__loader.js"
        assert header["appIndexName"] == "/"
        assert header["config"] == {"kernelVersion": "1.2.0"}
        assert files["core/js/__loader.js"] == b"// loader"
        assert set(files) == {
            "core/runtimecorelib.json",
            "core/js/__loader.js",
            "core/js/modules/fs.js",
        }


class TestEmitBundle:
    @pytest.mark.asyncio
    async def test_requires_core_config(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            await emit_bundle(Manifest(entries=()), tmp_path / "img")

    @pytest.mark.asyncio
    async def test_write_errors_propagate_unchanged(self, core_dir: Path, tmp_path: Path) -> None:
        manifest = build_manifest(await collect_files([SourceDirectory(core_dir, "core")]))

        with pytest.raises(FileNotFoundError):
            await emit_bundle(manifest, tmp_path / "no-such-dir" / "img")

    @pytest.mark.asyncio
    async def test_writer_failure_leaves_partial_file(self, core_dir: Path, tmp_path: Path) -> None:
        def failing_writer(stream, entries, core_config, index_name, app_index_name) -> None:
            stream.write(b"part")
            raise OSError("disk full")

        output = tmp_path / "img"
        with pytest.raises(OSError, match="disk full"):
            await pack(
                PackOptions(dirs=[SourceDirectory(core_dir, "core")], output=output),
                writer=failing_writer,
            )
        assert output.read_bytes() == b"part"


def test_write_initrd_embeds_extra_config(tmp_path: Path) -> None:
    config = CoreConfig.model_validate({"kernelVersion": "2.0.0", "name": "rt"})
    output = tmp_path / "img"

    with open(output, "wb") as stream:
        write_initrd(stream, [], config, "/boot.js", "/")

    header, files = read_initrd(output)
    assert header["config"] == {"kernelVersion": "2.0.0", "name": "rt"}
    assert files == {}


class TestWriteInitrdLimits:
    def test_overlong_name_rejected(self, tmp_path: Path) -> None:
        source = write_file(tmp_path, "a.js", "x")
        name = "core/" + "n" * 70_000
        config = CoreConfig.model_validate({"kernelVersion": "1.0.0"})

        with open(tmp_path / "img", "wb") as stream:
            with pytest.raises(BundleEntryTooLargeError, match="name is") as excinfo:
                write_initrd(stream, [BundleEntry(str(source), "a.js", name)], config, "/boot.js", "/")
        assert excinfo.value.name == name

    def test_oversized_file_rejected(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("bootpack.pack.writer.MAX_FILE_BYTES", 4)
        source = write_file(tmp_path, "big.js", "too large")
        config = CoreConfig.model_validate({"kernelVersion": "1.0.0"})

        with open(tmp_path / "img", "wb") as stream:
            with pytest.raises(BundleEntryTooLargeError, match="file is 9 bytes"):
                write_initrd(stream, [BundleEntry(str(source), "big.js", "core/big.js")], config, "/boot.js", "/")

