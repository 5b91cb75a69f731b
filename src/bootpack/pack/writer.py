"""Default initrd image writer.

The image is a flat, length-prefixed list of files:

    magic        : 8 bytes  ("BPINITRD")
    version      : u16      (currently 1)
    header_len   : u32
    header       : UTF-8 JSON {kernelVersion, indexName, appIndexName, config}
    count        : u32      (number of entries)
    entries      : repeated count times
        name_len : u16
        name     : UTF-8 bytes
        size     : u32
        data     : raw bytes

All integers are little-endian. The loader reads the header to find the
system entry, then maps entries by name.
"""

from __future__ import annotations

import json
import os
import struct
from collections.abc import Sequence
from typing import BinaryIO, Callable

from bootpack.exceptions import BundleEntryTooLargeError
from bootpack.pack.models import BundleEntry, CoreConfig

MAGIC = b"BPINITRD"
VERSION = 1

MAX_NAME_BYTES = 0xFFFF
MAX_FILE_BYTES = 0xFFFFFFFF

Writer = Callable[[BinaryIO, Sequence[BundleEntry], CoreConfig, str, str], None]


def write_initrd(
    stream: BinaryIO,
    entries: Sequence[BundleEntry],
    core_config: CoreConfig,
    index_name: str,
    app_index_name: str,
) -> None:
    header = json.dumps(
        {
            "kernelVersion": core_config.kernel_version,
            "indexName": index_name,
            "appIndexName": app_index_name,
            "config": core_config.model_dump(by_alias=True),
        },
        sort_keys=True,
    ).encode("utf-8")

    stream.write(MAGIC)
    stream.write(struct.pack("<H", VERSION))
    stream.write(struct.pack("<I", len(header)))
    stream.write(header)
    stream.write(struct.pack("<I", len(entries)))
    for entry in entries:
        encoded = entry.name.encode("utf-8")
        if len(encoded) > MAX_NAME_BYTES:
            raise BundleEntryTooLargeError(
                entry.name, f"name is {len(encoded)} bytes, limit is {MAX_NAME_BYTES}"
            )
        with open(entry.path, "rb") as fh:
            size = os.fstat(fh.fileno()).st_size
            if size > MAX_FILE_BYTES:
                raise BundleEntryTooLargeError(
                    entry.name, f"file is {size} bytes, limit is {MAX_FILE_BYTES}"
                )
            data = fh.read()
        stream.write(struct.pack("<H", len(encoded)))
        stream.write(encoded)
        stream.write(struct.pack("<I", len(data)))
        stream.write(data)
