"""Runtime library descriptor loading."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from bootpack.exceptions import InvalidDescriptorError
from bootpack.pack.models import CoreConfig


def load_core_config(path: str | Path) -> CoreConfig:
    """Read and validate a ``runtimecorelib.json`` descriptor.

    An unreadable file, malformed JSON and a document without a non-empty
    ``kernelVersion`` string are all reported the same way.

    Raises:
        InvalidDescriptorError: If the descriptor cannot be used.
    """
    try:
        data = json.loads(Path(path).read_bytes())
        return CoreConfig.model_validate(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise InvalidDescriptorError(str(path)) from e
