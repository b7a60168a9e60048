"""JSON I/O for partition config files and driver output (orjson-backed)."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Any

import orjson


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def load_partition_file(path: Path) -> dict[str, Any]:
    """Load a partition config file; the top level must be a JSON object."""
    try:
        data = load_json(path)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Partition config {path} must contain a JSON object")
    return data


def dump_json(obj: Any, stream: IO[bytes] | None = None) -> None:
    """Write *obj* as indented JSON plus a trailing newline (stdout by default)."""
    out = stream if stream is not None else sys.stdout.buffer
    out.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    out.write(b"\n")
