from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson


def read_json_object(path: Path) -> dict[str, Any]:
    """Parse ``path`` and require a JSON object at the top level."""
    data = orjson.loads(path.read_bytes())
    if not isinstance(data, dict):
        msg = f"Expected a JSON object in {path}, got {type(data).__name__}"
        raise ValueError(msg)
    return data


def dump_json_bytes(payload: Any) -> bytes:
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def write_json_atomic(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    staging = path.with_suffix(f"{path.suffix}.tmp")
    staging.write_bytes(dump_json_bytes(payload))
    staging.replace(path)
