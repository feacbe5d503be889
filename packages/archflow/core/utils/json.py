"""JSON file helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: str | Path) -> Any:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def dumps_json(data: Any, indent: int | None = 2) -> str:
    """Serialize to JSON, rendering non-JSON values (enums, paths) as strings."""
    return json.dumps(data, indent=indent, default=str)
