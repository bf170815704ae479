"""JSON file helpers shared by the stores."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


class StorageError(Exception):
    """A store file could not be read or written."""

    pass


def read_json(path: Path, default: Any) -> Any:
    """Load a JSON file, returning ``default`` when it does not exist.

    Raises:
        StorageError: If the file exists but is unreadable or corrupt.
    """
    if not path.exists():
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise StorageError(f"Failed to read {path}: {e}") from e


def write_json(path: Path, data: Any) -> None:
    """Write a JSON file atomically (temp file + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise StorageError(f"Failed to write {path}: {e}") from e
