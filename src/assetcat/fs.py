"""Filesystem capability used by the catalog walker.

The walker needs four primitives: list a directory, tell directories from
files, tell symbolic links apart, and read a small file as JSON.
``LocalFileSystem`` implements them on top of :mod:`pathlib`; tests
substitute in-memory fakes with the same method names.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

__all__ = ["DataError", "LocalFileSystem", "MAX_MARKER_SIZE"]

MAX_MARKER_SIZE = 1024 * 1024


class DataError(RuntimeError):
    pass


class LocalFileSystem:
    """Local disk access; directory listings are sorted by entry name."""

    def __init__(self, max_file_size: int = MAX_MARKER_SIZE):
        self.max_file_size = max_file_size

    def list_dir(self, path: Path) -> List[Path]:
        # Raises OSError when the directory cannot be opened.
        return sorted(path.iterdir(), key=lambda p: p.name)

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_link(self, path: Path) -> bool:
        return path.is_symlink()

    def read_json(self, path: Path) -> Any:
        size = path.stat().st_size
        if size > self.max_file_size:
            raise DataError(f"File too large: {size}>{self.max_file_size}")
        return json.loads(path.read_text(encoding="utf-8"))
