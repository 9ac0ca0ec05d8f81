"""Recursive catalog walk.

Classifies every entry below a catalog root and collects two flat lists: the
directories that provide a namespace (found through their marker file) and
the leaf asset candidates. Entries whose extension is opaque are recorded
like any other entry but their descendants are never visited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag
from pathlib import Path
from typing import AbstractSet, Iterable, List, Optional, Tuple

from ..errors import read_error
from ..fs import DataError, LocalFileSystem
from ..logging import get_logger

__all__ = [
    "EntryKind",
    "CatalogEntry",
    "WalkResult",
    "CatalogWalker",
    "read_namespace_flag",
]

log = get_logger("walker")


class EntryKind(Flag):
    UNCLASSIFIED = 0
    NAMESPACE_MARKER = 1
    LEAF_ASSET = 2
    OPAQUE_CONTAINER = 4


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    path: Path
    kind: EntryKind = EntryKind.UNCLASSIFIED

    @property
    def extension(self) -> str:
        return self.path.suffix[1:]


@dataclass(slots=True)
class WalkResult:
    namespace_dirs: List[Path] = field(default_factory=list)
    leaf_candidates: List[Path] = field(default_factory=list)


def read_namespace_flag(fs, path: Path) -> Optional[bool]:
    """Read ``properties.provides-namespace`` from a marker file.

    Returns ``None`` when the file cannot be read, is not JSON, or does not
    have the expected shape; callers treat that as "not a namespace".
    """
    try:
        data = fs.read_json(path)
    except (OSError, ValueError, DataError) as exc:
        log.debug("Ignoring unreadable marker %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        return None
    properties = data.get("properties")
    if not isinstance(properties, dict):
        return None
    flag = properties.get("provides-namespace")
    if not isinstance(flag, bool):
        return None
    return flag


class CatalogWalker:
    def __init__(
        self,
        *,
        leaf_extensions: AbstractSet[str],
        opaque_extensions: AbstractSet[str],
        marker_filenames: Iterable[Tuple[str, str]],
        fs=None,
    ):
        self.leaf_extensions = frozenset(leaf_extensions)
        self.opaque_extensions = frozenset(opaque_extensions)
        self.marker_filenames = frozenset(
            (name, ext) for name, ext in marker_filenames
        )
        self.fs = fs or LocalFileSystem()

    def classify(self, path: Path) -> CatalogEntry:
        ext = path.suffix[1:]
        kind = EntryKind.UNCLASSIFIED
        if (path.stem, ext) in self.marker_filenames:
            if read_namespace_flag(self.fs, path):
                kind |= EntryKind.NAMESPACE_MARKER
        if ext in self.leaf_extensions:
            kind |= EntryKind.LEAF_ASSET
        if ext in self.opaque_extensions:
            kind |= EntryKind.OPAQUE_CONTAINER
        return CatalogEntry(path, kind)

    def walk(self, catalog_root: Path) -> WalkResult:
        catalog_root = Path(catalog_root)
        try:
            top = self.fs.list_dir(catalog_root)
        except OSError as exc:
            raise read_error(
                f"Cannot enumerate catalog: {catalog_root}",
                {"path": str(catalog_root), "reason": str(exc)},
            ) from exc

        result = WalkResult()
        # Depth-first, preorder; reversed so the stack pops in listing order.
        stack: List[Path] = list(reversed(top))
        while stack:
            path = stack.pop()
            if path.name.startswith("."):
                continue
            entry = self.classify(path)
            if entry.kind & EntryKind.NAMESPACE_MARKER:
                result.namespace_dirs.append(path.parent)
            if entry.kind & EntryKind.LEAF_ASSET:
                result.leaf_candidates.append(path)
            if entry.kind & EntryKind.OPAQUE_CONTAINER:
                continue
            try:
                # Symlinked directories are listed but never entered.
                if self.fs.is_link(path) or not self.fs.is_dir(path):
                    continue
                children = self.fs.list_dir(path)
            except OSError as exc:
                log.warning("Skipping unreadable directory %s: %s", path, exc)
                continue
            stack.extend(reversed(children))

        log.debug(
            "Walked %s: namespaces=%d leaves=%d",
            catalog_root,
            len(result.namespace_dirs),
            len(result.leaf_candidates),
        )
        return result
