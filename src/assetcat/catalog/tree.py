"""Namespace tree built from the walker's flat discovery lists.

Containment is never stored explicitly: a node contains another node (or a
leaf) when its originating path is a strict prefix of the other path,
compared segment by segment. Inserting always descends to the deepest
containing node before attaching, so discovery order only matters in that
ancestors must be inserted before their descendants; the builder sorts its
input to guarantee that.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path, PurePath
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from ..errors import parse_error
from ..identifiers import normalize_identifier

__all__ = [
    "path_segments",
    "is_strict_ancestor",
    "NamespaceNode",
    "NamespaceTreeBuilder",
]

Segments = Tuple[str, ...]


def path_segments(path: str | PurePath) -> Segments:
    return PurePath(path).parts


def is_strict_ancestor(ancestor: Sequence[str], candidate: Sequence[str]) -> bool:
    n = len(ancestor)
    return len(candidate) > n and tuple(candidate[:n]) == tuple(ancestor)


def _extend(parent_path: str, ident: str, sep: str) -> str:
    return f"{parent_path}{sep}{ident}" if parent_path else ident


@dataclass(frozen=True, eq=False)
class NamespaceNode:
    """One namespace level.

    Frozen so ``logical_path`` and ``resource_path`` cannot change once the
    node is inserted; ``leaf_resources`` and ``children`` are still extended
    in place while the tree is being built.
    """

    origin: Segments
    name: str
    logical_path: str = ""
    resource_path: str = ""
    leaf_resources: List[str] = field(default_factory=list)
    children: List["NamespaceNode"] = field(default_factory=list)

    @property
    def identifier(self) -> str:
        return normalize_identifier(self.name)

    def contains(self, segments: Sequence[str]) -> bool:
        return is_strict_ancestor(self.origin, segments)

    def _deepest_container(self, segments: Sequence[str]) -> "NamespaceNode":
        level = self
        while True:
            inner = next((c for c in level.children if c.contains(segments)), None)
            if inner is None:
                return level
            level = inner

    def insert_namespace(self, segments: Sequence[str]) -> "NamespaceNode":
        parent = self._deepest_container(segments)
        name = segments[-1]
        ident = normalize_identifier(name)
        node = NamespaceNode(
            origin=tuple(segments),
            name=name,
            logical_path=_extend(parent.logical_path, ident, "."),
            resource_path=_extend(parent.resource_path, ident, "/"),
        )
        parent.children.append(node)
        return node

    def insert_leaf(self, segments: Sequence[str], leaf_name: str) -> "NamespaceNode":
        parent = self._deepest_container(segments)
        parent.leaf_resources.append(leaf_name)
        return parent

    def copy(self) -> "NamespaceNode":
        """Shallow copy with its own lists; child nodes are shared."""
        return replace(
            self,
            leaf_resources=list(self.leaf_resources),
            children=list(self.children),
        )

    def absorb(self, other: "NamespaceNode") -> None:
        self.leaf_resources.extend(other.leaf_resources)
        self.children.extend(other.children)

    def iter_nodes(self):
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": PurePath(*self.origin).as_posix() if self.origin else "",
            "logical_path": self.logical_path,
            "resource_path": self.resource_path,
            "leaf_resources": list(self.leaf_resources),
            "children": [c.to_dict() for c in self.children],
        }


def _sort_key(path: Path) -> str:
    return PurePath(path).as_posix()


class NamespaceTreeBuilder:
    def __init__(self, catalog_root: Path):
        self.catalog_root = Path(catalog_root)

    def _root(self) -> NamespaceNode:
        name = self.catalog_root.name
        if not name:
            raise parse_error(
                f"Couldn't extract catalog name from path: {self.catalog_root}",
                {"path": str(self.catalog_root)},
            )
        return NamespaceNode(origin=path_segments(self.catalog_root), name=name)

    def build(
        self, namespace_dirs: Iterable[Path], leaf_candidates: Iterable[Path]
    ) -> NamespaceNode:
        root = self._root()

        for ns_dir in sorted(set(map(Path, namespace_dirs)), key=_sort_key):
            if not ns_dir.name:
                raise parse_error(
                    f"Couldn't extract namespace name from path: {ns_dir}",
                    {"path": str(ns_dir)},
                )
            root.insert_namespace(path_segments(ns_dir))

        for leaf in sorted(map(Path, leaf_candidates), key=_sort_key):
            leaf_name = leaf.stem if leaf.name else ""
            if not leaf_name:
                raise parse_error(
                    f"Couldn't extract asset name from path: {leaf}",
                    {"path": str(leaf)},
                )
            root.insert_leaf(path_segments(leaf), leaf_name)

        return root
