"""Accessor tree generation.

Turns a namespace tree into the declarative structure the renderer consumes:
one :class:`AccessorNode` per namespace level holding the image accessors of
that level and its child levels. Identifier collisions are resolved level by
level and reported as warnings; nothing here raises for bad names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from ..catalog.merge import merge_namespaces, report_merge_warnings
from ..catalog.tree import NamespaceNode
from ..identifiers import (
    group_by_identifier,
    join_qualified,
    report_duplicates_and_empties,
)
from ..reporting import Reporter, get_reporter

__all__ = ["AccessLevel", "LeafAccessor", "AccessorNode", "AccessorTreeGenerator"]


class AccessLevel(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    FILE_PRIVATE = "fileprivate"
    PRIVATE = "private"


@dataclass(frozen=True, slots=True)
class LeafAccessor:
    symbol: str
    lookup_key: str
    resource: str  # raw asset name the symbol was generated from

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "lookup_key": self.lookup_key,
            "resource": self.resource,
        }


@dataclass(frozen=True, slots=True)
class AccessorNode:
    name: str
    qualified_name: str
    access_level: AccessLevel
    leaves: Tuple[LeafAccessor, ...] = ()
    children: Tuple["AccessorNode", ...] = ()

    def child(self, name: str) -> "AccessorNode | None":
        return next((c for c in self.children if c.name == name), None)

    def leaf(self, symbol: str) -> LeafAccessor | None:
        return next((l for l in self.leaves if l.symbol == symbol), None)

    def count(self) -> Tuple[int, int]:
        """Return ``(descendant namespaces, leaves in this subtree)``."""
        namespaces, leaves = 0, len(self.leaves)
        for c in self.children:
            n, l = c.count()
            namespaces += n + 1
            leaves += l
        return namespaces, leaves

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "qualified_name": self.qualified_name,
            "access_level": self.access_level.value,
            "leaves": [l.to_dict() for l in self.leaves],
            "children": [c.to_dict() for c in self.children],
        }


def _lookup_key(resource_path: str, symbol: str) -> str:
    return f"{resource_path}/{symbol}" if resource_path else symbol


class AccessorTreeGenerator:
    def __init__(self, reporter: Reporter | None = None):
        self.reporter = reporter or get_reporter()

    def generate(
        self,
        node: NamespaceNode,
        access_level: AccessLevel = AccessLevel.INTERNAL,
        qualified_prefix: str = "",
    ) -> AccessorNode:
        ident = node.identifier
        qualified = join_qualified(qualified_prefix, ident)

        leaf_groups = group_by_identifier(node.leaf_resources)
        report_duplicates_and_empties(
            leaf_groups, self.reporter, kind="image", scope=qualified
        )
        leaves = sorted(
            (
                LeafAccessor(symbol, _lookup_key(node.resource_path, symbol), name)
                for symbol, name in leaf_groups.uniques
            ),
            key=lambda l: l.symbol,
        )

        merged = merge_namespaces(node.children, set(leaf_groups.identifiers))
        report_merge_warnings(merged, self.reporter, scope=qualified)
        children = sorted(
            (
                self.generate(child, access_level, qualified)
                for child in merged.usable
            ),
            key=lambda c: c.name,
        )

        return AccessorNode(
            name=ident,
            qualified_name=qualified,
            access_level=access_level,
            leaves=tuple(leaves),
            children=tuple(children),
        )
