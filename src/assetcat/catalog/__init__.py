"""Catalog discovery: walk, namespace tree construction and merging."""

from .walker import CatalogEntry, CatalogWalker, EntryKind, WalkResult
from .tree import NamespaceNode, NamespaceTreeBuilder, is_strict_ancestor
from .merge import MergeResult, merge_namespaces, report_merge_warnings

__all__ = [
    "CatalogEntry",
    "CatalogWalker",
    "EntryKind",
    "WalkResult",
    "NamespaceNode",
    "NamespaceTreeBuilder",
    "is_strict_ancestor",
    "MergeResult",
    "merge_namespaces",
    "report_merge_warnings",
]
