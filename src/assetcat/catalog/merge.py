"""Merging of sibling namespaces that normalize to the same identifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, List

from ..errors import W_EMPTY_SYMBOL, W_NAMESPACE_CONFLICT
from .tree import NamespaceNode

__all__ = ["MergeResult", "merge_namespaces", "report_merge_warnings"]


@dataclass(slots=True)
class MergeResult:
    usable: List[NamespaceNode] = field(default_factory=list)
    conflicts: List[NamespaceNode] = field(default_factory=list)
    empties: List[NamespaceNode] = field(default_factory=list)


def merge_namespaces(
    siblings: Iterable[NamespaceNode], leaf_identifiers: AbstractSet[str]
) -> MergeResult:
    """Merge ``siblings`` by identifier and split off leaf conflicts.

    The first node seen for an identifier is the representative. It is
    copied before the others' leaves and children are appended, so the
    input nodes are left untouched.
    """
    result = MergeResult()
    merged: Dict[str, NamespaceNode] = {}
    for node in siblings:
        ident = node.identifier
        if not ident:
            result.empties.append(node)
            continue
        rep = merged.get(ident)
        if rep is None:
            merged[ident] = node.copy()
        else:
            rep.absorb(node)
    for ident, node in merged.items():
        if ident in leaf_identifiers:
            result.conflicts.append(node)
        else:
            result.usable.append(node)
    return result


def report_merge_warnings(result: MergeResult, reporter, *, scope: str) -> None:
    where = scope or "<root>"
    for node in result.conflicts:
        reporter.warning(
            f"Skipping namespace '{node.name}' in '{where}' because symbol "
            f"'{node.identifier}' would conflict with an image of the same name",
            code=W_NAMESPACE_CONFLICT,
            scope=scope,
            symbol=node.identifier,
            names=[node.name],
        )
    if result.empties:
        names = sorted(n.name for n in result.empties)
        reporter.warning(
            f"Skipping {len(names)} namespaces in '{where}' because no symbol "
            f"can be generated for: {', '.join(repr(n) for n in names)}",
            code=W_EMPTY_SYMBOL,
            scope=scope,
            names=names,
        )
