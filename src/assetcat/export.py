"""JSON export of the accessor tree.

This is the hand-off artifact for renderers that run out of process. The
document is stable for a fixed input tree: keys are sorted and the tree is
already ordered by the generator.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from .generate.accessors import AccessorNode
from .project import CatalogResult

__all__ = ["accessor_tree_dict", "write_accessor_tree", "EXPORT_VERSION"]

EXPORT_VERSION = 1


def accessor_tree_dict(
    tree: AccessorNode, catalogs: Iterable[CatalogResult] = ()
) -> dict[str, Any]:
    catalogs = list(catalogs)
    namespaces, images = tree.count()
    return {
        "version": EXPORT_VERSION,
        "tree": tree.to_dict(),
        "counts": {
            "catalogs": len(catalogs),
            "namespaces": namespaces,
            "images": images,
        },
        "failures": [
            {"catalog": r.catalog.as_posix(), **r.error.to_dict()}
            for r in catalogs
            if r.error is not None
        ],
    }


def write_accessor_tree(
    tree: AccessorNode,
    output_path: Path,
    catalogs: Iterable[CatalogResult] = (),
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = accessor_tree_dict(tree, catalogs)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
        f.write("\n")
    return output_path
