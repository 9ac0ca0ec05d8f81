"""High-level API for assetcat."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .catalog.tree import NamespaceNode
from .config import CatalogConfig, load_config
from .export import write_accessor_tree
from .generate.accessors import AccessorNode, AccessorTreeGenerator
from .logging import get_logger
from .project import CatalogResult, combine_roots, scan_catalog, scan_catalogs
from .reporting import Reporter, get_reporter, task

__all__ = [
    "GenerateResult",
    "generate_accessor_tree",
    "generate_from_config_file",
    "scan_catalog",
    "load_config",
    "CatalogConfig",
]


@dataclass(slots=True)
class GenerateResult:
    tree: AccessorNode
    catalogs: List[CatalogResult] = field(default_factory=list)
    output_file: Optional[Path] = None

    @property
    def failures(self) -> List[CatalogResult]:
        return [r for r in self.catalogs if not r.ok]


def generate_accessor_tree(
    config: CatalogConfig,
    *,
    fs=None,
    reporter: Reporter | None = None,
    output_path: Path | None = None,
) -> GenerateResult:
    """Scan every configured catalog and generate one accessor tree.

    Catalog failures are reported and listed in ``GenerateResult.failures``;
    the tree is built from whatever catalogs succeeded.
    """
    logger = get_logger()
    rep = reporter or get_reporter()

    results = scan_catalogs(config.catalogs, config, fs=fs, reporter=rep)
    roots: List[NamespaceNode] = [r.root for r in results if r.root is not None]
    rep.status(
        "Scan summary: "
        + f"catalogs={len(results)} failed={len(results) - len(roots)}"
    )

    combined = combine_roots(roots, config.root_name)
    tree = AccessorTreeGenerator(rep).generate(
        combined, config.access_level, config.qualified_prefix
    )
    namespaces, images = tree.count()
    rep.status(
        "Generate summary: "
        + f"root={tree.qualified_name} namespaces={namespaces} images={images}"
    )

    target = output_path or config.output
    written = None
    if target is not None:
        with task("export.write", "Write accessor tree", reporter=rep) as stats:
            written = write_accessor_tree(tree, Path(target), results)
            stats["images"] = images
        logger.info("Wrote accessor tree: %s", written)
    return GenerateResult(tree=tree, catalogs=results, output_file=written)


def generate_from_config_file(path: str | Path, **kwargs) -> GenerateResult:
    return generate_accessor_tree(load_config(path), **kwargs)
