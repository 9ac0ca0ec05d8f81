"""Multi-catalog processing.

Each catalog is walked and built independently (in a thread pool when there
is more than one). Results are collected in input order before anything is
merged, because root-level namespaces and images of different catalogs are
siblings of one another in the generated tree. A catalog that fails is
reported and skipped; it never stops the others.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .catalog.tree import NamespaceNode, NamespaceTreeBuilder
from .catalog.walker import CatalogWalker
from .config import CatalogConfig
from .errors import E_UNSUPPORTED_EXTENSION, CatalogError, read_error
from .logging import get_logger
from .reporting import Reporter, TaskStatus, get_reporter

__all__ = [
    "CatalogResult",
    "scan_catalog",
    "scan_catalogs",
    "combine_roots",
    "find_catalogs",
]

log = get_logger("project")


@dataclass(slots=True)
class CatalogResult:
    catalog: Path
    root: Optional[NamespaceNode] = None
    error: Optional[CatalogError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def scan_catalog(path: Path, config: CatalogConfig, *, fs=None) -> NamespaceNode:
    """Walk one catalog and build its namespace tree.

    Raises :class:`CatalogError` for anything that makes the catalog unusable.
    """
    path = Path(path)
    ext = path.suffix[1:]
    if ext not in config.catalog_extensions:
        raise CatalogError(
            code=E_UNSUPPORTED_EXTENSION,
            message=f"Unsupported catalog extension '{ext}': {path}",
            context={
                "path": str(path),
                "supported": sorted(config.catalog_extensions),
            },
        )
    walker = CatalogWalker(
        leaf_extensions=config.asset_extensions,
        opaque_extensions=config.ignored_extensions,
        marker_filenames=config.marker_filenames,
        fs=fs,
    )
    found = walker.walk(path)
    return NamespaceTreeBuilder(path).build(found.namespace_dirs, found.leaf_candidates)


def _scan_one(path: Path, config: CatalogConfig, fs) -> CatalogResult:
    try:
        return CatalogResult(path, root=scan_catalog(path, config, fs=fs))
    except CatalogError as exc:
        return CatalogResult(path, error=exc)
    except OSError as exc:
        return CatalogResult(
            path,
            error=read_error(
                f"Cannot read catalog: {path}",
                {"path": str(path), "reason": str(exc)},
            ),
        )


def scan_catalogs(
    catalogs: Sequence[Path],
    config: CatalogConfig,
    *,
    fs=None,
    reporter: Reporter | None = None,
) -> List[CatalogResult]:
    rep = reporter or get_reporter()
    paths = [Path(c) for c in catalogs]
    results: List[Optional[CatalogResult]] = [None] * len(paths)

    rep.start_task("catalog.scan", "Scan catalogs", total=len(paths))
    if len(paths) <= 1:
        for idx, path in enumerate(paths):
            results[idx] = _scan_one(path, config, fs)
            rep.advance("catalog.scan", current_item=path.name)
    else:
        with ThreadPoolExecutor(max_workers=config.worker_count()) as pool:
            futures = {
                pool.submit(_scan_one, path, config, fs): idx
                for idx, path in enumerate(paths)
            }
            for fut in as_completed(futures):
                idx = futures[fut]
                results[idx] = fut.result()
                rep.advance("catalog.scan", current_item=paths[idx].name)

    done = [r for r in results if r is not None]
    failed = [r for r in done if not r.ok]
    for r in failed:
        rep.error(
            f"Catalog '{r.catalog}' failed: {r.error.message}",
            code=r.error.code,
            catalog=str(r.catalog),
            context=r.error.context or {},
        )
    rep.end_task(
        "catalog.scan",
        TaskStatus.FAILED if failed else TaskStatus.SUCCESS,
        catalogs=len(done),
        failed=len(failed),
    )
    return done


def combine_roots(roots: Iterable[NamespaceNode], name: str = "image") -> NamespaceNode:
    """Gather the root-level images and namespaces of several catalogs under
    one synthetic root, keeping catalog order."""
    combined = NamespaceNode(origin=(), name=name)
    for root in roots:
        combined.absorb(root)
    return combined


def find_catalogs(search_root: Path, extensions: Iterable[str]) -> List[Path]:
    """List catalog directories below ``search_root`` (sorted, hidden skipped)."""
    wanted = frozenset(extensions)
    found: List[Path] = []
    stack = [Path(search_root)]
    while stack:
        current = stack.pop()
        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name, reverse=True)
        except OSError as exc:
            log.warning("Cannot search %s: %s", current, exc)
            continue
        for entry in entries:
            if entry.name.startswith(".") or not entry.is_dir():
                continue
            if entry.suffix[1:] in wanted:
                found.append(entry)
            else:
                stack.append(entry)
    return sorted(found, key=lambda p: p.as_posix())
