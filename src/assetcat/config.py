"""Project configuration (JSON/YAML) for assetcat."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, List, Optional, Tuple

import yaml

from .errors import config_error
from .generate.accessors import AccessLevel

__all__ = [
    "CatalogConfig",
    "load_config",
    "config_from_dict",
    "DEFAULT_CATALOG_EXTENSIONS",
    "DEFAULT_ASSET_EXTENSIONS",
    "DEFAULT_IGNORED_EXTENSIONS",
    "DEFAULT_MARKER_FILENAMES",
]

DEFAULT_CATALOG_EXTENSIONS = frozenset({"xcassets"})
# "appiconset" is not loadable at runtime, so it is not an asset here.
DEFAULT_ASSET_EXTENSIONS = frozenset({"launchimage", "imageset", "imagestack"})
# Everything inside these is skipped.
DEFAULT_IGNORED_EXTENSIONS = frozenset({"brandassets", "imagestacklayer"})
DEFAULT_MARKER_FILENAMES: Tuple[Tuple[str, str], ...] = (("Contents", "json"),)

_KNOWN_KEYS = {
    "catalogs",
    "catalog_extensions",
    "asset_extensions",
    "ignored_extensions",
    "marker_filenames",
    "access_level",
    "root_name",
    "qualified_prefix",
    "max_workers",
    "output",
}


def _env_workers() -> Optional[int]:
    raw = os.getenv("ASSETCAT_MAX_WORKERS")
    if not raw:
        return None
    try:
        return max(1, int(raw))
    except ValueError:
        raise config_error(
            f"ASSETCAT_MAX_WORKERS must be an integer, got {raw!r}"
        ) from None


@dataclass(slots=True)
class CatalogConfig:
    catalogs: List[Path] = field(default_factory=list)
    catalog_extensions: FrozenSet[str] = DEFAULT_CATALOG_EXTENSIONS
    asset_extensions: FrozenSet[str] = DEFAULT_ASSET_EXTENSIONS
    ignored_extensions: FrozenSet[str] = DEFAULT_IGNORED_EXTENSIONS
    marker_filenames: Tuple[Tuple[str, str], ...] = DEFAULT_MARKER_FILENAMES
    access_level: AccessLevel = AccessLevel.INTERNAL
    root_name: str = "image"
    qualified_prefix: str = "R"
    max_workers: Optional[int] = None
    output: Optional[Path] = None

    def worker_count(self) -> Optional[int]:
        if self.max_workers is not None:
            return self.max_workers
        return _env_workers()


def _str_set(data: dict[str, Any], key: str, default: FrozenSet[str]) -> FrozenSet[str]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise config_error(f"'{key}' must be a list of strings", {"key": key})
    return frozenset(v.lstrip(".") for v in value)


def _marker_filenames(value: Any) -> Tuple[Tuple[str, str], ...]:
    if value is None:
        return DEFAULT_MARKER_FILENAMES
    if not isinstance(value, list):
        raise config_error("'marker_filenames' must be a list")
    pairs: List[Tuple[str, str]] = []
    for item in value:
        # Either "Contents.json" or ["Contents", "json"].
        if isinstance(item, str) and "." in item:
            name, _, ext = item.rpartition(".")
        elif (
            isinstance(item, list)
            and len(item) == 2
            and all(isinstance(v, str) for v in item)
        ):
            name, ext = item
        else:
            raise config_error(
                f"Invalid marker filename entry: {item!r}",
                {"key": "marker_filenames"},
            )
        pairs.append((name, ext))
    return tuple(pairs)


def _access_level(value: Any) -> AccessLevel:
    if value is None:
        return AccessLevel.INTERNAL
    try:
        return AccessLevel(str(value).lower())
    except ValueError:
        choices = ", ".join(a.value for a in AccessLevel)
        raise config_error(
            f"Unknown access level {value!r} (expected one of: {choices})",
            {"key": "access_level"},
        ) from None


def _optional_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise config_error(f"'{key}' must be a string", {"key": key})
    return value


def config_from_dict(data: dict[str, Any], base_dir: Path | None = None) -> CatalogConfig:
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise config_error(
            f"Unknown configuration keys: {', '.join(unknown)}",
            {"keys": unknown},
        )
    base = Path(base_dir) if base_dir is not None else Path.cwd()

    catalogs = data.get("catalogs", [])
    if not isinstance(catalogs, list) or not all(isinstance(c, str) for c in catalogs):
        raise config_error("'catalogs' must be a list of paths", {"key": "catalogs"})

    max_workers = data.get("max_workers")
    if max_workers is not None and (
        not isinstance(max_workers, int) or isinstance(max_workers, bool) or max_workers < 1
    ):
        raise config_error("'max_workers' must be a positive integer", {"key": "max_workers"})

    output = data.get("output")
    if output is not None and not isinstance(output, str):
        raise config_error("'output' must be a path", {"key": "output"})

    return CatalogConfig(
        catalogs=[base / c for c in catalogs],
        catalog_extensions=_str_set(data, "catalog_extensions", DEFAULT_CATALOG_EXTENSIONS),
        asset_extensions=_str_set(data, "asset_extensions", DEFAULT_ASSET_EXTENSIONS),
        ignored_extensions=_str_set(data, "ignored_extensions", DEFAULT_IGNORED_EXTENSIONS),
        marker_filenames=_marker_filenames(data.get("marker_filenames")),
        access_level=_access_level(data.get("access_level")),
        root_name=_optional_str(data, "root_name", "image"),
        qualified_prefix=_optional_str(data, "qualified_prefix", "R"),
        max_workers=max_workers,
        output=base / output if output else None,
    )


def load_config(path: str | Path) -> CatalogConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, ValueError) as exc:
        raise config_error(f"Cannot parse {p.name}: {exc}", {"path": str(p)}) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise config_error("Root of configuration must be an object", {"path": str(p)})
    return config_from_dict(data, p.parent)
