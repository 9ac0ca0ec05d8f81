"""Command line interface for assetcat."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ._version import __version__
from .api import generate_accessor_tree
from .config import CatalogConfig, load_config
from .errors import CatalogError
from .export import accessor_tree_dict
from .generate.accessors import AccessLevel
from .logging import configure_logging, step
from .project import find_catalogs, scan_catalog
from .reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)


def _config_from_args(args: argparse.Namespace) -> CatalogConfig:
    config = load_config(args.config) if args.config else CatalogConfig()
    config.catalogs.extend(Path(c) for c in args.catalogs)
    if args.search is not None:
        config.catalogs.extend(find_catalogs(args.search, config.catalog_extensions))
    if args.access_level:
        config.access_level = AccessLevel(args.access_level)
    if args.root_name:
        config.root_name = args.root_name
    if args.prefix is not None:
        config.qualified_prefix = args.prefix
    if args.output is not None:
        config.output = args.output
    return config


def _generate_cmd(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    if not config.catalogs:
        get_reporter().error("No catalogs given (use CATALOG, --config or --search)")
        return 2
    step(f"generating accessors for {len(config.catalogs)} catalog(s)")
    result = generate_accessor_tree(config)
    rep = get_reporter()
    rep.flush()
    if args.json:
        print(
            json.dumps(
                accessor_tree_dict(result.tree, result.catalogs),
                indent=2,
                sort_keys=True,
            )
        )
    return 1 if result.failures else 0


def _scan_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else CatalogConfig()
    root = scan_catalog(args.catalog, config)
    rep = get_reporter()
    if args.json:
        print(json.dumps(root.to_dict(), indent=2, sort_keys=True))
        return 0
    rep.section(f"Namespaces in {args.catalog.name}")
    for node in root.iter_nodes():
        depth = len(node.logical_path.split(".")) if node.logical_path else 0
        label = node.logical_path or "<root>"
        rep.status(f"{'  ' * depth}{label}: {', '.join(node.leaf_resources) or '-'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="assetcat",
        description="Image catalog namespace scanner and accessor tree generator",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "json", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    p.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Generate the accessor tree for catalogs")
    g.add_argument("catalogs", nargs="*", type=Path, help="Catalog directories")
    g.add_argument("--config", type=Path, help="JSON or YAML configuration file")
    g.add_argument(
        "--search",
        type=Path,
        help="Also process every catalog found below this directory",
    )
    g.add_argument(
        "--access-level",
        dest="access_level",
        choices=[a.value for a in AccessLevel],
        help="Access level handed to the renderer",
    )
    g.add_argument("--root-name", dest="root_name", help="Name of the root level")
    g.add_argument("--prefix", help="Qualified name prefix for the root level")
    g.add_argument(
        "--output", type=Path, help="Write the accessor tree JSON to this path"
    )
    g.add_argument(
        "--json", action="store_true", help="Print the accessor tree JSON"
    )
    g.set_defaults(func=_generate_cmd)

    s = sub.add_parser("scan", help="Show the raw namespace tree of one catalog")
    s.add_argument("catalog", type=Path)
    s.add_argument("--config", type=Path, help="JSON or YAML configuration file")
    s.add_argument("--json", action="store_true", help="Emit JSON")
    s.set_defaults(func=_scan_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)
    requested = args.reporter
    if requested == "json":
        set_reporter(JsonLinesReporter(stream=sys.stderr))
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich falls back to plain when stderr is not a terminal
        set_reporter(PlainReporter())
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except (CatalogError, OSError) as exc:
        get_reporter().error(str(exc))
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
