"""End-to-end scenarios on catalogs laid out on disk."""

from __future__ import annotations

from pathlib import Path

from assetcat.api import generate_accessor_tree
from assetcat.config import CatalogConfig
from assetcat.errors import W_DUPLICATE_SYMBOL, W_NAMESPACE_CONFLICT

from catalog_helper import (
    RecordingReporter,
    make_catalog,
    make_imageset,
    make_namespace,
)


def _run(*catalogs: Path):
    rep = RecordingReporter()
    result = generate_accessor_tree(CatalogConfig(catalogs=list(catalogs)), reporter=rep)
    return result, rep


def test_case_variant_images_collapse_to_one_symbol(tmp_path: Path):
    cat = make_catalog(tmp_path)
    make_imageset(cat, "Icon")
    make_imageset(cat, "icon")

    result, rep = _run(cat)

    tree = result.tree
    assert tree.qualified_name == "R.image"
    assert len(tree.leaves) == 1
    assert tree.leaves[0].symbol == "icon"
    assert tree.leaves[0].lookup_key == "icon"
    assert len(rep.warnings(W_DUPLICATE_SYMBOL)) == 1


def test_namespace_folder_prefixes_lookup_key(tmp_path: Path):
    cat = make_catalog(tmp_path)
    onboarding = make_namespace(cat, "Onboarding")
    make_imageset(onboarding, "Logo")

    result, rep = _run(cat)

    assert [c.name for c in result.tree.children] == ["onboarding"]
    child = result.tree.children[0]
    assert child.qualified_name == "R.image.onboarding"
    assert [(l.symbol, l.lookup_key) for l in child.leaves] == [
        ("logo", "onboarding/logo")
    ]
    assert rep.warnings() == []


def test_same_namespace_in_two_branches_merges(tmp_path: Path):
    cat = make_catalog(tmp_path)
    make_imageset(make_namespace(cat, "Shared"), "A")
    make_imageset(make_namespace(cat / "Feature", "Shared"), "B")

    result, _ = _run(cat)

    assert [c.name for c in result.tree.children] == ["shared"]
    shared = result.tree.children[0]
    assert [l.symbol for l in shared.leaves] == ["a", "b"]


def test_marker_inside_ignored_folder_is_pruned(tmp_path: Path):
    cat = make_catalog(tmp_path)
    brand = cat / "AppIcon.brandassets"
    brand.mkdir()
    make_imageset(make_namespace(brand, "Hidden"), "Layer")
    make_imageset(cat, "Visible")

    result, _ = _run(cat)

    assert result.tree.children == ()
    assert [l.symbol for l in result.tree.leaves] == ["visible"]


def test_same_root_namespace_across_catalogs_merges(tmp_path: Path):
    first = make_catalog(tmp_path, "Main.xcassets")
    second = make_catalog(tmp_path, "Extra.xcassets")
    make_imageset(make_namespace(first, "Common"), "One")
    make_imageset(make_namespace(second, "Common"), "Two")
    make_imageset(second, "common")

    result, rep = _run(first, second)

    # A root-level image named like the namespace wins across catalogs too.
    assert result.tree.children == ()
    assert [l.symbol for l in result.tree.leaves] == ["common"]
    assert len(rep.warnings(W_NAMESPACE_CONFLICT)) == 1


def test_rerun_produces_identical_tree(tmp_path: Path):
    cat = make_catalog(tmp_path)
    make_imageset(make_namespace(cat, "Tabs"), "Home")
    make_imageset(make_namespace(cat / "Tabs", "Settings"), "Gear")
    first, _ = _run(cat)
    second, _ = _run(cat)
    assert first.tree.to_dict() == second.tree.to_dict()
    gear = first.tree.child("tabs").child("settings").leaf("gear")
    assert gear.lookup_key == "tabs/settings/gear"
