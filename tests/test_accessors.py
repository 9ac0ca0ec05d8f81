from pathlib import Path

from assetcat.catalog.tree import NamespaceTreeBuilder
from assetcat.errors import (
    W_DUPLICATE_SYMBOL,
    W_EMPTY_SYMBOL,
    W_NAMESPACE_CONFLICT,
)
from assetcat.generate.accessors import AccessLevel, AccessorTreeGenerator

from catalog_helper import RecordingReporter

ROOT = Path("/proj/Images.xcassets")


def _generate(dirs, leaves, prefix=""):
    rep = RecordingReporter()
    root = NamespaceTreeBuilder(ROOT).build(dirs, leaves)
    tree = AccessorTreeGenerator(rep).generate(root, AccessLevel.PUBLIC, prefix)
    return tree, rep


def test_leaf_accessors_carry_lookup_keys():
    tree, rep = _generate(
        [ROOT / "Onboarding", ROOT / "Onboarding" / "Step"],
        [
            ROOT / "Top.imageset",
            ROOT / "Onboarding" / "Logo.imageset",
            ROOT / "Onboarding" / "Step" / "Arrow-Left.imageset",
        ],
        prefix="R",
    )
    assert tree.name == "imagesXcassets"
    assert tree.qualified_name == "R.imagesXcassets"
    assert tree.access_level is AccessLevel.PUBLIC
    assert [(l.symbol, l.lookup_key) for l in tree.leaves] == [("top", "top")]
    onboarding = tree.child("onboarding")
    assert onboarding.qualified_name == "R.imagesXcassets.onboarding"
    assert onboarding.leaf("logo").lookup_key == "onboarding/logo"
    step = onboarding.child("step")
    assert step.leaf("arrowLeft").lookup_key == "onboarding/step/arrowLeft"
    assert step.leaf("arrowLeft").resource == "Arrow-Left"
    assert rep.warnings() == []


def test_duplicate_leaf_symbols_keep_first():
    tree, rep = _generate([], [ROOT / "Icon.imageset", ROOT / "icon.imageset"])
    assert [l.symbol for l in tree.leaves] == ["icon"]
    assert tree.leaves[0].resource == "Icon"
    (warning,) = rep.warnings(W_DUPLICATE_SYMBOL)
    assert warning["names"] == ["Icon", "icon"]


def test_empty_leaf_symbol_dropped():
    tree, rep = _generate([], [ROOT / "42.imageset", ROOT / "Ok.imageset"])
    assert [l.symbol for l in tree.leaves] == ["ok"]
    assert len(rep.warnings(W_EMPTY_SYMBOL)) == 1


def test_leaf_wins_over_namespace_of_same_name():
    tree, rep = _generate(
        [ROOT / "Logo"],
        [ROOT / "logo.imageset", ROOT / "Logo" / "Inner.imageset"],
    )
    assert [l.symbol for l in tree.leaves] == ["logo"]
    assert tree.children == ()
    assert len(rep.warnings(W_NAMESPACE_CONFLICT)) == 1


def test_merge_applies_below_the_root():
    tree, rep = _generate(
        [
            ROOT / "Feature",
            ROOT / "Feature" / "Icons",
            ROOT / "Feature" / "Sub" / "icons",
        ],
        [
            ROOT / "Feature" / "Icons" / "Plus.imageset",
            ROOT / "Feature" / "Sub" / "icons" / "Minus.imageset",
        ],
    )
    feature = tree.child("feature")
    assert [c.name for c in feature.children] == ["icons"]
    icons = feature.child("icons")
    assert [l.symbol for l in icons.leaves] == ["minus", "plus"]
    # Merged images take the representative namespace's resource path.
    assert {l.lookup_key for l in icons.leaves} == {
        "feature/icons/minus",
        "feature/icons/plus",
    }


def test_no_shared_identifier_per_level():
    tree, _ = _generate(
        [ROOT / "A", ROOT / "Other" / "a", ROOT / "B"],
        [ROOT / "b.imageset", ROOT / "c.imageset", ROOT / "C.imageset"],
    )

    def check(node):
        names = [l.symbol for l in node.leaves] + [c.name for c in node.children]
        assert len(names) == len(set(names))
        for c in node.children:
            check(c)

    check(tree)
    assert [c.name for c in tree.children] == ["a"]


def test_output_is_deterministic():
    dirs = [ROOT / "Z", ROOT / "A", ROOT / "A" / "Deep"]
    leaves = [ROOT / "A" / "Deep" / "x.imageset", ROOT / "q.imageset", ROOT / "Z" / "k.imageset"]
    first, _ = _generate(dirs, leaves)
    second, _ = _generate(list(reversed(dirs)), list(reversed(leaves)))
    assert first.to_dict() == second.to_dict()
    namespaces, images = first.count()
    assert (namespaces, images) == (3, 3)
