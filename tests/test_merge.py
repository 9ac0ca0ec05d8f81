from pathlib import Path

from assetcat.catalog.merge import merge_namespaces, report_merge_warnings
from assetcat.catalog.tree import NamespaceNode, NamespaceTreeBuilder
from assetcat.errors import W_EMPTY_SYMBOL, W_NAMESPACE_CONFLICT

from catalog_helper import RecordingReporter


def _node(name: str, leaves=(), children=()) -> NamespaceNode:
    return NamespaceNode(
        origin=("/", name),
        name=name,
        logical_path=name.lower(),
        resource_path=name.lower(),
        leaf_resources=list(leaves),
        children=list(children),
    )


def test_same_identifier_merges_into_first_seen():
    a = _node("Shared", ["A"], [_node("X")])
    b = _node("shared", ["B"], [_node("Y")])
    other = _node("Other", ["C"])

    result = merge_namespaces([a, other, b], set())

    assert [n.name for n in result.usable] == ["Shared", "Other"]
    merged = result.usable[0]
    assert merged.leaf_resources == ["A", "B"]
    assert [c.name for c in merged.children] == ["X", "Y"]
    assert merged.logical_path == "shared"
    assert result.conflicts == []


def test_merge_does_not_mutate_inputs():
    a = _node("Shared", ["A"])
    b = _node("Shared", ["B"])
    merge_namespaces([a, b], set())
    assert a.leaf_resources == ["A"]
    assert b.leaf_resources == ["B"]


def test_merge_order_is_associative_for_fixed_first_seen():
    a, b, c = (_node("Shared", [x]) for x in "ABC")
    at_once = merge_namespaces([a, b, c], set()).usable[0]
    ab = merge_namespaces([a, b], set()).usable[0]
    stepwise = merge_namespaces([ab, c], set()).usable[0]
    bc = merge_namespaces([b, c], set()).usable[0]
    other_way = merge_namespaces([a, bc], set()).usable[0]
    assert at_once.leaf_resources == stepwise.leaf_resources == other_way.leaf_resources
    assert at_once.leaf_resources == ["A", "B", "C"]


def test_namespace_conflicting_with_leaf_is_excluded():
    icons = _node("Icons", ["I"])
    logo = _node("Logo")
    result = merge_namespaces([icons, logo], {"icons"})
    assert [n.name for n in result.usable] == ["Logo"]
    assert [n.name for n in result.conflicts] == ["Icons"]

    rep = RecordingReporter()
    report_merge_warnings(result, rep, scope="R.image")
    (warning,) = rep.warnings(W_NAMESPACE_CONFLICT)
    assert warning["symbol"] == "icons"
    assert warning["scope"] == "R.image"


def test_empty_identifier_namespace_is_reported():
    result = merge_namespaces([_node("123"), _node("Ok")], set())
    assert [n.name for n in result.empties] == ["123"]
    rep = RecordingReporter()
    report_merge_warnings(result, rep, scope="")
    assert len(rep.warnings(W_EMPTY_SYMBOL)) == 1


def test_merge_of_built_branches():
    root_path = Path("/p/Images.xcassets")
    root = NamespaceTreeBuilder(root_path).build(
        [root_path / "Shared", root_path / "Feature" / "Shared"],
        [],
    )
    # Different parents: never merged with each other.
    assert [c.logical_path for c in root.children] == ["shared", "shared"]
