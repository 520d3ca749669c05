"""Tests for the visibility resolver."""

from itertools import combinations

import pytest

from chemoderma.graph import flatten
from chemoderma.viz.disclosure import DisclosureState
from chemoderma.viz.visibility import (
    hidden_descendant_count,
    is_node_visible,
    resolve,
)
from tests.conftest import make_chain


def _edge_pairs(visible):
    return [(e.source, e.target) for e in visible.edges]


class TestExampleTree:
    def test_empty_state_shows_only_root(self, example_tree):
        visible = resolve(flatten(example_tree), DisclosureState())
        assert visible.node_ids == ["root"]
        assert visible.edges == ()

    def test_root_expanded(self, example_tree):
        visible = resolve(flatten(example_tree), DisclosureState.of(["root"]))
        assert visible.node_ids == ["root", "a"]
        assert _edge_pairs(visible) == [("root", "a")]

    def test_root_and_a_expanded(self, example_tree):
        visible = resolve(flatten(example_tree), DisclosureState.of(["root", "a"]))
        assert visible.node_ids == ["root", "a", "b"]
        assert _edge_pairs(visible) == [("root", "a"), ("a", "b")]

    def test_child_expanded_without_root_stays_hidden(self, example_tree):
        visible = resolve(flatten(example_tree), DisclosureState.of(["a"]))
        assert visible.node_ids == ["root"]


class TestProperties:
    def test_fully_expanded_shows_everything(self, chemo_tree):
        g = flatten(chemo_tree)
        visible = resolve(g, DisclosureState.fully_expanded(g))
        assert visible.nodes == g.nodes
        assert visible.edges == g.edges

    def test_root_always_visible_and_prefix_closed(self, chemo_tree):
        g = flatten(chemo_tree)
        ids = [n.id for n in g.nodes]
        for size in range(0, 4):
            for expanded in combinations(ids, size):
                visible = resolve(g, DisclosureState.of(expanded))
                visible_ids = set(visible.node_ids)
                assert g.root_id in visible_ids
                for node_id in visible_ids - {g.root_id}:
                    parent = g.parent_of(node_id)
                    assert parent in visible_ids
                    assert parent in expanded

    def test_edges_only_between_visible_nodes(self, chemo_tree):
        g = flatten(chemo_tree)
        visible = resolve(g, DisclosureState.of(["root", "cytotoxic"]))
        visible_ids = set(visible.node_ids)
        for edge in visible.edges:
            assert edge.source in visible_ids and edge.target in visible_ids
        assert len(visible.edges) == len(visible.nodes) - 1

    def test_original_order_preserved(self, chemo_tree):
        g = flatten(chemo_tree)
        visible = resolve(g, DisclosureState.of(["root", "targeted", "cytotoxic"]))
        assert visible.node_ids == ["root", "cytotoxic", "antimetabolites", "targeted", "egfr"]

    def test_unknown_ids_in_state_are_ignored(self, example_tree):
        visible = resolve(flatten(example_tree), DisclosureState.of(["ghost", "root"]))
        assert visible.node_ids == ["root", "a"]

    def test_collapsing_hides_whole_subtree(self, chemo_tree):
        g = flatten(chemo_tree)
        state = DisclosureState.of(["root", "cytotoxic", "antimetabolites"])
        assert "hfs" in resolve(g, state)
        collapsed = resolve(g, state.toggle("cytotoxic"))
        assert "antimetabolites" not in collapsed
        assert "hfs" not in collapsed

    def test_root_with_custom_id(self):
        g = flatten({"id": "chemoderma", "name": "C", "children": [{"id": "x"}]})
        assert resolve(g, DisclosureState.of(["chemoderma"])).node_ids == ["chemoderma", "x"]
        assert resolve(g, DisclosureState.of(["root"])).node_ids == ["chemoderma"]


class TestDeepTrees:
    def test_deep_chain_fully_expanded(self):
        g = flatten(make_chain(5000))
        visible = resolve(g, DisclosureState.fully_expanded(g))
        assert len(visible.nodes) == 5001
        assert len(visible.edges) == 5000


class TestIsNodeVisible:
    @pytest.mark.parametrize(
        "node_id,expected",
        [("root", True), ("cytotoxic", True), ("antimetabolites", True), ("hfs", False), ("ghost", False)],
    )
    def test_matches_resolve(self, chemo_tree, node_id, expected):
        g = flatten(chemo_tree)
        state = DisclosureState.of(["root", "cytotoxic"])
        assert is_node_visible(g, state, node_id) is expected
        assert (node_id in resolve(g, state)) is expected


class TestHiddenDescendantCount:
    def test_collapsed_root(self, chemo_tree):
        g = flatten(chemo_tree)
        assert hidden_descendant_count(g, DisclosureState(), "root") == len(g.nodes) - 1

    def test_leaf(self, chemo_tree):
        g = flatten(chemo_tree)
        assert hidden_descendant_count(g, DisclosureState(), "hfs") == 0

    def test_partially_expanded(self, chemo_tree):
        g = flatten(chemo_tree)
        state = DisclosureState.of(["root", "cytotoxic"])
        assert hidden_descendant_count(g, state, "cytotoxic") == 2
        assert hidden_descendant_count(g, state, "targeted") == 2

    def test_unknown_id(self, chemo_tree):
        g = flatten(chemo_tree)
        assert hidden_descendant_count(g, DisclosureState(), "ghost") == 0

    def test_precomputed_visible_set_skips_traversal(self, chemo_tree, monkeypatch):
        from chemoderma.viz import visibility

        g = flatten(chemo_tree)
        state = DisclosureState.of(["root", "cytotoxic"])
        visible = visibility.collect_visible_ids(g, state)

        def fail(*args):
            raise AssertionError("visible set recomputed")

        monkeypatch.setattr(visibility, "collect_visible_ids", fail)
        counts = {n.id: hidden_descendant_count(g, state, n.id, visible) for n in g.nodes if n.id in visible}
        assert counts == {"root": 4, "cytotoxic": 2, "antimetabolites": 2, "targeted": 2}

    def test_deep_chain(self):
        g = flatten(make_chain(3000))
        assert hidden_descendant_count(g, DisclosureState.of(["root"]), "root") == 2999


class TestIsNodeVisibleDeep:
    def test_deep_chain(self):
        g = flatten(make_chain(3000))
        assert is_node_visible(g, DisclosureState.fully_expanded(g), "n3000")
        assert not is_node_visible(g, DisclosureState.of(["root"]), "n3000")
