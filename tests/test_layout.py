"""Tests for the layout orchestrator and the layered stand-in layout."""

import pytest

from chemoderma.graph import flatten
from chemoderma.viz.coordinates import Point, Size, center_to_top_left, top_left_to_center
from chemoderma.viz.disclosure import DisclosureState
from chemoderma.viz.layered import layered_layout
from chemoderma.viz.layout import (
    FILTERED_SPACING,
    INITIAL_SPACING,
    LayoutOptions,
    Spacing,
    layout_subgraph,
)
from chemoderma.viz.visibility import resolve


class RecordingLayout:
    """Layout collaborator double that records its inputs."""

    def __init__(self, centers=None):
        self.centers = centers
        self.calls = []

    def __call__(self, sizes, edges, options):
        self.calls.append((dict(sizes), list(edges), options))
        if self.centers is not None:
            return self.centers
        return {node_id: Point(10.0 * i, 5.0) for i, node_id in enumerate(sizes)}


class TestCoordinates:
    def test_center_to_top_left(self):
        assert center_to_top_left(Point(100, 40), Size(200, 80)) == Point(0, 0)

    def test_round_trip(self):
        size = Size(200, 80)
        assert top_left_to_center(center_to_top_left(Point(7, 9), size), size) == Point(7, 9)


class TestSpacing:
    def test_presets(self):
        assert INITIAL_SPACING.node_separation == 40
        assert INITIAL_SPACING.rank_separation == 200
        assert FILTERED_SPACING.node_separation >= INITIAL_SPACING.node_separation
        assert FILTERED_SPACING.rank_separation >= INITIAL_SPACING.rank_separation

    def test_options(self):
        options = Spacing(node_separation=55, rank_separation=300).options()
        assert options == LayoutOptions(direction="LR", node_separation=55, rank_separation=300)

    def test_unknown_direction_rejected(self):
        with pytest.raises(ValueError, match="Unknown layout direction"):
            LayoutOptions(direction="RL")


class TestLayoutSubgraph:
    def test_collaborator_receives_uniform_boxes_and_edges(self, example_tree):
        g = flatten(example_tree)
        layout = RecordingLayout()
        layout_subgraph(g.nodes, g.edges, INITIAL_SPACING, layout)

        sizes, edges, options = layout.calls[0]
        assert sizes == {"root": Size(200, 80), "a": Size(200, 80), "b": Size(200, 80)}
        assert edges == [("root", "a"), ("a", "b")]
        assert options.direction == "LR"
        assert options.node_separation == 40
        assert options.rank_separation == 200

    def test_centers_converted_to_top_left(self, example_tree):
        g = flatten(example_tree)
        layout = RecordingLayout({"root": Point(100, 40), "a": Point(500, 40), "b": Point(900, 40)})
        positioned = layout_subgraph(g.nodes, g.edges, INITIAL_SPACING, layout)
        assert [n.position for n in positioned] == [Point(0, 0), Point(400, 0), Point(800, 0)]

    def test_unpositioned_node_keeps_previous_position(self, example_tree):
        g = flatten(example_tree)
        first = layout_subgraph(g.nodes, g.edges, INITIAL_SPACING, RecordingLayout())
        partial = RecordingLayout({"root": Point(100, 40)})
        second = layout_subgraph(first, g.edges, FILTERED_SPACING, partial)

        assert second[0].position == Point(0, 0)
        assert second[1].position == first[1].position
        assert second[2].position == first[2].position

    def test_unpositioned_node_without_history_stays_unset(self, example_tree):
        g = flatten(example_tree)
        positioned = layout_subgraph(g.nodes, g.edges, INITIAL_SPACING, RecordingLayout({}))
        assert all(n.position is None for n in positioned)

    def test_inputs_not_mutated(self, example_tree):
        g = flatten(example_tree)
        layout_subgraph(g.nodes, g.edges, INITIAL_SPACING, RecordingLayout())
        assert all(n.position is None for n in g.nodes)

    def test_only_visible_nodes_are_laid_out(self, chemo_tree):
        g = flatten(chemo_tree)
        visible = resolve(g, DisclosureState.of(["root"]))
        layout = RecordingLayout()
        positioned = layout_subgraph(visible.nodes, visible.edges, FILTERED_SPACING, layout)

        sizes, edges, _ = layout.calls[0]
        assert list(sizes) == ["root", "cytotoxic", "targeted"]
        assert edges == [("root", "cytotoxic"), ("root", "targeted")]
        assert [n.id for n in positioned] == ["root", "cytotoxic", "targeted"]

    def test_empty_input(self):
        assert layout_subgraph([], [], INITIAL_SPACING, layered_layout) == ()


class TestLayeredLayout:
    def test_chain_left_to_right(self):
        sizes = {n: Size(200, 80) for n in ("root", "a", "b")}
        centers = layered_layout(sizes, [("root", "a"), ("a", "b")], LayoutOptions())
        assert centers == {
            "root": Point(100, 40),
            "a": Point(500, 40),
            "b": Point(900, 40),
        }

    def test_parent_centered_on_children(self):
        sizes = {n: Size(200, 80) for n in ("r", "x", "y")}
        centers = layered_layout(sizes, [("r", "x"), ("r", "y")], LayoutOptions())
        assert centers["x"] == Point(500, 40)
        assert centers["y"] == Point(500, 160)
        assert centers["r"] == Point(100, 100)

    def test_top_to_bottom(self):
        sizes = {n: Size(200, 80) for n in ("r", "x")}
        centers = layered_layout(sizes, [("r", "x")], LayoutOptions(direction="TB"))
        assert centers["r"] == Point(100, 40)
        assert centers["x"] == Point(100, 320)

    def test_separation_parameters(self):
        sizes = {n: Size(200, 80) for n in ("r", "x", "y")}
        options = LayoutOptions(node_separation=60, rank_separation=350)
        centers = layered_layout(sizes, [("r", "x"), ("r", "y")], options)
        assert centers["x"].x - centers["r"].x == 550
        assert centers["y"].y - centers["x"].y == 140

    def test_single_node(self):
        assert layered_layout({"r": Size(200, 80)}, [], LayoutOptions()) == {"r": Point(100, 40)}

    def test_edges_to_unknown_nodes_ignored(self):
        centers = layered_layout({"r": Size(200, 80)}, [("r", "ghost")], LayoutOptions())
        assert list(centers) == ["r"]

    def test_deep_chain(self):
        ids = [f"n{i}" for i in range(3000)]
        sizes = {n: Size(10, 10) for n in ids}
        edges = list(zip(ids, ids[1:]))
        centers = layered_layout(sizes, edges, LayoutOptions(node_separation=0, rank_separation=0))
        assert centers["n2999"] == Point(29995, 5)

    def test_example_tree_end_to_end(self, example_tree):
        g = flatten(example_tree)
        visible = resolve(g, DisclosureState.of(["root", "a"]))
        positioned = layout_subgraph(visible.nodes, visible.edges, INITIAL_SPACING, layered_layout)
        assert [n.position for n in positioned] == [Point(0, 0), Point(400, 0), Point(800, 0)]
