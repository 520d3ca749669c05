"""Disclosure, visibility and layout for the ChemoDERMA graph.

Usage:
    from chemoderma.graph import flatten
    from chemoderma.viz import DisclosureState, resolve, layout_subgraph, FILTERED_SPACING

    graph = flatten(tree)
    state = DisclosureState().toggle(graph.root_id)
    visible = resolve(graph, state)
    positioned = layout_subgraph(visible.nodes, visible.edges, FILTERED_SPACING, sugiyama_layout)
"""

from chemoderma.viz.coordinates import Point, Size, center_to_top_left
from chemoderma.viz.disclosure import DisclosureState, is_expanded, toggle
from chemoderma.viz.layered import layered_layout
from chemoderma.viz.layout import (
    FILTERED_SPACING,
    INITIAL_SPACING,
    LayoutFn,
    LayoutOptions,
    Spacing,
    layout_subgraph,
)
from chemoderma.viz.sugiyama import sugiyama_layout
from chemoderma.viz.visibility import (
    VisibleSubgraph,
    hidden_descendant_count,
    is_node_visible,
    resolve,
)

LAYOUTS = {
    "sugiyama": sugiyama_layout,
    "layered": layered_layout,
}

__all__ = [
    "DisclosureState",
    "FILTERED_SPACING",
    "INITIAL_SPACING",
    "LAYOUTS",
    "LayoutFn",
    "LayoutOptions",
    "Point",
    "Size",
    "Spacing",
    "VisibleSubgraph",
    "center_to_top_left",
    "hidden_descendant_count",
    "is_expanded",
    "is_node_visible",
    "layered_layout",
    "layout_subgraph",
    "resolve",
    "sugiyama_layout",
    "toggle",
]
