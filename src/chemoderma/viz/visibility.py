"""Visibility resolution for the disclosure graph.

A node is visible iff it is the root or every node on its parent chain is
expanded. The visible subgraph is recomputed from scratch on every
disclosure change and is never stored as an independent source of truth.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chemoderma.graph.core import FlatGraph, GraphEdge, GraphNode
    from chemoderma.viz.disclosure import DisclosureState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisibleSubgraph:
    """Nodes and edges currently eligible for display."""

    nodes: tuple[GraphNode, ...]
    edges: tuple[GraphEdge, ...]

    @property
    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def __contains__(self, node_id: object) -> bool:
        return any(n.id == node_id for n in self.nodes)


# =============================================================================
# Traversal
# =============================================================================


def get_children(graph: FlatGraph, parent_id: str) -> list[str]:
    """Get direct children of a node, in source order.

    Example:
        >>> from chemoderma.graph import flatten
        >>> g = flatten({"id": "r", "name": "R", "children": [{"id": "a"}, {"id": "b"}]})
        >>> get_children(g, "r")
        ['a', 'b']
    """
    return graph.children_of(parent_id)


def collect_visible_ids(graph: FlatGraph, state: DisclosureState) -> set[str]:
    """Breadth-first work-list from the root, descending only through expanded nodes.

    The root is seeded unconditionally; its children are added only when
    the root itself is expanded, the same rule as for every other node.
    """
    visible = {graph.root_id}
    frontier = deque([graph.root_id])
    while frontier:
        node_id = frontier.popleft()
        if node_id not in state:
            continue
        for child_id in get_children(graph, node_id):
            if child_id not in visible:
                visible.add(child_id)
                frontier.append(child_id)
    return visible


def resolve(graph: FlatGraph, state: DisclosureState) -> VisibleSubgraph:
    """Compute the visible subgraph for a disclosure state.

    Nodes keep their original relative order; an edge is kept iff both of
    its endpoints are visible. Total over any state, including the empty
    state and states naming ids that are not in the graph.

    Example:
        >>> from chemoderma.graph import flatten
        >>> from chemoderma.viz.disclosure import DisclosureState
        >>> g = flatten({"id": "r", "name": "R", "children": [{"id": "a"}]})
        >>> resolve(g, DisclosureState()).node_ids
        ['r']
        >>> resolve(g, DisclosureState.of(["r"])).node_ids
        ['r', 'a']
    """
    visible = collect_visible_ids(graph, state)
    nodes = tuple(n for n in graph.nodes if n.id in visible)
    edges = tuple(e for e in graph.edges if e.source in visible and e.target in visible)
    logger.debug(
        "Resolved %d/%d visible nodes for %d expanded ids",
        len(nodes),
        len(graph.nodes),
        len(state),
    )
    return VisibleSubgraph(nodes=nodes, edges=edges)


# =============================================================================
# Node Visibility
# =============================================================================


def is_node_visible(graph: FlatGraph, state: DisclosureState, node_id: str) -> bool:
    """Check if a node is visible (it exists and all ancestors are expanded)."""
    if node_id not in graph:
        return False
    return all(ancestor in state for ancestor in graph.ancestors_of(node_id))


def hidden_descendant_count(
    graph: FlatGraph,
    state: DisclosureState,
    node_id: str,
    visible: set[str] | None = None,
) -> int:
    """Number of descendants of ``node_id`` not shown under ``state``.

    Useful for collapsed-node badges. Zero for leaves and fully expanded
    subtrees. Pass ``visible`` (from :func:`collect_visible_ids`) when
    counting for many nodes under the same state.
    """
    if visible is None:
        visible = collect_visible_ids(graph, state)
    return sum(1 for descendant in graph.descendants_of(node_id) if descendant not in visible)
