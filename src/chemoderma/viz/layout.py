"""Layout orchestration for the visible subgraph.

The layered layout algorithm itself is an external collaborator with the
``LayoutFn`` signature. This module hands it the visible nodes (all with the
same bounding box) and edges, then converts the returned centers into the
top-left anchors the renderer expects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Mapping, Protocol, Sequence

from chemoderma.viz.coordinates import Point, Size, center_to_top_left

if TYPE_CHECKING:
    from chemoderma.graph.core import GraphEdge, GraphNode

logger = logging.getLogger(__name__)

NODE_WIDTH = 200
NODE_HEIGHT = 80

DIRECTIONS = ("LR", "TB")


@dataclass(frozen=True)
class LayoutOptions:
    """Options passed through to the layout collaborator.

    Attributes:
        direction: "LR" (ranks run left-to-right) or "TB"
        node_separation: Gap between neighbouring nodes in the same rank
        rank_separation: Gap between consecutive ranks
    """

    direction: str = "LR"
    node_separation: float = 40
    rank_separation: float = 200

    def __post_init__(self) -> None:
        if self.direction not in DIRECTIONS:
            raise ValueError(
                f"Unknown layout direction '{self.direction}'. Use one of: {', '.join(DIRECTIONS)}"
            )


@dataclass(frozen=True)
class Spacing:
    """Node box and separation preset for one layout pass."""

    node_width: float = NODE_WIDTH
    node_height: float = NODE_HEIGHT
    node_separation: float = 40
    rank_separation: float = 200
    direction: str = "LR"

    @property
    def node_size(self) -> Size:
        return Size(self.node_width, self.node_height)

    def options(self) -> LayoutOptions:
        return LayoutOptions(
            direction=self.direction,
            node_separation=self.node_separation,
            rank_separation=self.rank_separation,
        )


# Full-tree layout computed once per dataset load
INITIAL_SPACING = Spacing(node_separation=40, rank_separation=200)
# Re-layout of the visible subgraph; wider, fewer nodes on screen
FILTERED_SPACING = Spacing(node_separation=50, rank_separation=250)


class LayoutFn(Protocol):
    """Layered layout collaborator.

    Receives every node's bounding box and the directed edges, returns the
    **center** of each node it could place. Implementations must build
    their own internal graph per call.
    """

    def __call__(
        self,
        sizes: Mapping[str, Size],
        edges: Sequence[tuple[str, str]],
        options: LayoutOptions,
    ) -> Mapping[str, Point]: ...


def layout_subgraph(
    nodes: Sequence[GraphNode],
    edges: Sequence[GraphEdge],
    spacing: Spacing,
    layout_fn: LayoutFn,
) -> tuple[GraphNode, ...]:
    """Position nodes with the layout collaborator.

    Args:
        nodes: Visible nodes, in display order
        edges: Visible edges (each one a directed rank constraint)
        spacing: Box size and separation preset for this pass
        layout_fn: Layered layout collaborator

    Returns:
        New GraphNode records with top-left ``position`` set. A node the
        collaborator did not return keeps whatever position it had.
    """
    size = spacing.node_size
    sizes = {node.id: size for node in nodes}
    pairs = [(edge.source, edge.target) for edge in edges]

    centers = layout_fn(sizes, pairs, spacing.options())

    positioned = []
    missing = []
    for node in nodes:
        center = centers.get(node.id)
        if center is None:
            missing.append(node.id)
            positioned.append(node)
            continue
        positioned.append(replace(node, position=center_to_top_left(center, size)))

    if missing:
        logger.debug("Layout left %d node(s) unpositioned: %s", len(missing), missing)
    return tuple(positioned)
