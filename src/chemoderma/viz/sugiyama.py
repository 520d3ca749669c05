"""Layered layout collaborator backed by grandalf's Sugiyama implementation.

A fresh grandalf graph is built on every call and discarded afterwards, so
no vertex or edge from one layout pass can leak into the next.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from grandalf.graphs import Edge, Graph, Vertex
from grandalf.layouts import SugiyamaLayout

from chemoderma.viz.coordinates import Point, Size
from chemoderma.viz.layered import layered_layout
from chemoderma.viz.layout import LayoutOptions

logger = logging.getLogger(__name__)


class _VertexView:
    """Minimal view object required by grandalf's SugiyamaLayout."""

    def __init__(self, w: float, h: float) -> None:
        self.w = w
        self.h = h
        # center coordinates, set by the layout engine
        self.xy = (0.0, 0.0)


def sugiyama_layout(
    sizes: Mapping[str, Size],
    edges: Sequence[tuple[str, str]],
    options: LayoutOptions,
) -> dict[str, Point]:
    """Lay out a DAG with grandalf (Sugiyama algorithm).

    grandalf stacks ranks vertically. For left-to-right layouts each box is
    handed over with width and height swapped and the resulting axes are
    swapped back. Connected components are placed side by side along the
    cross axis, and the final drawing is shifted so its top-left corner
    sits at the origin.

    grandalf ranks and orders vertices recursively. A graph too deep for
    the interpreter's recursion limit is placed with
    :func:`~chemoderma.viz.layered.layered_layout` instead.

    Returns:
        Center point of every node that grandalf positioned
    """
    if not sizes:
        return {}

    horizontal = options.direction == "LR"
    vertices: dict[str, Vertex] = {}
    for node_id, size in sizes.items():
        v = Vertex(node_id)
        if horizontal:
            v.view = _VertexView(w=size.height, h=size.width)
        else:
            v.view = _VertexView(w=size.width, h=size.height)
        vertices[node_id] = v

    edge_list = [
        Edge(vertices[source], vertices[target])
        for source, target in edges
        if source in vertices and target in vertices
    ]
    try:
        _layout_components(Graph(list(vertices.values()), edge_list), options)
    except RecursionError:
        logger.warning(
            "Graph of %d nodes is too deep for Sugiyama layout, using layered layout",
            len(sizes),
        )
        return layered_layout(sizes, edges, options)

    return _normalize(vertices, horizontal)


def _layout_components(g: Graph, options: LayoutOptions) -> None:
    offset = 0.0
    for component in g.C:
        extent = _layout_component(component, options)
        for v in component.sV:
            x, y = v.view.xy
            v.view.xy = (x + offset, y)
        offset += extent + options.node_separation


def _layout_component(component, options: LayoutOptions) -> float:
    """Run Sugiyama on one connected component. Returns its cross-axis extent."""
    members = list(component.sV)
    if len(members) == 1:
        v = members[0]
        v.view.xy = (v.view.w / 2, v.view.h / 2)
        return v.view.w

    sug = SugiyamaLayout(component)
    sug.xspace = options.node_separation
    sug.yspace = options.rank_separation
    roots = [v for v in members if not v.e_in()]
    sug.init_all(roots=roots)
    sug.draw()

    left = min(v.view.xy[0] - v.view.w / 2 for v in members)
    right = max(v.view.xy[0] + v.view.w / 2 for v in members)
    for v in members:
        x, y = v.view.xy
        v.view.xy = (x - left, y)
    return right - left


def _normalize(vertices: dict[str, Vertex], horizontal: bool) -> dict[str, Point]:
    min_x = min(v.view.xy[0] - v.view.w / 2 for v in vertices.values())
    min_y = min(v.view.xy[1] - v.view.h / 2 for v in vertices.values())

    positions: dict[str, Point] = {}
    for node_id, v in vertices.items():
        x = v.view.xy[0] - min_x
        y = v.view.xy[1] - min_y
        positions[node_id] = Point(y, x) if horizontal else Point(x, y)
    logger.debug("Sugiyama placed %d nodes", len(positions))
    return positions
