"""Minimal deterministic layered layout.

A tidy-tree placement with the ``LayoutFn`` signature: rank = depth from a
root, leaves take consecutive slots across the rank axis in source order,
and every parent is centered on its first and last child. Coordinates are
exact and reproducible, which makes it the collaborator of choice in tests.
Nodes with more than one parent are placed under the first one seen.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from chemoderma.viz.coordinates import Point, Size
from chemoderma.viz.layout import LayoutOptions


def layered_layout(
    sizes: Mapping[str, Size],
    edges: Sequence[tuple[str, str]],
    options: LayoutOptions,
) -> dict[str, Point]:
    """Place nodes in left-to-right (or top-to-bottom) ranks.

    Example:
        >>> sizes = {"r": Size(200, 80), "a": Size(200, 80)}
        >>> layered_layout(sizes, [("r", "a")], LayoutOptions())
        {'r': Point(x=100.0, y=40.0), 'a': Point(x=500.0, y=40.0)}
    """
    if not sizes:
        return {}

    children: dict[str, list[str]] = {node_id: [] for node_id in sizes}
    has_parent: set[str] = set()
    for source, target in edges:
        if source not in sizes or target not in sizes or target in has_parent:
            continue
        children[source].append(target)
        has_parent.add(target)

    roots = [node_id for node_id in sizes if node_id not in has_parent]
    ranks, slots = _assign_ranks_and_slots(roots, children)

    horizontal = options.direction == "LR"
    widths = [s.width for s in sizes.values()]
    heights = [s.height for s in sizes.values()]
    rank_size = max(widths) if horizontal else max(heights)
    cross_size = max(heights) if horizontal else max(widths)
    rank_pitch = rank_size + options.rank_separation
    cross_pitch = cross_size + options.node_separation

    positions: dict[str, Point] = {}
    for node_id in sizes:
        if node_id not in ranks:
            continue
        along = ranks[node_id] * rank_pitch + rank_size / 2
        across = slots[node_id] * cross_pitch + cross_size / 2
        positions[node_id] = Point(along, across) if horizontal else Point(across, along)
    return positions


def _assign_ranks_and_slots(
    roots: list[str],
    children: dict[str, list[str]],
) -> tuple[dict[str, int], dict[str, float]]:
    """Iterative post-order walk: leaves get the next free slot, parents the midpoint."""
    ranks: dict[str, int] = {}
    slots: dict[str, float] = {}
    next_slot = 0

    for root in roots:
        ranks[root] = 0
        stack: list[tuple[str, bool]] = [(root, False)]
        while stack:
            node_id, done = stack.pop()
            kids = children[node_id]
            if done:
                if kids:
                    slots[node_id] = (slots[kids[0]] + slots[kids[-1]]) / 2
                else:
                    slots[node_id] = next_slot
                    next_slot += 1
                continue
            stack.append((node_id, True))
            for child in reversed(kids):
                ranks[child] = ranks[node_id] + 1
                stack.append((child, False))

    return ranks, slots
