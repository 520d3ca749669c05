"""Tree flattener: nested classification tree -> flat nodes and edges."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from chemoderma.graph.core import DEFAULT_TYPE, FlatGraph, GraphEdge, GraphNode
from chemoderma.graph.validation import get_children, validate_node, validate_unique_id

logger = logging.getLogger(__name__)

SYNTHETIC_ID_PREFIX = "node-"


def flatten(tree: Mapping[str, Any]) -> FlatGraph:
    """Flatten a nested tree into a FlatGraph.

    Nodes are visited depth-first in preorder with children in their given
    order, so the same tree always yields the same ids in the same order.
    Nodes without an ``id`` get ``node-<n>``, where ``n`` counts synthesized
    ids within this call only.

    The traversal uses an explicit stack, so tree depth is not bounded by
    the interpreter's recursion limit.

    Args:
        tree: Root TreeNode mapping (``name`` required, ``children`` optional)

    Returns:
        FlatGraph with preorder nodes/edges and the resolved root id

    Raises:
        MalformedTreeError: If the root is not an object or has no name, a
            ``children`` field is not a list, a child is not an object, or
            two nodes resolve to the same id. Synthesized ids share the id
            namespace, so an explicit id such as ``"node-1"`` collides with
            the second synthesized id and is rejected the same way.

    Example:
        >>> g = flatten({"id": "root", "name": "R", "children": [{"name": "A"}]})
        >>> [n.id for n in g.nodes]
        ['root', 'node-0']
        >>> [(e.source, e.target) for e in g.edges]
        [('root', 'node-0')]
    """
    validate_node(tree, "root", is_root=True)

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    seen: set[str] = set()
    counter = 0

    stack: list[tuple[Any, str | None, str]] = [(tree, None, "root")]
    while stack:
        source, parent_id, path = stack.pop()
        if parent_id is not None:
            validate_node(source, path, is_root=False)

        node_id, counter = _resolve_id(source, counter)
        validate_unique_id(node_id, seen, path)
        seen.add(node_id)

        nodes.append(_make_node(source, node_id))
        if parent_id is not None:
            edges.append(GraphEdge.between(parent_id, node_id))

        children = get_children(source, path)
        for i in range(len(children) - 1, -1, -1):
            stack.append((children[i], node_id, f"{path}.children[{i}]"))

    logger.debug("Flattened tree into %d nodes and %d edges", len(nodes), len(edges))
    return FlatGraph(nodes=tuple(nodes), edges=tuple(edges), root_id=nodes[0].id)


def _resolve_id(source: Mapping[str, Any], counter: int) -> tuple[str, int]:
    """Return (node_id, next_counter). Only synthesized ids advance the counter."""
    explicit = source.get("id")
    if explicit is not None and explicit != "":
        return str(explicit), counter
    return f"{SYNTHETIC_ID_PREFIX}{counter}", counter + 1


def _make_node(source: Mapping[str, Any], node_id: str) -> GraphNode:
    attributes = {key: value for key, value in source.items() if key != "children"}
    name = source.get("name")
    attributes["label"] = name if name else node_id
    return GraphNode(
        id=node_id,
        type=source.get("type") or DEFAULT_TYPE,
        attributes=attributes,
    )
