"""Flattened graph structure produced from a nested classification tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any, Iterator

import networkx as nx

if TYPE_CHECKING:
    from chemoderma.viz.coordinates import Point


ROOT_TYPE = "root"
THERAPY_CLASS_TYPE = "therapy_class"
DRUG_SUBCLASS_TYPE = "drug_subclass"
PHENOTYPE_TYPE = "phenotype"
DEFAULT_TYPE = "default"

NODE_TYPES = (ROOT_TYPE, THERAPY_CLASS_TYPE, DRUG_SUBCLASS_TYPE, PHENOTYPE_TYPE)


@dataclass(frozen=True)
class GraphNode:
    """One node of the flattened tree.

    Attributes:
        id: Unique node id (explicit from the source or synthesized)
        type: One of NODE_TYPES, or DEFAULT_TYPE when the source had none
        attributes: Every field of the source node except ``children``,
            plus a ``label`` field
        position: Top-left anchor once laid out, None before that
    """

    id: str
    type: str = DEFAULT_TYPE
    attributes: dict[str, Any] = field(default_factory=dict)
    position: Point | None = None

    @property
    def label(self) -> str:
        return self.attributes.get("label", self.id)

    @property
    def is_phenotype(self) -> bool:
        return self.type == PHENOTYPE_TYPE


@dataclass(frozen=True)
class GraphEdge:
    """Directed parent -> child edge."""

    id: str
    source: str
    target: str

    @classmethod
    def between(cls, source: str, target: str) -> GraphEdge:
        return cls(id=f"edge-{source}-{target}", source=source, target=target)


@dataclass(frozen=True)
class FlatGraph:
    """Immutable result of flattening one tree.

    ``nodes`` and ``edges`` are in depth-first preorder. The first node is
    the root and ``root_id`` names it explicitly, so nothing downstream has
    to assume a literal root id.
    """

    nodes: tuple[GraphNode, ...]
    edges: tuple[GraphEdge, ...]
    root_id: str

    @cached_property
    def _index(self) -> dict[str, GraphNode]:
        return {n.id: n for n in self.nodes}

    @cached_property
    def _children(self) -> dict[str, list[str]]:
        children: dict[str, list[str]] = {}
        for edge in self.edges:
            children.setdefault(edge.source, []).append(edge.target)
        return children

    @cached_property
    def _parents(self) -> dict[str, str]:
        return {edge.target: edge.source for edge in self.edges}

    @property
    def root(self) -> GraphNode:
        return self._index[self.root_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes)

    def get_node(self, node_id: str) -> GraphNode | None:
        """Look up a node by id. Returns None for unknown ids."""
        return self._index.get(node_id)

    def children_of(self, node_id: str) -> list[str]:
        """Direct children of a node, in source order."""
        return list(self._children.get(node_id, ()))

    def parent_of(self, node_id: str) -> str | None:
        """Parent id, or None for the root and unknown ids."""
        return self._parents.get(node_id)

    def depth_of(self, node_id: str) -> int:
        """Number of edges between the root and ``node_id`` (0 for unknown ids)."""
        return self._depths.get(node_id, 0)

    @property
    def max_depth(self) -> int:
        """Depth of the deepest node."""
        return max(self._depths.values())

    def ancestors_of(self, node_id: str) -> set[str]:
        """Every node on the parent chain of ``node_id``."""
        if node_id not in self._digraph:
            return set()
        return nx.ancestors(self._digraph, node_id)

    def descendants_of(self, node_id: str) -> set[str]:
        """Every node in the subtree below ``node_id``."""
        if node_id not in self._digraph:
            return set()
        return nx.descendants(self._digraph, node_id)

    def with_nodes(self, nodes: tuple[GraphNode, ...]) -> FlatGraph:
        """Copy of this graph with node records replaced (e.g. positioned)."""
        return FlatGraph(nodes=nodes, edges=self.edges, root_id=self.root_id)

    @cached_property
    def _digraph(self) -> nx.DiGraph:
        G = nx.DiGraph()
        for node in self.nodes:
            attrs = dict(node.attributes)
            attrs["type"] = node.type
            attrs["parent"] = self.parent_of(node.id)
            G.add_node(node.id, **attrs)
        for edge in self.edges:
            G.add_edge(edge.source, edge.target, id=edge.id)
        G.graph["root"] = self.root_id
        return G

    @cached_property
    def _depths(self) -> dict[str, int]:
        return nx.single_source_shortest_path_length(self._digraph, self.root_id)

    def to_networkx(self) -> nx.DiGraph:
        """Build a NetworkX view of the graph.

        Node attributes include ``type``, ``parent`` and the source
        attributes. The returned DiGraph is a copy and safe to mutate.
        """
        return self._digraph.copy()
