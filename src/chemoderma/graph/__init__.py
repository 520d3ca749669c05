"""Graph package - flattened tree structure and the flattener."""

from chemoderma.graph.core import (
    DEFAULT_TYPE,
    DRUG_SUBCLASS_TYPE,
    NODE_TYPES,
    PHENOTYPE_TYPE,
    ROOT_TYPE,
    THERAPY_CLASS_TYPE,
    FlatGraph,
    GraphEdge,
    GraphNode,
)
from chemoderma.graph.flatten import flatten

__all__ = [
    "DEFAULT_TYPE",
    "DRUG_SUBCLASS_TYPE",
    "FlatGraph",
    "GraphEdge",
    "GraphNode",
    "NODE_TYPES",
    "PHENOTYPE_TYPE",
    "ROOT_TYPE",
    "THERAPY_CLASS_TYPE",
    "flatten",
]
