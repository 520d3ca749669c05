"""ChemoDERMA explorer - hierarchical disclosure graph engine."""

from chemoderma.dataset import DEFAULT_DATASET, load_tree, load_tree_async
from chemoderma.events import (
    BaseEvent,
    Event,
    EventDispatcher,
    EventProcessor,
    LoggingEventProcessor,
    TypedEventProcessor,
)
from chemoderma.exceptions import (
    DatasetLoadError,
    MalformedTreeError,
    StaleReferenceWarning,
)
from chemoderma.explorer import (
    DetailState,
    ExplorerSession,
    InteractionDispatcher,
    PhenotypeDetails,
    SessionStatus,
)
from chemoderma.graph import FlatGraph, GraphEdge, GraphNode, flatten
from chemoderma.viz import (
    FILTERED_SPACING,
    INITIAL_SPACING,
    DisclosureState,
    LayoutOptions,
    Spacing,
    VisibleSubgraph,
    layered_layout,
    layout_subgraph,
    resolve,
    sugiyama_layout,
)

__all__ = [
    # Graph
    "FlatGraph",
    "GraphEdge",
    "GraphNode",
    "flatten",
    # Disclosure / visibility / layout
    "DisclosureState",
    "FILTERED_SPACING",
    "INITIAL_SPACING",
    "LayoutOptions",
    "Spacing",
    "VisibleSubgraph",
    "layered_layout",
    "layout_subgraph",
    "resolve",
    "sugiyama_layout",
    # Session
    "DetailState",
    "ExplorerSession",
    "InteractionDispatcher",
    "PhenotypeDetails",
    "SessionStatus",
    # Dataset
    "DEFAULT_DATASET",
    "load_tree",
    "load_tree_async",
    # Events
    "BaseEvent",
    "Event",
    "EventDispatcher",
    "EventProcessor",
    "LoggingEventProcessor",
    "TypedEventProcessor",
    # Exceptions
    "DatasetLoadError",
    "MalformedTreeError",
    "StaleReferenceWarning",
]
