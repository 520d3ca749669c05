"""Event types emitted by an explorer session."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field


def _generate_event_id() -> str:
    """Generate a unique event ID."""
    return uuid.uuid4().hex[:16]


def _now() -> float:
    """Current timestamp."""
    return time.time()


@dataclass(frozen=True)
class BaseEvent:
    """Base class for all session events.

    Attributes:
        session_id: Identifier of the session that produced this event.
        event_id: Unique identifier for this event.
        timestamp: Unix timestamp when the event was created.
    """

    session_id: str
    event_id: str = field(default_factory=_generate_event_id)
    timestamp: float = field(default_factory=_now)


@dataclass(frozen=True)
class DatasetLoadedEvent(BaseEvent):
    """Emitted when a tree has been flattened and laid out.

    Attributes:
        source: Path or URL of the dataset, empty for in-memory trees.
        root_id: Id of the root node.
        node_count: Number of nodes in the flattened graph.
    """

    source: str = ""
    root_id: str = ""
    node_count: int = 0


@dataclass(frozen=True)
class DatasetLoadFailedEvent(BaseEvent):
    """Emitted when fetching or parsing a dataset fails.

    Attributes:
        source: Path or URL of the dataset.
        error: Error message.
        error_type: Exception type name.
    """

    source: str = ""
    error: str = ""
    error_type: str = ""


@dataclass(frozen=True)
class ExpansionToggledEvent(BaseEvent):
    """Emitted when a node is expanded or collapsed.

    Attributes:
        node_id: Id of the toggled node.
        expanded: Membership after the toggle.
    """

    node_id: str = ""
    expanded: bool = False


@dataclass(frozen=True)
class LayoutComputedEvent(BaseEvent):
    """Emitted after every layout pass.

    Attributes:
        visible_nodes: Number of nodes laid out.
        visible_edges: Number of edges laid out.
        initial: True for the full-tree pass on load.
        duration_ms: Wall-clock duration in milliseconds.
    """

    visible_nodes: int = 0
    visible_edges: int = 0
    initial: bool = False
    duration_ms: float = 0.0


@dataclass(frozen=True)
class DetailOpenedEvent(BaseEvent):
    """Emitted when a phenotype detail view opens or its selection changes."""

    node_id: str = ""


@dataclass(frozen=True)
class DetailClosedEvent(BaseEvent):
    """Emitted when the detail view closes."""

    node_id: str = ""


@dataclass(frozen=True)
class StaleReferenceEvent(BaseEvent):
    """Emitted when a click references a node id missing from the graph."""

    node_id: str = ""


Event = (
    DatasetLoadedEvent
    | DatasetLoadFailedEvent
    | ExpansionToggledEvent
    | LayoutComputedEvent
    | DetailOpenedEvent
    | DetailClosedEvent
    | StaleReferenceEvent
)
