"""Explorer session: wires flattener, disclosure, visibility and layout.

A session starts out awaiting data. Loading a tree flattens it, computes a
full-tree layout with the initial spacing (the base positions) and then
derives the visible subgraph. Every disclosure change re-resolves
visibility and re-runs the layout with the filtered spacing before
returning, so positions always belong to the current visible set.
"""

from __future__ import annotations

import logging
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from chemoderma.dataset import load_tree, load_tree_async
from chemoderma.events.dispatcher import EventDispatcher
from chemoderma.events.types import (
    DatasetLoadedEvent,
    DatasetLoadFailedEvent,
    ExpansionToggledEvent,
    LayoutComputedEvent,
)
from chemoderma.exceptions import DatasetLoadError
from chemoderma.explorer.interaction import DetailState, InteractionDispatcher
from chemoderma.graph.flatten import flatten
from chemoderma.viz.disclosure import DisclosureState
from chemoderma.viz.layout import FILTERED_SPACING, INITIAL_SPACING, LayoutFn, Spacing, layout_subgraph
from chemoderma.viz.sugiyama import sugiyama_layout
from chemoderma.viz.visibility import resolve

if TYPE_CHECKING:
    from chemoderma.events.processor import EventProcessor
    from chemoderma.explorer.details import PhenotypeDetails
    from chemoderma.graph.core import FlatGraph, GraphEdge, GraphNode

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Whether a graph is available.

    Values:
        AWAITING_DATA: No tree has loaded yet; clicks are ignored.
        READY: A graph is loaded and interactive.
    """

    AWAITING_DATA = "awaiting_data"
    READY = "ready"


class ExplorerSession:
    """Single-threaded explorer over one dataset at a time.

    Args:
        layout_fn: Layered layout collaborator
        initial_spacing: Preset for the full-tree layout on load
        filtered_spacing: Preset for re-layout of the visible subgraph
        processors: Event processors (observability sinks)
        strict_events: Propagate processor failures instead of logging them
    """

    def __init__(
        self,
        *,
        layout_fn: LayoutFn = sugiyama_layout,
        initial_spacing: Spacing = INITIAL_SPACING,
        filtered_spacing: Spacing = FILTERED_SPACING,
        processors: list[EventProcessor] | None = None,
        strict_events: bool = False,
    ) -> None:
        self.session_id = uuid.uuid4().hex[:12]
        self._layout_fn = layout_fn
        self._initial_spacing = initial_spacing
        self._filtered_spacing = filtered_spacing
        self._events = EventDispatcher(
            processors, session_id=self.session_id, strict=strict_events
        )

        self._graph: FlatGraph | None = None
        self._disclosure = DisclosureState()
        self._visible_nodes: tuple[GraphNode, ...] = ()
        self._visible_edges: tuple[GraphEdge, ...] = ()
        self._interaction = InteractionDispatcher(
            self._lookup,
            self.toggle,
            events=self._events,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        if self._graph is None:
            return SessionStatus.AWAITING_DATA
        return SessionStatus.READY

    @property
    def graph(self) -> FlatGraph | None:
        """Full graph with base (initial layout) positions."""
        return self._graph

    @property
    def disclosure(self) -> DisclosureState:
        return self._disclosure

    @property
    def visible_nodes(self) -> tuple[GraphNode, ...]:
        """Positioned visible nodes, ready for rendering."""
        return self._visible_nodes

    @property
    def visible_edges(self) -> tuple[GraphEdge, ...]:
        return self._visible_edges

    @property
    def detail_state(self) -> DetailState:
        return self._interaction.state

    @property
    def selected(self) -> PhenotypeDetails | None:
        return self._interaction.selected

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_tree(self, tree: Mapping[str, Any], *, source: str = "") -> FlatGraph:
        """Replace the current dataset with ``tree``.

        Raises:
            MalformedTreeError: The tree is structurally invalid. The
                previously loaded graph, disclosure and selection stay.
        """
        flat = flatten(tree)

        start = time.perf_counter()
        positioned = layout_subgraph(flat.nodes, flat.edges, self._initial_spacing, self._layout_fn)
        self._emit_layout(len(flat.nodes), len(flat.edges), initial=True, start=start)

        self._graph = flat.with_nodes(positioned)
        self._disclosure = DisclosureState()
        self._interaction.reset()
        self._recompute()

        self._events.publish(
            DatasetLoadedEvent,
            source=source,
            root_id=flat.root_id,
            node_count=len(flat.nodes),
        )
        return self._graph

    def load(self, source: str | Path) -> bool:
        """Fetch a dataset and load it. Returns False if the fetch failed.

        A failed fetch is logged and reported as a DatasetLoadFailedEvent;
        the session keeps its current status and there is no retry.
        """
        try:
            tree = load_tree(source)
        except DatasetLoadError as e:
            self._load_failed(e)
            return False
        self.load_tree(tree, source=str(source))
        return True

    async def load_async(self, source: str | Path) -> bool:
        """Async variant of :meth:`load`; only the fetch is awaited."""
        try:
            tree = await load_tree_async(source)
        except DatasetLoadError as e:
            self._load_failed(e)
            return False
        self.load_tree(tree, source=str(source))
        return True

    def _load_failed(self, error: DatasetLoadError) -> None:
        logger.warning("%s", error)
        self._events.publish(
            DatasetLoadFailedEvent,
            source=error.source,
            error=error.message,
            error_type=type(error).__name__,
        )

    # ------------------------------------------------------------------
    # Disclosure
    # ------------------------------------------------------------------

    def toggle(self, node_id: str) -> None:
        """Expand or collapse ``node_id`` and recompute the view."""
        if self._graph is None:
            logger.debug("Ignoring toggle of %s while awaiting data", node_id)
            return
        self._disclosure = self._disclosure.toggle(node_id)
        self._events.publish(
            ExpansionToggledEvent,
            node_id=node_id,
            expanded=node_id in self._disclosure,
        )
        self._recompute()

    def set_disclosure(self, state: DisclosureState) -> None:
        """Replace the whole disclosure state and recompute the view."""
        if self._graph is None:
            logger.debug("Ignoring disclosure change while awaiting data")
            return
        self._disclosure = state
        self._recompute()

    def expand_all(self) -> None:
        if self._graph is not None:
            self.set_disclosure(DisclosureState.fully_expanded(self._graph))

    def collapse_all(self) -> None:
        self.set_disclosure(DisclosureState())

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def click(self, node: GraphNode) -> None:
        """Route a node click. Ignored while awaiting data."""
        if self._graph is None:
            logger.debug("Ignoring click on %s while awaiting data", node.id)
            return
        self._interaction.click(node)

    def close(self) -> None:
        """Close the phenotype detail view."""
        self._interaction.close()

    def shutdown(self) -> None:
        self._events.shutdown()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookup(self, node_id: str) -> GraphNode | None:
        if self._graph is None:
            return None
        return self._graph.get_node(node_id)

    def _recompute(self) -> None:
        assert self._graph is not None
        visible = resolve(self._graph, self._disclosure)

        start = time.perf_counter()
        self._visible_nodes = layout_subgraph(
            visible.nodes, visible.edges, self._filtered_spacing, self._layout_fn
        )
        self._visible_edges = visible.edges
        self._emit_layout(len(visible.nodes), len(visible.edges), initial=False, start=start)

    def _emit_layout(self, nodes: int, edges: int, *, initial: bool, start: float) -> None:
        self._events.publish(
            LayoutComputedEvent,
            visible_nodes=nodes,
            visible_edges=edges,
            initial=initial,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
