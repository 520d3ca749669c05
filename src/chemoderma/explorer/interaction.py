"""Interaction dispatcher: maps node clicks to expansion or detail view.

Expansion and the detail view are independent axes. Clicking a
non-phenotype node toggles its expansion and leaves any open detail panel
alone; clicking a phenotype opens (or replaces) the detail selection and
never touches expansion.
"""

from __future__ import annotations

import logging
import warnings
from enum import Enum
from typing import TYPE_CHECKING, Callable

from chemoderma.events.dispatcher import EventDispatcher
from chemoderma.events.types import DetailClosedEvent, DetailOpenedEvent, StaleReferenceEvent
from chemoderma.exceptions import StaleReferenceWarning
from chemoderma.explorer.details import PhenotypeDetails

if TYPE_CHECKING:
    from chemoderma.graph.core import GraphNode

logger = logging.getLogger(__name__)


class DetailState(Enum):
    """State of the phenotype detail view.

    Values:
        IDLE: No phenotype selected.
        DETAIL_OPEN: A phenotype's attributes are shown.
    """

    IDLE = "idle"
    DETAIL_OPEN = "detail_open"


class InteractionDispatcher:
    """Two-state machine driven by ``click`` and ``close``.

    Args:
        lookup: Resolves a node id against the current graph (None if absent)
        on_toggle: Called with a node id to flip its expansion
        events: Session event dispatcher; events are dropped when omitted
    """

    def __init__(
        self,
        lookup: Callable[[str], GraphNode | None],
        on_toggle: Callable[[str], None],
        *,
        events: EventDispatcher | None = None,
    ) -> None:
        self._lookup = lookup
        self._on_toggle = on_toggle
        self._events = events if events is not None else EventDispatcher()
        self._state = DetailState.IDLE
        self._selected: PhenotypeDetails | None = None

    @property
    def state(self) -> DetailState:
        return self._state

    @property
    def selected(self) -> PhenotypeDetails | None:
        """Active phenotype selection, None while idle."""
        return self._selected

    def click(self, node: GraphNode) -> None:
        """Handle a click on a rendered node."""
        if not node.is_phenotype:
            self._on_toggle(node.id)
            return

        current = self._lookup(node.id)
        if current is None or not current.is_phenotype:
            self._stale(node.id)
            return

        self._selected = PhenotypeDetails.from_node(current)
        self._state = DetailState.DETAIL_OPEN
        logger.debug("Opened details for %s", node.id)
        self._events.publish(DetailOpenedEvent, node_id=node.id)

    def close(self) -> None:
        """Close the detail view. Safe no-op while idle."""
        if self._state is DetailState.IDLE:
            return
        node_id = self._selected.id if self._selected else ""
        self._selected = None
        self._state = DetailState.IDLE
        self._events.publish(DetailClosedEvent, node_id=node_id)

    def reset(self) -> None:
        """Drop any selection without emitting events (new dataset loaded)."""
        self._selected = None
        self._state = DetailState.IDLE

    def _stale(self, node_id: str) -> None:
        warnings.warn(
            f"Node '{node_id}' is not a phenotype in the current graph; click ignored",
            StaleReferenceWarning,
            stacklevel=3,
        )
        self._events.publish(StaleReferenceEvent, node_id=node_id)
