"""Event processor base classes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chemoderma.events.types import (
        DatasetLoadedEvent,
        DatasetLoadFailedEvent,
        DetailClosedEvent,
        DetailOpenedEvent,
        Event,
        ExpansionToggledEvent,
        LayoutComputedEvent,
        StaleReferenceEvent,
    )


# Mapping from event class name to handler method name.
_EVENT_METHOD_MAP: dict[str, str] = {
    "DatasetLoadedEvent": "on_dataset_loaded",
    "DatasetLoadFailedEvent": "on_dataset_load_failed",
    "ExpansionToggledEvent": "on_expansion_toggled",
    "LayoutComputedEvent": "on_layout_computed",
    "DetailOpenedEvent": "on_detail_opened",
    "DetailClosedEvent": "on_detail_closed",
    "StaleReferenceEvent": "on_stale_reference",
}


class EventProcessor:
    """Base class for event consumers.

    Subclass and override ``on_event`` to receive all events,
    or use ``TypedEventProcessor`` for per-type dispatch.
    """

    def on_event(self, event: Event) -> None:
        """Called for every event. Override in subclasses."""

    def shutdown(self) -> None:
        """Called once when the session ends. Override to flush buffers."""


class TypedEventProcessor(EventProcessor):
    """Dispatches ``on_event`` to typed handler methods automatically.

    Override any of the ``on_*`` methods below to handle specific event types.
    Unhandled event types are silently ignored.
    """

    def on_event(self, event: Event) -> None:
        method_name = _EVENT_METHOD_MAP.get(type(event).__name__)
        if method_name is not None:
            method = getattr(self, method_name, None)
            if method is not None:
                method(event)

    def on_dataset_loaded(self, event: DatasetLoadedEvent) -> None: ...
    def on_dataset_load_failed(self, event: DatasetLoadFailedEvent) -> None: ...
    def on_expansion_toggled(self, event: ExpansionToggledEvent) -> None: ...
    def on_layout_computed(self, event: LayoutComputedEvent) -> None: ...
    def on_detail_opened(self, event: DetailOpenedEvent) -> None: ...
    def on_detail_closed(self, event: DetailClosedEvent) -> None: ...
    def on_stale_reference(self, event: StaleReferenceEvent) -> None: ...


class LoggingEventProcessor(TypedEventProcessor):
    """Writes session events to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("chemoderma.session")

    def on_dataset_loaded(self, event: DatasetLoadedEvent) -> None:
        self._logger.info(
            "Dataset loaded from %s: %d nodes (root %s)",
            event.source or "<memory>",
            event.node_count,
            event.root_id,
        )

    def on_dataset_load_failed(self, event: DatasetLoadFailedEvent) -> None:
        self._logger.error("Dataset load failed (%s): %s", event.error_type, event.error)

    def on_expansion_toggled(self, event: ExpansionToggledEvent) -> None:
        self._logger.debug(
            "%s %s", "Expanded" if event.expanded else "Collapsed", event.node_id
        )

    def on_layout_computed(self, event: LayoutComputedEvent) -> None:
        self._logger.debug(
            "Layout: %d nodes, %d edges in %.1fms",
            event.visible_nodes,
            event.visible_edges,
            event.duration_ms,
        )

    def on_stale_reference(self, event: StaleReferenceEvent) -> None:
        self._logger.warning("Ignoring click on unknown node %s", event.node_id)
