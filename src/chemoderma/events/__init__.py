"""Event system for observing an explorer session."""

from chemoderma.events.dispatcher import EventDispatcher
from chemoderma.events.processor import (
    EventProcessor,
    LoggingEventProcessor,
    TypedEventProcessor,
)
from chemoderma.events.types import (
    BaseEvent,
    DatasetLoadedEvent,
    DatasetLoadFailedEvent,
    DetailClosedEvent,
    DetailOpenedEvent,
    Event,
    ExpansionToggledEvent,
    LayoutComputedEvent,
    StaleReferenceEvent,
)

__all__ = [
    # Event types
    "BaseEvent",
    "DatasetLoadFailedEvent",
    "DatasetLoadedEvent",
    "DetailClosedEvent",
    "DetailOpenedEvent",
    "Event",
    "ExpansionToggledEvent",
    "LayoutComputedEvent",
    "StaleReferenceEvent",
    # Processor interfaces
    "EventProcessor",
    "LoggingEventProcessor",
    "TypedEventProcessor",
    # Dispatcher
    "EventDispatcher",
]
