"""Session-scoped event fan-out."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from chemoderma.events.processor import EventProcessor
    from chemoderma.events.types import BaseEvent, Event

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="BaseEvent")


class EventDispatcher:
    """Delivers one explorer session's events to its processors.

    Every event published through the dispatcher carries the dispatcher's
    ``session_id``. Delivery is best-effort: a processor that raises is
    logged and skipped. With ``strict=True`` the error propagates to the
    caller instead.

    After :meth:`shutdown` the dispatcher is closed and further events are
    dropped.
    """

    def __init__(
        self,
        processors: list[EventProcessor] | None = None,
        *,
        session_id: str = "",
        strict: bool = False,
    ) -> None:
        self.session_id = session_id
        self._processors: list[EventProcessor] = list(processors) if processors else []
        self._strict = strict
        self._closed = False

    @property
    def active(self) -> bool:
        """True while open with at least one processor attached."""
        return not self._closed and bool(self._processors)

    def add(self, processor: EventProcessor) -> None:
        self._processors.append(processor)

    def remove(self, processor: EventProcessor) -> None:
        """Detach a processor. Unknown processors are ignored."""
        if processor in self._processors:
            self._processors.remove(processor)

    def publish(self, event_type: type[E], **fields: Any) -> E | None:
        """Build an event stamped with this session's id and emit it.

        Nothing is constructed when no processor would receive it.

        Returns:
            The emitted event, or None when the dispatcher is inactive
        """
        if not self.active:
            return None
        event = event_type(session_id=self.session_id, **fields)
        self.emit(event)
        return event

    def emit(self, event: Event) -> None:
        """Send an already-built event to every processor, in order."""
        if self._closed:
            logger.debug("Dropping %s after shutdown", type(event).__name__)
            return
        for processor in list(self._processors):
            try:
                processor.on_event(event)
            except Exception:
                if self._strict:
                    raise
                logger.warning(
                    "Processor %r failed on %s for session %s",
                    processor,
                    type(event).__name__,
                    event.session_id or "-",
                    exc_info=True,
                )

    def shutdown(self) -> None:
        """Close the dispatcher and shut down every processor once.

        All processors are shut down even if one fails. In strict mode the
        first failure is re-raised afterwards.
        """
        if self._closed:
            return
        self._closed = True

        failures: list[Exception] = []
        for processor in self._processors:
            try:
                processor.shutdown()
            except Exception as e:
                failures.append(e)
                if not self._strict:
                    logger.warning("Processor %r failed during shutdown", processor, exc_info=True)
        if failures and self._strict:
            raise failures[0]
