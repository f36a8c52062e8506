"""
Core event bus for domain event delivery.

Provides a typed pub/sub system between the orchestrator, the operation
components and the EventHandler.

Listeners for one kind fire synchronously in registration order, followed by
the wildcard (``on_any``) listeners. Each emission iterates over a snapshot of
the listener lists: a listener removed while an emission is running still
receives that emission, and none after it. A listener added during an
emission is first called on the next one.
"""

from typing import Callable, Dict, List

from pydantic import BaseModel

from ..logging_config import get_logger
from .events import EVENT_PAYLOADS, Event, EventType

logger = get_logger(__name__)

Listener = Callable[[Event], None]


class EventBus:
    """Central event bus for domain events."""

    def __init__(self):
        self._handlers: Dict[EventType, List[Listener]] = {}
        self._any_handlers: List[Listener] = []

    def on(self, event_type: EventType, listener: Listener) -> Callable[[], None]:
        """Subscribe a listener to an event type. Returns an unsubscribe callable."""
        self._handlers.setdefault(event_type, []).append(listener)
        return lambda: self.off(event_type, listener)

    def once(self, event_type: EventType, listener: Listener) -> Callable[[], None]:
        """Subscribe a listener that is called for the next emission only."""
        def wrapper(event: Event) -> None:
            self.off(event_type, wrapper)
            listener(event)

        return self.on(event_type, wrapper)

    def off(self, event_type: EventType, listener: Listener) -> None:
        """Unsubscribe a listener from an event type."""
        handlers = self._handlers.get(event_type)
        if handlers and listener in handlers:
            handlers.remove(listener)
            if not handlers:
                del self._handlers[event_type]

    def on_any(self, listener: Listener) -> Callable[[], None]:
        """Subscribe a listener to every event type."""
        self._any_handlers.append(listener)

        def unsubscribe() -> None:
            if listener in self._any_handlers:
                self._any_handlers.remove(listener)

        return unsubscribe

    def emit(self, event_type: EventType, payload: BaseModel) -> None:
        """
        Emit an event to all subscribers.

        Raises:
            TypeError: if the payload does not match the event type
        """
        expected = EVENT_PAYLOADS[event_type]
        if not isinstance(payload, expected):
            raise TypeError(
                f"{event_type.name} expects {expected.__name__}, got {type(payload).__name__}"
            )

        event = Event(type=event_type, payload=payload)
        listeners = list(self._handlers.get(event_type, [])) + list(self._any_handlers)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(f"Error in listener for {event_type.name}")

    def listener_count(self, event_type: EventType) -> int:
        """Number of listeners an emission of this type would reach."""
        return len(self._handlers.get(event_type, [])) + len(self._any_handlers)

    def event_names(self) -> List[EventType]:
        """Event types with at least one specific listener."""
        return [event_type for event_type, handlers in self._handlers.items() if handlers]

    def clear(self) -> None:
        """Remove every listener."""
        self._handlers.clear()
        self._any_handlers.clear()
