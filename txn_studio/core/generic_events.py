"""Named-listener events used for in-process change notification."""

import logging
from typing import Callable, Dict, Generic, TypeVar

T = TypeVar("T")

# Listeners receive the event type and the dispatched data.
EventListener = Callable[[str, T], None]


class Event(Generic[T]):
    """An event holding a registry of named listeners, dispatched synchronously on demand.

    Typical usage:
        changed: Event[str] = Event("aggregator_changed")

        def redraw(event_type, change):
            print(f"{event_type}: {change}")

        changed.register("drawer", redraw)
        changed.dispatch("api_log")  # drawer receives ("aggregator_changed", "api_log")
        changed.unregister("drawer")

    Type Parameters:
        T: The type of data passed to listeners
    """

    def __init__(self, event_type: str) -> None:
        self._event_type = event_type
        self._listeners: Dict[str, EventListener[T]] = {}

    @property
    def event_type(self) -> str:
        return self._event_type

    def register(self, name: str, listener: EventListener[T]) -> None:
        """Register a named listener, replacing any listener already registered under that name.

        Args:
            name: Unique identifier for this listener
            listener: Callable that accepts the event type and an argument of type T
        """
        self._listeners[name] = listener

    def unregister(self, name: str) -> None:
        """Remove a registered listener by name.

        Raises:
            KeyError: If no listener with the given name exists
        """
        del self._listeners[name]

    def dispatch(self, data: T) -> None:
        """Dispatch the event to all registered listeners.

        A listener that raises is logged and skipped; the remaining listeners still run.
        """
        # Copy so listeners may unregister themselves while being called.
        for name, listener in list(self._listeners.items()):
            try:
                listener(self._event_type, data)
            except Exception as e:
                logging.exception(f"Error dispatching {self._event_type} to listener {name}: {e}")

    @property
    def listener_count(self) -> int:
        """Return the number of registered listeners."""
        return len(self._listeners)

    def get_listeners(self) -> Dict[str, EventListener[T]]:
        """Return a *copy* of the registered listeners dictionary."""
        return self._listeners.copy()
