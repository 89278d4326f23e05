"""Document-level interaction event bus.

The UI layer dispatches raw interaction events here; the activity tracker
subscribes to the ones it cares about.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable


class InteractionBus:
    """Synchronous publish/subscribe keyed by event name."""

    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[Callable[[str], None]]] = defaultdict(list)

    def subscribe(self, event: str, handler: Callable[[str], None]) -> Callable[[], None]:
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event)
            if handlers and handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    del self._handlers[event]

        return unsubscribe

    def dispatch(self, event: str) -> None:
        for handler in list(self._handlers.get(event, ())):
            handler(event)

    def listener_count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self._handlers.get(event, ()))
        return sum(len(handlers) for handlers in self._handlers.values())
