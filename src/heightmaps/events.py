"""Synchronous observer channels raised by heightmap collections."""

from __future__ import annotations

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

__all__ = ["Event", "Listener"]


class Event:
    """A list of listener callbacks invoked in registration order.

    Dispatch iterates over a snapshot: a listener added while an event is being
    raised is only called from the next dispatch, and a listener removed while
    an event is being raised is skipped if it has not run yet.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    @property
    def number_of_listeners(self) -> int:
        return len(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def add_event_listener(self, listener: Listener) -> Callable[[], bool]:
        """Register ``listener`` and return a function that unregisters it."""

        if not callable(listener):
            raise TypeError("listener must be callable")
        self._listeners.append(listener)
        return lambda: self.remove_event_listener(listener)

    def remove_event_listener(self, listener: Listener) -> bool:
        """Unregister the first registration of ``listener``."""

        for position, registered in enumerate(self._listeners):
            if registered == listener:
                del self._listeners[position]
                return True
        return False

    def raise_event(self, *args: Any) -> None:
        """Call every registered listener with ``args``."""

        snapshot = list(self._listeners)
        for listener in snapshot:
            if listener not in self._listeners:
                continue
            listener(*args)
        logger.debug("Raised event to %d listener(s)", len(snapshot))
