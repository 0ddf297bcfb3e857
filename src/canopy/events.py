"""Multi-listener change events used by :mod:`canopy.notifier` and :mod:`canopy.state_machine`."""

from typing import Any, Callable

__all__ = ["Event", "Listener"]

Listener = Callable[..., Any]


class Event:
    """An ordered list of listeners invoked with the same arguments.

    Listeners can be added with :meth:`subscribe` or ``+=`` and removed with
    :meth:`unsubscribe` or ``-=``.

    Example:
        >>> changed = Event()
        >>> changed += lambda new, old: print(old, "->", new)
        >>> changed.emit(2, 1)
        1 -> 2
    """

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        """Remove the first registration of ``listener``; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, *args: Any) -> None:
        for listener in list(self._listeners):
            listener(*args)

    def __iadd__(self, listener: Listener) -> "Event":
        self.subscribe(listener)
        return self

    def __isub__(self, listener: Listener) -> "Event":
        self.unsubscribe(listener)
        return self

    def __len__(self) -> int:
        return len(self._listeners)
