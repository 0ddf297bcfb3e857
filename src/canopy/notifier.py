"""A value holder that reports every distinct assignment."""

from typing import Any, Callable, Generic, Optional, TypeVar

from canopy.events import Event

__all__ = ["Notifier"]

T = TypeVar("T")


class Notifier(Generic[T]):
    """Holds a value and emits ``(value, previous)`` whenever it changes.

    Assigning a value equal to the current one emits nothing. Construction
    emits ``(initial, None)`` to ``on_change`` if it is given.

    Example:
        >>> score = Notifier(0, lambda new, old: print(old, "->", new))
        None -> 0
        >>> score.value = 3
        0 -> 3
    """

    def __init__(self, initial: T, on_change: Optional[Callable[[T, Optional[T]], Any]] = None):
        _require_value(initial)
        self.on_change = Event()
        self._value = initial
        self._previous: Optional[T] = None
        if on_change is not None:
            self.on_change.subscribe(on_change)
        self.on_change.emit(initial, None)

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T):
        self.set(value)

    @property
    def previous(self) -> Optional[T]:
        return self._previous

    def set(self, value: T) -> bool:
        """Update the value, returning False if it was already equal."""
        _require_value(value)
        if value == self._value:
            return False
        self._previous, self._value = self._value, value
        self.on_change.emit(value, self._previous)
        return True

    def __repr__(self) -> str:
        return f"Notifier({self._value!r})"


def _require_value(value: Any):
    if value is None:
        raise ValueError("A notifier value cannot be None")
