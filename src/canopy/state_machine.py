"""A state machine that validates transitions and reports every change."""

from typing import Any, Callable, Optional

from canopy.errors import InvalidTransitionError
from canopy.events import Event

__all__ = ["State", "StateMachine"]


class State:
    """Base class for states that restrict which states may follow them.

    States compare by value, so frozen dataclasses make good states:

        >>> @dataclass(frozen=True)
        ... class Paused(State):
        ...     def can_transition_to(self, candidate):
        ...         return isinstance(candidate, Playing)
    """

    def can_transition_to(self, candidate: Any) -> bool:
        return True


class StateMachine:
    """Holds exactly one current state and emits ``(state, previous)`` on every change.

    The initial state counts as a change: if ``on_change`` is given it is
    subscribed and immediately called with ``(initial, None)``.

    States need not derive from :class:`State`; a state without a
    ``can_transition_to`` method allows every transition.
    """

    def __init__(self, initial: Any, on_change: Optional[Callable[[Any, Any], Any]] = None):
        _require_state(initial)
        self.on_change = Event()
        self._state = initial
        self._previous: Any = None
        if on_change is not None:
            self.on_change.subscribe(on_change)
        self.on_change.emit(initial, None)

    @property
    def state(self) -> Any:
        return self._state

    @property
    def previous(self) -> Any:
        return self._previous

    def can_transition_to(self, candidate: Any) -> bool:
        guard = getattr(self._state, "can_transition_to", None)
        return guard is None or bool(guard(candidate))

    def update(self, candidate: Any) -> bool:
        """Move to ``candidate``.

        Returns:
            True if the state changed, False if ``candidate`` equals the current state.

        Raises:
            InvalidTransitionError: If the current state does not allow the transition.
        """
        _require_state(candidate)
        if candidate == self._state:
            return False
        if not self.can_transition_to(candidate):
            raise InvalidTransitionError(self._state, candidate)

        self._previous, self._state = self._state, candidate
        self.on_change.emit(candidate, self._previous)
        return True

    def __repr__(self) -> str:
        return f"StateMachine({self._state!r})"


def _require_state(state: Any):
    if state is None:
        raise ValueError("A state machine state cannot be None")
