"""Exceptions raised by canopy."""

from typing import Any

__all__ = [
    "DependencyError",
    "NoDependenciesDeclaredError",
    "ProviderNotFoundError",
    "ProviderNotReadyError",
    "DependencyNotResolvedError",
    "StateMachineError",
    "InvalidTransitionError",
]


class DependencyError(Exception):
    """Raised when a node's dependency cannot be resolved or is misdeclared."""

    pass


class NoDependenciesDeclaredError(DependencyError):
    """Raised when ``depend()`` is called on a node that declares no dependency slots."""

    def __init__(self, dependent_type: type):
        self.dependent_type = dependent_type
        super().__init__(
            f"{dependent_type.__name__} does not declare any dependencies. "
            "Declare slots with dependency() before calling depend()."
        )


class ProviderNotFoundError(DependencyError):
    """Raised when neither an ancestor nor the global registry provides a type."""

    def __init__(self, requested_type: type, consumer: Any):
        self.requested_type = requested_type
        self.consumer = consumer
        super().__init__(
            f"No provider of {_type_name(requested_type)} found "
            f"for {consumer!r} among its ancestors or the global registry"
        )


class ProviderNotReadyError(DependencyError):
    """Raised when a provided value is read before its provider called ``provide()``."""

    pass


class DependencyNotResolvedError(DependencyError):
    """Raised when a dependency slot is read before ``depend()`` resolved it."""

    pass


class StateMachineError(Exception):
    """Base class for errors raised by :class:`~canopy.state_machine.StateMachine`."""

    pass


class InvalidTransitionError(StateMachineError):
    """Raised when the current state refuses a transition to the candidate state."""

    def __init__(self, current: Any, candidate: Any):
        self.current = current
        self.candidate = candidate
        super().__init__(f"Invalid transition from {current!r} to {candidate!r}")


def _type_name(t: Any) -> str:
    return getattr(t, "__qualname__", None) or str(t)
