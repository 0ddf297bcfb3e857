"""Domain models shared by the provider and dependent sides."""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar

from canopy.errors import DependencyNotResolvedError, ProviderNotReadyError
from canopy.signal import ReadinessSignal

__all__ = ["SlotDeclaration", "ProviderCapability", "DependencySlot"]

T = TypeVar("T")


@dataclass(frozen=True)
class SlotDeclaration:
    """A dependency or provision declared on a class.

    Attributes:
        attribute_name: The class attribute holding the declaration.
        declared_type: The type that is depended on or provided.
        owner: The class on which the attribute is declared.
    """

    attribute_name: str
    declared_type: type
    owner: type


class ProviderCapability(Generic[T]):
    """A value of one type supplied by one provider node.

    The provider assigns the value with :meth:`assign` and later publishes it
    with :meth:`mark_ready`. Consumers read :attr:`value`, which is only
    available once the capability is ready. Readiness never reverts; the
    provider may still reassign the value afterwards and consumers will see
    the latest one.
    """

    def __init__(self, provided_type: type, owner: Any):
        self.provided_type = provided_type
        self.owner = owner
        self.signal: ReadinessSignal[T] = ReadinessSignal(
            f"{owner!r} provides {getattr(provided_type, '__qualname__', provided_type)}"
        )
        self._value: Optional[T] = None
        self._has_value = False

    @property
    def ready(self) -> bool:
        return self.signal.ready

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def current(self) -> T:
        """The assigned value, readable by the provider regardless of readiness."""
        if not self._has_value:
            raise AttributeError(f"{self.owner!r} has not assigned a {self.provided_type!r}")
        return self._value

    @property
    def value(self) -> T:
        if not self.ready:
            raise ProviderNotReadyError(
                f"{self.owner!r} has not provided {self.provided_type!r} yet"
            )
        return self._value

    def assign(self, value: T) -> None:
        self._value = value
        self._has_value = True

    def mark_ready(self) -> bool:
        return self.signal.mark_ready(self._value)

    def __repr__(self) -> str:
        return f"ProviderCapability({self.provided_type!r}, owner={self.owner!r}, ready={self.ready})"


@dataclass
class DependencySlot(Generic[T]):
    """A consumer's record of the provider it resolved for one type.

    Slots are replaced, never mutated into a new binding, each time the
    consumer calls ``depend()``. ``generation`` ties the slot to the
    ``depend()`` call that created it.
    """

    declared_type: type
    provider: Optional[ProviderCapability[T]] = None
    generation: int = 0
    subscription_active: bool = False
    callback: Optional[Callable[[], None]] = field(default=None, repr=False, compare=False)

    @property
    def resolved(self) -> bool:
        return self.provider is not None

    @property
    def value(self) -> T:
        if self.provider is None:
            raise DependencyNotResolvedError(f"Dependency on {self.declared_type!r} is unresolved")
        return self.provider.value
