"""The dependent side: nodes that wait for values from providers above them.

Calling :func:`depend` on a node resolves every declared dependency, subscribes
to each provider's readiness signal and calls the node's ``loaded()`` hook
once all of them are ready. If they already are, ``loaded()`` runs before
``depend()`` returns.

Each call to :func:`depend` starts a new generation. Subscriptions made by an
earlier generation are withdrawn from signals that have not fired yet, and
any that still run are ignored, so moving a node and depending again never
produces a stale ``loaded()`` call.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from canopy.declarations import declared_dependencies
from canopy.domain import DependencySlot
from canopy.errors import (
    DependencyError,
    DependencyNotResolvedError,
    NoDependenciesDeclaredError,
)
from canopy.registry import GlobalProviderRegistry
from canopy.resolver import resolve
from canopy.signal import CountdownLatch

__all__ = ["Dependent", "depend"]

logger = logging.getLogger(__name__)


class Dependent:
    """Mixin for tree nodes with slots declared by :func:`~canopy.declarations.dependency`.

    Subclasses override :meth:`loaded` and call :meth:`depend` from their own
    initialisation, once the node is attached to the tree.
    """

    @property
    def dependencies(self) -> dict[type, DependencySlot]:
        """The dependency slots of this node keyed by type, rebuilt by every ``depend()``."""
        return self.__dict__.setdefault("_dependencies", {})

    @property
    def dependency_generation(self) -> int:
        return self.__dict__.get("_dependency_generation", 0)

    @property
    def is_loaded(self) -> bool:
        return self.__dict__.get("_loaded", False)

    def loaded(self):
        """Called once every dependency of the current generation is ready."""
        pass

    def depend(self, registry: Optional[GlobalProviderRegistry] = None):
        depend(self, registry)

    def dependency_value(self, declared_type: type) -> Any:
        """The value provided for ``declared_type``.

        Raises:
            DependencyNotResolvedError: If ``depend()`` has not resolved the type.
            ProviderNotReadyError: If the provider has not called ``provide()`` yet.
        """
        slot = self.dependencies.get(declared_type)
        if slot is None:
            raise DependencyNotResolvedError(
                f"{self!r} has not resolved its dependency on {declared_type!r}; "
                "call depend() first"
            )
        return slot.value


def depend(dependent: Dependent, registry: Optional[GlobalProviderRegistry] = None):
    """Resolve the dependencies of ``dependent`` and arrange for ``loaded()`` to be called.

    Every declared type is resolved before anything is subscribed, so a
    failure leaves the node's previous slots untouched.

    Args:
        dependent: The node whose dependencies to resolve.
        registry: The global registry to fall back to; defaults to the process default.

    Raises:
        DependencyError: If ``dependent`` is not a tree node exposing ``parent``.
        NoDependenciesDeclaredError: If the node declares no dependencies.
        ProviderNotFoundError: If any declared type has no provider.
    """
    if not hasattr(dependent, "parent"):
        raise DependencyError(
            f"Dependent {dependent!r} must be a tree node with a parent attribute"
        )

    declarations = declared_dependencies(type(dependent))
    if not declarations:
        raise NoDependenciesDeclaredError(type(dependent))

    providers = {
        declaration.declared_type: resolve(dependent, declaration.declared_type, registry)
        for declaration in declarations
    }

    _detach(dependent.dependencies.values())

    generation = dependent.dependency_generation + 1
    dependent.__dict__["_dependency_generation"] = generation
    dependent.__dict__["_loaded"] = False

    slots = {
        declared_type: DependencySlot(declared_type, provider, generation)
        for declared_type, provider in providers.items()
    }
    dependent.__dict__["_dependencies"] = slots

    def on_complete():
        dependent.__dict__["_loaded"] = True
        logger.debug("All %d dependencies of %r are ready", len(slots), dependent)
        dependent.loaded()

    latch = CountdownLatch(len(slots), on_complete)

    for slot in slots.values():
        slot.subscription_active = True
        slot.callback = _on_provided(dependent, slot, latch)
        slot.provider.signal.subscribe(slot.callback)


def _detach(slots: Iterable[DependencySlot]):
    """Withdraw the still-pending subscriptions of a previous generation."""
    for slot in slots:
        if slot.subscription_active and slot.callback is not None:
            slot.provider.signal.unsubscribe(slot.callback)
        slot.subscription_active = False


def _on_provided(
    dependent: Dependent, slot: DependencySlot, latch: CountdownLatch
) -> Callable[[], None]:
    def callback():
        if dependent.dependency_generation != slot.generation:
            logger.debug(
                "Ignoring stale notification for %r on %r (generation %d, now %d)",
                slot.declared_type,
                dependent,
                slot.generation,
                dependent.dependency_generation,
            )
            return
        slot.subscription_active = False
        latch.count_down()

    return callback
