"""The provider side: nodes that supply values to their descendants."""

import logging
from typing import Any, Optional

from canopy.declarations import declared_provisions
from canopy.domain import ProviderCapability
from canopy.registry import GlobalProviderRegistry, registry_or_default

__all__ = ["Provider", "provide"]

logger = logging.getLogger(__name__)


class Provider:
    """Mixin for tree nodes that supply values declared with :func:`~canopy.declarations.provision`.

    A provider assigns each of its provisions and then calls :meth:`provide`
    once, which publishes every value and notifies dependents waiting on them.

    A provider that never calls :meth:`provide` leaves its dependents waiting
    forever: there is no timeout and no error. Call it as soon as the values
    are assigned.

    Example:
        >>> class App(Node, Provider):
        ...     config: Config = provision()
        ...
        ...     def setup(self):
        ...         self.config = Config(name="x")
        ...         self.provide()
    """

    @property
    def capabilities(self) -> dict[type, ProviderCapability]:
        """The capabilities of this node keyed by provided type, in declaration order."""
        capabilities = self.__dict__.get("_capabilities")
        if capabilities is None:
            capabilities = {
                declaration.declared_type: ProviderCapability(declaration.declared_type, self)
                for declaration in declared_provisions(type(self))
            }
            self.__dict__["_capabilities"] = capabilities
        return capabilities

    def capability(self, provided_type: type) -> ProviderCapability:
        """The capability for ``provided_type``.

        Raises:
            KeyError: If this node does not provide the type.
        """
        try:
            return self.capabilities[provided_type]
        except KeyError:
            raise KeyError(f"{self!r} does not provide {provided_type!r}") from None

    def provided_types(self) -> list[type]:
        return list(self.capabilities)

    @property
    def is_provided(self) -> bool:
        return all(capability.ready for capability in self.capabilities.values())

    def register_global(self, registry: Optional[GlobalProviderRegistry] = None):
        """Make this node a fallback provider for consumers anywhere in the process."""
        registry_or_default(registry).register(self)

    def provide(self, registry: Optional[GlobalProviderRegistry] = None):
        """Publish every provided value and notify dependents.

        All provisions must have been assigned before this is called. Dependents
        already subscribed are notified before this method returns; dependents
        resolving later are notified as soon as they subscribe. Calling this
        more than once has no further effect.

        A node without a parent is registered in the global registry.

        If a dependent's ``loaded()`` raises, the remaining capabilities are
        still marked ready and the first error is re-raised afterwards.

        Args:
            registry: The global registry to use; defaults to the process default.
        """
        if getattr(self, "parent", None) is None:
            self.register_global(registry)

        first_error: Optional[Exception] = None
        for capability in self.capabilities.values():
            if not capability.has_value:
                logger.warning(
                    "%r provides %r before assigning a value", self, capability.provided_type
                )
            try:
                capability.mark_ready()
            except Exception as error:
                if first_error is None:
                    first_error = error
                else:
                    logger.exception("Dependent of %r failed while loading", self)
        if first_error is not None:
            raise first_error


def provide(node: Any, registry: Optional[GlobalProviderRegistry] = None):
    """Function form of :meth:`Provider.provide`."""
    node.provide(registry)
