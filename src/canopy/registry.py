"""The global registry of top-level providers.

When no ancestor of a consumer provides a type, the resolver falls back to
the nodes registered here, in insertion order. Top-level provider nodes are
registered when they initialise (see :meth:`canopy.provider.Provider.provide`
and :meth:`canopy.provider.Provider.register_global`). Entries are never
removed automatically; hosts that support node removal call
:meth:`GlobalProviderRegistry.unregister` themselves.
"""

import logging
from typing import Any, Optional

__all__ = [
    "GlobalProviderRegistry",
    "default_registry",
    "set_default_registry",
    "registry_or_default",
]

logger = logging.getLogger(__name__)


class GlobalProviderRegistry:
    """Ordered collection of top-level provider nodes, compared by identity."""

    def __init__(self):
        self._nodes: list[Any] = []

    def register(self, node: Any):
        """Append a node to the registry. Registering a node twice has no effect.

        Args:
            node: The top-level provider node.
        """
        if node in self:
            return
        self._nodes.append(node)
        logger.debug("Registered global provider %r", node)

    def unregister(self, node: Any):
        """Remove a node, e.g. when the host tree destroys it."""
        remaining = [n for n in self._nodes if n is not node]
        if len(remaining) != len(self._nodes):
            logger.debug("Unregistered global provider %r", node)
        self._nodes = remaining

    def registered_nodes(self) -> list[Any]:
        """Snapshot of the registered nodes in insertion order."""
        return list(self._nodes)

    def clear(self):
        self._nodes = []

    def __contains__(self, node: Any) -> bool:
        return any(n is node for n in self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"GlobalProviderRegistry({self._nodes!r})"


_default_registry = GlobalProviderRegistry()


def default_registry() -> GlobalProviderRegistry:
    """The process-wide registry used when no registry is passed explicitly."""
    return _default_registry


def set_default_registry(registry: GlobalProviderRegistry) -> GlobalProviderRegistry:
    """Replace the process-wide registry.

    Args:
        registry: The registry to install.

    Returns:
        The previously installed registry, so callers can restore it.
    """
    global _default_registry
    previous, _default_registry = _default_registry, registry
    return previous


def registry_or_default(registry: Optional[GlobalProviderRegistry]) -> GlobalProviderRegistry:
    return _default_registry if registry is None else registry
