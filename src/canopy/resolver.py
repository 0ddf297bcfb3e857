"""Locating the provider of a type for a consumer node.

Resolution walks strictly upward from the consumer's parent and returns the
first ancestor exposing a capability for the requested type, so a subtree can
shadow a provider declared further up. If no ancestor qualifies, the global
registry is searched in insertion order.
"""

import logging
from typing import Any, Iterator, Optional

from canopy.domain import ProviderCapability
from canopy.errors import ProviderNotFoundError
from canopy.provider import Provider
from canopy.registry import GlobalProviderRegistry, registry_or_default

__all__ = ["capability_for", "provider_chain", "resolve"]

logger = logging.getLogger(__name__)


def capability_for(node: Any, requested_type: type) -> Optional[ProviderCapability]:
    """The node's capability for exactly ``requested_type``, or None."""
    if not isinstance(node, Provider):
        return None
    return node.capabilities.get(requested_type)


def provider_chain(
    consumer: Any, registry: Optional[GlobalProviderRegistry] = None
) -> Iterator[Any]:
    """Yield candidate provider nodes for ``consumer`` in search order.

    Ancestors come first, nearest first, followed by the global registry
    entries (excluding the consumer itself).
    """
    node = consumer.parent
    while node is not None:
        yield node
        node = node.parent

    for node in registry_or_default(registry).registered_nodes():
        if node is not consumer:
            yield node


def resolve(
    consumer: Any,
    requested_type: type,
    registry: Optional[GlobalProviderRegistry] = None,
) -> ProviderCapability:
    """Find the capability supplying ``requested_type`` to ``consumer``.

    Args:
        consumer: The node whose dependency is being resolved.
        requested_type: The type being depended on.
        registry: The global registry to fall back to; defaults to the process default.

    Returns:
        The capability of the nearest providing ancestor, or of the first
        registered global provider.

    Raises:
        ProviderNotFoundError: If nothing provides the type.
    """
    for node in provider_chain(consumer, registry):
        capability = capability_for(node, requested_type)
        if capability is not None:
            logger.debug("Resolved %r for %r to %r", requested_type, consumer, node)
            return capability

    raise ProviderNotFoundError(requested_type, consumer)
