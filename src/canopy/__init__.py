"""Canopy: dependency injection across a tree of nodes.

Nodes declare the values they need with :func:`dependency` and the values they
supply with :func:`provision`. A dependent node calls ``depend()`` once it is
attached to the tree; each dependency is resolved to the nearest ancestor that
provides its type, or failing that to a provider in the global registry. When
every provider has called ``provide()``, the dependent's ``loaded()`` hook runs
exactly once.

Basic Usage:
    >>> from canopy import Dependent, Node, Provider, dependency, provision
    >>>
    >>> class App(Node, Provider):
    ...     config: Config = provision()
    >>>
    >>> class Menu(Node, Dependent):
    ...     config: Config = dependency()
    ...
    ...     def loaded(self):
    ...         print("menu for", self.config.name)
    >>>
    >>> app = App()
    >>> menu = app.add_child(Menu())
    >>> menu.depend()
    >>> app.config = Config(name="x")
    >>> app.provide()
    menu for x

The package consists of:
    - declarations: dependency and provision descriptors
    - signal: readiness signals and the countdown latch
    - resolver: nearest-ancestor and global-registry lookup
    - dependent / provider: the two sides of the handshake
    - registry: the global registry of top-level providers
    - tree: a minimal reference node tree
    - state_machine, notifier: companion change-reporting primitives
    - errors: framework-specific exceptions
"""

from canopy.declarations import (
    declared_dependencies,
    declared_provisions,
    dependency,
    provision,
)
from canopy.dependent import Dependent, depend
from canopy.domain import DependencySlot, ProviderCapability, SlotDeclaration
from canopy.errors import (
    DependencyError,
    DependencyNotResolvedError,
    InvalidTransitionError,
    NoDependenciesDeclaredError,
    ProviderNotFoundError,
    ProviderNotReadyError,
    StateMachineError,
)
from canopy.events import Event
from canopy.notifier import Notifier
from canopy.provider import Provider, provide
from canopy.registry import GlobalProviderRegistry, default_registry, set_default_registry
from canopy.resolver import resolve
from canopy.signal import CountdownLatch, ReadinessSignal
from canopy.state_machine import State, StateMachine
from canopy.tree import Node

__all__ = [
    "CountdownLatch",
    "Dependent",
    "DependencyError",
    "DependencyNotResolvedError",
    "DependencySlot",
    "Event",
    "GlobalProviderRegistry",
    "InvalidTransitionError",
    "NoDependenciesDeclaredError",
    "Node",
    "Notifier",
    "Provider",
    "ProviderCapability",
    "ProviderNotFoundError",
    "ProviderNotReadyError",
    "ReadinessSignal",
    "SlotDeclaration",
    "State",
    "StateMachine",
    "StateMachineError",
    "declared_dependencies",
    "declared_provisions",
    "default_registry",
    "depend",
    "dependency",
    "provide",
    "provision",
    "resolve",
    "set_default_registry",
]
