"""Declarative dependency and provision slots.

Nodes declare what they need and what they supply with class-level
descriptors:

    >>> class Game(Node, Dependent):
    ...     config: Config = dependency()
    ...     scores = dependency(ScoreBoard)
    ...
    ...     def loaded(self):
    ...         print(self.config.name)

    >>> class App(Node, Provider):
    ...     config: Config = provision()

The declared type is taken from the explicit argument or, failing that, from
the attribute's annotation. Declarations are collected across the whole MRO,
so a slot declared on a base class applies to every subclass.
"""

import functools
import inspect
import sys
from typing import Any, Optional

from canopy.domain import SlotDeclaration
from canopy.errors import DependencyError

__all__ = [
    "dependency",
    "provision",
    "declared_dependencies",
    "declared_provisions",
]


class _Slot:
    """Common behaviour for the dependency and provision descriptors."""

    kind = "slot"

    def __init__(self, declared_type: Optional[type] = None):
        self._declared_type = declared_type
        self.name: Optional[str] = None
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str):
        self.owner = owner
        self.name = name

    @property
    def declared_type(self) -> type:
        """The declared type, looked up from the owner's annotations if not given.

        Raises:
            DependencyError: If no type was given and the attribute is not annotated,
                or its annotation names something that cannot be resolved.
        """
        if self._declared_type is None:
            annotation = self._annotation()
            if annotation is None:
                raise DependencyError(
                    f"{self.kind.capitalize()} {self.owner.__name__}.{self.name} is not annotated "
                    f"and no type was passed to {self.kind}()"
                )
            self._declared_type = annotation
        return self._declared_type

    def _annotation(self) -> Any:
        """This attribute's own annotation, evaluated if it is a string.

        Only the slot's annotation is evaluated, so unrelated forward references
        on the class do not need to be importable at runtime.
        """
        try:
            annotation = inspect.get_annotations(self.owner).get(self.name)
            if isinstance(annotation, str):
                module = sys.modules.get(self.owner.__module__)
                globalns = vars(module) if module else {}
                annotation = eval(annotation, globalns, dict(vars(self.owner)))
        except NameError as error:
            raise DependencyError(
                f"{self.kind.capitalize()} {self.owner.__name__}.{self.name} has an annotation "
                f"that cannot be resolved: {error}"
            ) from error
        return annotation

    def declaration(self) -> SlotDeclaration:
        return SlotDeclaration(self.name, self.declared_type, self.owner)


class _Dependency(_Slot):
    kind = "dependency"

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.dependency_value(self.declared_type)

    def __set__(self, instance: Any, value: Any):
        raise AttributeError(
            f"Dependency {self.name} is supplied by a provider and cannot be assigned"
        )


class _Provision(_Slot):
    kind = "provision"

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.capability(self.declared_type).current

    def __set__(self, instance: Any, value: Any):
        instance.capability(self.declared_type).assign(value)


def dependency(declared_type: Optional[type] = None) -> Any:
    """Declare a dependency slot on a :class:`~canopy.dependent.Dependent` class.

    Args:
        declared_type: The type to depend on. Defaults to the attribute's annotation.
    """
    return _Dependency(declared_type)


def provision(declared_type: Optional[type] = None) -> Any:
    """Declare a value supplied by a :class:`~canopy.provider.Provider` class.

    Args:
        declared_type: The provided type. Defaults to the attribute's annotation.
    """
    return _Provision(declared_type)


def declared_dependencies(cls: type) -> tuple[SlotDeclaration, ...]:
    """Dependency slots declared on ``cls`` and its base classes.

    Returns:
        Declarations ordered from the most derived class to its bases, each class
        in declaration order, with one entry per distinct type.
    """
    return _declarations(cls, _Dependency)


def declared_provisions(cls: type) -> tuple[SlotDeclaration, ...]:
    """Provisions declared on ``cls`` and its base classes, ordered as for
    :func:`declared_dependencies`."""
    return _declarations(cls, _Provision)


@functools.lru_cache(maxsize=None)
def _declarations(cls: type, kind: type) -> tuple[SlotDeclaration, ...]:
    seen_names: set[str] = set()
    seen_types: set[Any] = set()
    declarations = []

    for klass in cls.__mro__:
        for name, attribute in vars(klass).items():
            if name in seen_names:
                continue
            seen_names.add(name)
            if not isinstance(attribute, kind):
                continue
            declaration = attribute.declaration()
            if declaration.declared_type in seen_types:
                continue
            seen_types.add(declaration.declared_type)
            declarations.append(declaration)

    return tuple(declarations)
