"""A minimal node tree for hosting providers and dependents.

canopy only ever reads ``node.parent``, so any host tree exposing that
attribute works. :class:`Node` is a small reference implementation for
applications without a tree of their own, and for tests.
"""

from typing import Iterable, Iterator, Optional

__all__ = ["Node"]


class Node:
    """A named tree node with an ordered list of children.

    Example:
        >>> root = Node("root")
        >>> menu = root.add_child(Node("menu"))
        >>> menu.path
        '/root/menu'
    """

    def __init__(self, name: Optional[str] = None, children: Iterable["Node"] = ()):
        self.name = name or type(self).__name__
        self._parent: Optional[Node] = None
        self._children: list[Node] = []
        for child in children:
            self.add_child(child)

    @property
    def parent(self) -> Optional["Node"]:
        return self._parent

    @property
    def children(self) -> tuple["Node", ...]:
        return tuple(self._children)

    @property
    def root(self) -> "Node":
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def path(self) -> str:
        names = [self.name] + [ancestor.name for ancestor in self.ancestors()]
        return "/" + "/".join(reversed(names))

    def ancestors(self) -> Iterator["Node"]:
        """Yield the ancestors of this node, nearest first."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def add_child(self, child: "Node") -> "Node":
        """Attach ``child`` under this node, detaching it from its current parent.

        Returns:
            The child, for chaining.

        Raises:
            ValueError: If the child is this node or one of its ancestors.
        """
        if child is self or any(ancestor is child for ancestor in self.ancestors()):
            raise ValueError(f"Cannot add {child!r} beneath itself")
        if child._parent is not None:
            child._parent.remove_child(child)
        self._children.append(child)
        child._parent = self
        return child

    def remove_child(self, child: "Node") -> "Node":
        """Detach ``child`` from this node.

        Raises:
            ValueError: If ``child`` is not a child of this node.
        """
        if child._parent is not self:
            raise ValueError(f"{child!r} is not a child of {self!r}")
        self._children = [c for c in self._children if c is not child]
        child._parent = None
        return child

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"
