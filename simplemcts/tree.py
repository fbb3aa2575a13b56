"""A fixed-width tree whose nodes hold arbitrary data."""

from __future__ import annotations

import weakref
from typing import Generic, TypeVar

T = TypeVar("T")


class Node(Generic[T]):
    """A tree node with a fixed number of child slots.

    The parent link is weak, so a subtree stays alive only while something
    holds a reference to its root.
    """

    __slots__ = ("data", "_children", "_parent_ref", "__weakref__")

    def __init__(self, data: T, size: int, parent: Node[T] | None = None) -> None:
        if size < 0:
            raise ValueError(f"node size must be non-negative, got {size}")
        self.data = data
        self._children: list[Node[T] | None] = [None] * size
        self._parent_ref: weakref.ReferenceType[Node[T]] | None = (
            weakref.ref(parent) if parent is not None else None
        )

    @property
    def size(self) -> int:
        """Number of child slots."""
        return len(self._children)

    @property
    def parent(self) -> Node[T] | None:
        """The parent node, or None if detached or no longer alive."""
        return self._parent_ref() if self._parent_ref is not None else None

    def is_root(self) -> bool:
        """True if the node has no parent link."""
        return self._parent_ref is None

    def detach(self) -> None:
        """Cut the link to the parent, making this node a root."""
        self._parent_ref = None

    def child(self, index: int) -> Node[T] | None:
        """The child in slot ``index``; None if the slot is empty or out of range."""
        if not 0 <= index < len(self._children):
            return None
        return self._children[index]

    def add_child(self, index: int, data: T) -> Node[T]:
        """Create a child holding ``data`` in slot ``index`` and return it."""
        self._check_index(index)
        node = Node(data, len(self._children), self)
        self._children[index] = node
        return node

    def remove_child(self, index: int) -> None:
        """Empty slot ``index``."""
        self._check_index(index)
        self._children[index] = None

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._children):
            raise IndexError(
                f"child index {index} out of range for node with {len(self._children)} slots"
            )

    def __iter__(self):
        """Iterate over the child slots, yielding None for empty ones."""
        return iter(list(self._children))

    def __repr__(self) -> str:
        filled = sum(child is not None for child in self._children)
        return f"Node(data={self.data!r}, size={self.size}, children={filled})"