"""Circular doubly linked list built from caller-owned nodes."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from lockpick.errors import affirm

__all__ = ["DListNode", "DList"]


class DListNode:
    """A list entry carrying a value and links to its neighbours."""

    __slots__ = ("value", "prev", "next")

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.prev: DListNode | None = None
        self.next: DListNode | None = None

    def __repr__(self) -> str:
        return f"DListNode({self.value!r})"


class DList:
    """Circular doubly linked list; the head is its first node."""

    def __init__(self) -> None:
        self.head: DListNode | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[DListNode]:
        node = self.head
        if node is None:
            return
        while True:
            yield node
            node = node.next
            if node is self.head:
                return

    def __repr__(self) -> str:
        return f"DList({[node.value for node in self]!r})"

    @staticmethod
    def _insert_between(first: DListNode, second: DListNode, node: DListNode) -> None:
        affirm(
            first.next is second and second.prev is first,
            "Invalid adjacent nodes",
        )
        node.prev = first
        node.next = second
        first.next = node
        second.prev = node

    def _require_non_empty(self) -> DListNode:
        affirm(self.head is not None, "List must not be empty for this operation")
        assert self.head is not None
        return self.head

    def push_back(self, node: DListNode) -> None:
        """Append ``node``; it becomes the head of an empty list."""
        affirm(node is not None, "Expected valid entry but null was given")
        if self.head is None:
            node.prev = node.next = node
            self.head = node
        else:
            self._insert_between(self.head.prev, self.head, node)
        self._size += 1

    def push_front(self, node: DListNode) -> None:
        """Insert ``node`` at the start; it always becomes the head."""
        affirm(node is not None, "Expected valid entry but null was given")
        if self.head is None:
            node.prev = node.next = node
        else:
            self._insert_between(self.head.prev, self.head, node)
        self.head = node
        self._size += 1

    def insert_before(self, position: DListNode, node: DListNode) -> None:
        """Insert ``node`` before ``position``, moving the head if needed."""
        head = self._require_non_empty()
        affirm(position is not None, "Expected valid position but null was given")
        affirm(node is not None, "Expected valid entry but null was given")
        self._insert_between(position.prev, position, node)
        if position is head:
            self.head = node
        self._size += 1

    def insert_after(self, position: DListNode, node: DListNode) -> None:
        """Insert ``node`` after ``position``."""
        self._require_non_empty()
        affirm(position is not None, "Expected valid position but null was given")
        affirm(node is not None, "Expected valid entry but null was given")
        self._insert_between(position, position.next, node)
        self._size += 1

    def remove(self, node: DListNode) -> None:
        """Unlink ``node`` from the list."""
        head = self._require_non_empty()
        affirm(node is not None, "Expected valid entry but null was given")
        if node is head:
            if head.next is head:
                self.head = None
                self._size = 0
                node.prev = node.next = None
                return
            self.head = node.next
        node.next.prev = node.prev
        node.prev.next = node.next
        node.prev = node.next = None
        self._size -= 1