"""Boolean operation graphs built from AND, OR, NOT, XOR and constant nodes."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Optional

from lockpick.errors import affirm

__all__ = ["NodeType", "Node", "Graph"]


class NodeType(enum.IntEnum):
    """Operation carried out by a graph node."""

    AND = 0
    OR = 1
    NOT = 2
    XOR = 3
    CONST = 4

    @property
    def arity(self) -> int:
        """Number of operands a node of this type takes."""
        return _ARITY[self]


_ARITY = {
    NodeType.AND: 2,
    NodeType.OR: 2,
    NodeType.NOT: 1,
    NodeType.XOR: 2,
    NodeType.CONST: 0,
}


class Node:
    """A single operation: its operands (parents), its users (children) and a value."""

    __slots__ = ("type", "parents", "children", "value")

    def __init__(
        self,
        node_type: NodeType,
        parents: Iterable[Node] = (),
        value: bool = False,
    ) -> None:
        self.type = NodeType(node_type)
        self.parents: list[Node] = list(parents)
        affirm(
            len(self.parents) == self.type.arity,
            f"Node of type {self.type.name} expects {self.type.arity} parents, "
            f"got {len(self.parents)}",
        )
        self.children: list[Node] = []
        self.value = bool(value)

    def parents_num(self) -> int:
        return self.type.arity

    def children_num(self) -> int:
        return len(self.children)

    def __repr__(self) -> str:
        return f"Node({self.type.name}, value={self.value})"


class Graph:
    """A graph of boolean operations with a fixed budget of nodes.

    Inputs start out as constant ``False`` nodes; outputs start out unset
    (``None``) and are assigned by the caller after assembling operations.
    """

    def __init__(
        self, name: str, inputs_size: int, outputs_size: int, max_nodes: int
    ) -> None:
        affirm(name is not None, "Expected valid graph name string but null was given")
        affirm(inputs_size >= 0, "Inputs size must not be negative")
        affirm(outputs_size >= 0, "Outputs size must not be negative")
        affirm(max_nodes >= 0, f"Failed to create slab for {max_nodes} nodes")
        self.name = str(name)
        self.max_nodes = max_nodes
        self._super = True
        self._nodes: dict[Node, None] = {}
        self.inputs: list[Node] = []
        self.outputs: list[Optional[Node]] = [None] * outputs_size
        self.inputs = [self.node_const(False) for _ in range(inputs_size)]

    def __repr__(self) -> str:
        return (
            f"Graph({self.name!r}, inputs={len(self.inputs)}, "
            f"outputs={len(self.outputs)}, nodes={len(self._nodes)}/{self.max_nodes})"
        )

    def is_super(self) -> bool:
        """Whether this graph owns the storage of its nodes."""
        return self._super

    def owns(self, node: Node) -> bool:
        """Whether ``node`` was allocated by this graph and not yet released."""
        return node in self._nodes

    def allocated_nodes(self) -> list[Node]:
        """Every node currently allocated by the graph, in allocation order."""
        return list(self._nodes)

    def _alloc(self, node_type: NodeType, parents: tuple[Node, ...], value: bool = False) -> Node:
        affirm(
            len(self._nodes) < self.max_nodes,
            "Failed to allocate space for node from specified slab",
        )
        node = Node(node_type, parents, value)
        for parent in parents:
            parent.children.append(node)
        self._nodes[node] = None
        return node

    def node_and(self, a: Node, b: Node) -> Node:
        affirm(a is not None, "Expected valid left-side node operand but null was given")
        affirm(b is not None, "Expected valid right-side node operand but null was given")
        return self._alloc(NodeType.AND, (a, b))

    def node_or(self, a: Node, b: Node) -> Node:
        affirm(a is not None, "Expected valid left-side node operand but null was given")
        affirm(b is not None, "Expected valid right-side node operand but null was given")
        return self._alloc(NodeType.OR, (a, b))

    def node_not(self, a: Node) -> Node:
        affirm(a is not None, "Expected valid node operand but null was given")
        return self._alloc(NodeType.NOT, (a,))

    def node_xor(self, a: Node, b: Node) -> Node:
        affirm(a is not None, "Expected valid left-side node operand but null was given")
        affirm(b is not None, "Expected valid right-side node operand but null was given")
        return self._alloc(NodeType.XOR, (a, b))

    def node_const(self, value: bool) -> Node:
        return self._alloc(NodeType.CONST, (), bool(value))

    def release_node(self, node: Node) -> None:
        """Release a childless node and every ancestor left without children.

        Input and output nodes are never released; the cascade stops there.
        """
        affirm(node is not None, "Expected valid node but null was given")
        affirm(self.owns(node), "Specified node does not belong to the given graph")
        affirm(
            node.children_num() == 0,
            f"Expected node with zero children, got: {node.children_num()}",
        )
        protected = {id(n) for n in self.inputs}
        protected.update(id(n) for n in self.outputs if n is not None)
        affirm(
            id(node) not in protected,
            "Can't release node which is either input or output",
        )

        stack = [node]
        while stack:
            current = stack.pop()
            if id(current) in protected:
                continue
            for parent in current.parents:
                position = next(
                    (i for i, child in enumerate(parent.children) if child is current),
                    None,
                )
                affirm(
                    position is not None,
                    "Failed to find current node inside its parent children vector",
                )
                del parent.children[position]
                if not parent.children:
                    stack.append(parent)
            current.parents = []
            current.children = []
            self._nodes.pop(current, None)