"""Compact, topologically sorted form of a graph and its evaluation on the host."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Optional

from lockpick.bitset import Bitset
from lockpick.errors import affirm, fail
from lockpick.graph import Graph, Node, NodeType
from lockpick.properties import count_redundant_inputs
from lockpick.tsort import tsort

__all__ = [
    "MAX_NODES_NUM",
    "PackedNodeType",
    "PackedNode",
    "InferenceGraph",
    "infer_host",
]

# Node positions are 16-bit indices.
MAX_NODES_NUM = 0xFFFF


class PackedNodeType(enum.IntEnum):
    """Operation of a packed node; constants carry their value in the type."""

    AND = 0
    OR = 1
    NOT = 2
    XOR = 3
    TRUE = 4
    FALSE = 5
    INPUT = 6


_ARITY = {
    PackedNodeType.AND: 2,
    PackedNodeType.OR: 2,
    PackedNodeType.NOT: 1,
    PackedNodeType.XOR: 2,
    PackedNodeType.TRUE: 0,
    PackedNodeType.FALSE: 0,
    PackedNodeType.INPUT: 0,
}


@dataclass(frozen=True)
class PackedNode:
    """A node referring to its parents by position in the sorted node list."""

    type: PackedNodeType
    parents: tuple[int, ...] = ()
    output: Optional[int] = None

    def parents_num(self) -> int:
        return _ARITY[self.type]


def _packed_type(node: Node) -> PackedNodeType:
    if node.type is NodeType.CONST:
        return PackedNodeType.TRUE if node.value else PackedNodeType.FALSE
    return PackedNodeType(int(node.type))


class InferenceGraph:
    """A graph's nodes in topological order, packed for fast evaluation."""

    def __init__(self, graph: Graph, gen_inverse_index: bool = False) -> None:
        affirm(graph is not None, "Expected valid graph but null was given")
        redundant = count_redundant_inputs(graph)
        affirm(
            redundant == 0,
            f"Given graph contains {redundant} redundant input nodes "
            "and cannot be converted to inference graph",
        )
        self.graph = graph
        self._index_map: dict[Node, int] = {}
        self._inv_index_map: Optional[dict[int, Node]] = {} if gen_inverse_index else None

        inputs_size = len(graph.inputs)
        packed: list[PackedNode] = []
        for index, node in enumerate(tsort(graph)):
            if index < inputs_size:
                packed.append(PackedNode(PackedNodeType.INPUT))
            elif node.parents_num() == 0:
                packed.append(PackedNode(_packed_type(node)))
            else:
                parents = tuple(self._index_map[parent] for parent in node.parents)
                packed.append(PackedNode(_packed_type(node), parents))
            self._index_map.setdefault(node, index)
            if self._inv_index_map is not None:
                self._inv_index_map.setdefault(index, node)

        for out_i, node in enumerate(graph.outputs):
            position = self._index_map[node]
            packed[position] = dataclasses.replace(packed[position], output=out_i)

        self.sorted_nodes: tuple[PackedNode, ...] = tuple(packed)
        affirm(
            self.nodes_num <= MAX_NODES_NUM,
            "Number of nodes in the given graph exceeds max number of nodes "
            f"supported ({self.nodes_num} > {MAX_NODES_NUM})",
        )

    @property
    def nodes_num(self) -> int:
        return len(self.sorted_nodes)

    def __repr__(self) -> str:
        return f"InferenceGraph({self.graph.name!r}, nodes={self.nodes_num})"

    def index_of(self, node: Node) -> int:
        """Position of ``node`` in the sorted node list."""
        try:
            return self._index_map[node]
        except KeyError:
            raise KeyError(f"Node {node!r} is not part of the inference graph") from None

    def node_at(self, index: int) -> Node:
        """Graph node at ``index``; requires the inverse index to have been generated."""
        affirm(
            self._inv_index_map is not None,
            "Inverse index was not generated for this inference graph",
        )
        assert self._inv_index_map is not None
        try:
            return self._inv_index_map[index]
        except KeyError:
            raise KeyError(f"No node at index {index}") from None


def infer_host(inference_graph: InferenceGraph, input_values: Bitset) -> Bitset:
    """Evaluate the graph for ``input_values``.

    Output bits are ordered by the position of the output nodes in the
    sorted node list; output nodes that are inputs are not evaluated.
    """
    affirm(inference_graph is not None, "Expected valid inference graph but null was given")
    values = Bitset(inference_graph.nodes_num)
    values.copy_from(input_values)
    output = Bitset(len(inference_graph.graph.outputs))

    inputs_size = len(inference_graph.graph.inputs)
    out_i = 0
    nodes = inference_graph.sorted_nodes[inputs_size:]
    for index, node in enumerate(nodes, start=inputs_size):
        parents = node.parents
        match node.type:
            case PackedNodeType.AND:
                value = values.test(parents[0]) and values.test(parents[1])
            case PackedNodeType.OR:
                value = values.test(parents[0]) or values.test(parents[1])
            case PackedNodeType.NOT:
                value = not values.test(parents[0])
            case PackedNodeType.XOR:
                value = values.test(parents[0]) != values.test(parents[1])
            case PackedNodeType.TRUE:
                value = True
            case PackedNodeType.FALSE:
                value = False
            case _:
                fail(f"Unknown type: {int(node.type)}")

        values.update(index, value)
        if node.output is not None:
            output.update(out_i, value)
            out_i += 1

    return output