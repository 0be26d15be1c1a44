"""Evaluation of a graph's node values from its inputs."""

from __future__ import annotations

from lockpick.errors import affirm, fail
from lockpick.graph import Graph, Node, NodeType
from lockpick.traverse import traverse

__all__ = ["compute"]


def _evaluate(node: Node, is_input: bool) -> None:
    parents = node.parents
    match node.type:
        case NodeType.AND:
            value = parents[0].value and parents[1].value
        case NodeType.OR:
            value = parents[0].value or parents[1].value
        case NodeType.NOT:
            value = not parents[0].value
        case NodeType.XOR:
            value = parents[0].value != parents[1].value
        case NodeType.CONST:
            value = node.value
        case _:
            fail(f"Invalid operation type: {node.type}")
    node.value = bool(value)


def compute(graph: Graph) -> None:
    """Compute the value of every node reachable from the graph's outputs."""
    affirm(graph is not None, "Expected valid graph pointer but null was given")
    traverse(graph, None, _evaluate)