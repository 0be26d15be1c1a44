"""Node counts and well-formedness checks of boolean operation graphs."""

from __future__ import annotations

import threading

from lockpick.errors import affirm
from lockpick.graph import Graph, Node
from lockpick.traverse import traverse_once
from lockpick.traverse_sync import traverse_once_sync

__all__ = [
    "nodes_count_super",
    "nodes_count",
    "nodes_count_mt",
    "count_dangling_nodes",
    "count_redundant_inputs",
]


def nodes_count_super(graph: Graph) -> int:
    """Number of nodes currently allocated by the graph."""
    affirm(graph is not None, "Expected valid graph but null was given")
    return len(graph.allocated_nodes())


def nodes_count(graph: Graph) -> int:
    """Number of node visits of a traversal from the outputs, stopping at inputs."""
    affirm(graph is not None, "Expected valid graph but null was given")
    count = 0

    def _count(node: Node, is_input: bool) -> None:
        nonlocal count
        count += 1

    traverse_once(graph, _count)
    return count


def nodes_count_mt(graph: Graph) -> int:
    """Like :func:`nodes_count`, using the parallel traversal.

    The parallel traversal is usually slower than the sequential one for
    this task; prefer :func:`nodes_count`.
    """
    affirm(graph is not None, "Expected valid graph but null was given")
    count = 0
    lock = threading.Lock()

    def _count(node: Node, is_input: bool) -> None:
        nonlocal count
        with lock:
            count += 1

    traverse_once_sync(graph, _count)
    return count


def count_dangling_nodes(graph: Graph) -> int:
    """Number of allocated nodes with no children that are neither inputs nor outputs."""
    affirm(graph is not None, "Expected valid graph pointer but null was given")
    protected = set(graph.inputs)
    protected.update(node for node in graph.outputs if node is not None)
    return sum(
        1
        for node in graph.allocated_nodes()
        if node.children_num() == 0 and node not in protected
    )


def count_redundant_inputs(graph: Graph) -> int:
    """Number of inputs minus the input visits of a traversal from the outputs."""
    affirm(graph is not None, "Expected valid graph but null was given")
    reached = 0

    def _count(node: Node, is_input: bool) -> None:
        nonlocal reached
        if is_input:
            reached += 1

    traverse_once(graph, _count)
    return len(graph.inputs) - reached