"""Depth-first traversals of boolean operation graphs.

Traversal walks from a node towards its operands (parents). It stops at
graph input nodes and at constant nodes, even if an input node has parents.
Callbacks are called as ``callback(node, is_input)``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Optional

from lockpick.errors import affirm
from lockpick.graph import Graph, Node

__all__ = [
    "TraverseCallback",
    "traverse_node",
    "traverse",
    "traverse_node_once",
    "traverse_once",
]

TraverseCallback = Callable[[Node, bool], None]


def _graph_outputs(graph: Graph) -> Iterator[Node]:
    for index, output in enumerate(graph.outputs):
        affirm(
            output is not None,
            f"Attempt to compute null graph output at index {index}. "
            "Was graph assembled properly?",
        )
        yield output


def _walk(
    node: Node,
    visited: set[Node],
    inputs: set[Node],
    enter: Optional[TraverseCallback],
    leave: Optional[TraverseCallback],
) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        is_input = current in inputs
        if current not in visited:
            visited.add(current)
            stack.append(current)
            if enter is not None:
                enter(current, is_input)
            if not is_input:
                stack.extend(p for p in current.parents if p not in visited)
        elif leave is not None:
            leave(current, is_input)


def _walk_once(
    node: Node,
    visited: set[Node],
    inputs: set[Node],
    callback: Optional[TraverseCallback],
) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        is_input = current in inputs
        visited.add(current)
        if callback is not None:
            callback(current, is_input)
        if not is_input:
            stack.extend(p for p in current.parents if p not in visited)


def traverse_node(
    graph: Graph,
    node: Node,
    enter: Optional[TraverseCallback] = None,
    leave: Optional[TraverseCallback] = None,
) -> None:
    """DFS from ``node``: ``enter`` on first reach, ``leave`` once its operands are done."""
    affirm(graph is not None, "Expected valid graph but null was given")
    affirm(node is not None, "Expected valid node but null was given")
    _walk(node, set(), set(graph.inputs), enter, leave)


def traverse(
    graph: Graph,
    enter: Optional[TraverseCallback] = None,
    leave: Optional[TraverseCallback] = None,
) -> None:
    """DFS from every output of ``graph``, sharing visited nodes between outputs."""
    affirm(graph is not None, "Expected valid graph but null was given")
    affirm(
        enter is not None or leave is not None,
        "Either leave or enter callback must be specified",
    )
    visited: set[Node] = set()
    inputs = set(graph.inputs)
    for output in _graph_outputs(graph):
        _walk(output, visited, inputs, enter, leave)


def traverse_node_once(
    graph: Graph, node: Node, callback: Optional[TraverseCallback] = None
) -> None:
    """DFS from ``node`` calling ``callback`` on reach, with no second visit."""
    affirm(graph is not None, "Expected valid graph but null was given")
    affirm(node is not None, "Expected valid node but null was given")
    _walk_once(node, set(), set(graph.inputs), callback)


def traverse_once(graph: Graph, callback: TraverseCallback) -> None:
    """DFS from every output of ``graph`` calling ``callback`` on reach."""
    affirm(graph is not None, "Expected valid graph but null was given")
    affirm(callback is not None, "Either leave or enter callback must be specified")
    visited: set[Node] = set()
    inputs = set(graph.inputs)
    for output in _graph_outputs(graph):
        _walk_once(output, visited, inputs, callback)