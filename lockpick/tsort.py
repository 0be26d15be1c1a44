"""Topological ordering of boolean operation graphs."""

from __future__ import annotations

from lockpick.errors import affirm
from lockpick.graph import Graph, Node
from lockpick.traverse import traverse_once

__all__ = ["tsort"]


def _scan(graph: Graph) -> tuple[int, list[Node]]:
    """Count traversal visits and collect reached constant nodes that are not inputs."""
    visits = 0
    constants: list[Node] = []

    def _record(node: Node, is_input: bool) -> None:
        nonlocal visits
        visits += 1
        if not is_input and node.parents_num() == 0:
            constants.append(node)

    traverse_once(graph, _record)
    return visits, constants


def tsort(graph: Graph) -> list[Node]:
    """Order the graph's nodes so that every node comes after all of its parents.

    The inputs come first, in their order, followed by the constant nodes
    reached from the outputs, then every other node. Inputs are treated as
    terminal nodes: their own parents are never visited. Nodes are assumed
    to have at most two parents.
    """
    affirm(graph is not None, "Expected valid graph but null was given")
    visits, constants = _scan(graph)

    result: list[Node] = [*graph.inputs, *constants]
    # Nodes that have no unprocessed parents anymore.
    orphaned = list(result)
    half_ready: set[Node] = set()

    while orphaned:
        current = orphaned.pop()
        for child in current.children:
            affirm(
                child.parents_num() > 0,
                "Parents num of a child node must always be greater than zero",
            )
            if child.parents_num() == 1 or child in half_ready:
                orphaned.append(child)
                result.append(child)
            else:
                half_ready.add(child)

    affirm(
        len(result) <= visits,
        f"Sorted {len(result)} nodes but only {visits} are reachable from the outputs; "
        "graph contains nodes that can't be reached",
    )
    return result