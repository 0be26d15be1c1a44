"""Parallel depth-first traversal of boolean operation graphs.

Each worker thread owns a stack of pending nodes. When its stack runs dry
the worker tries to borrow nodes from the other workers' stacks. The
traversal ends once every worker has found nothing left to do.
"""

from __future__ import annotations

import contextlib
import os
import threading
import time
from collections.abc import Callable
from typing import Optional

from lockpick.errors import affirm
from lockpick.graph import Graph, Node

__all__ = ["available_cpus", "traverse_once_sync"]

TraverseCallback = Callable[[Node, bool], None]


def available_cpus() -> list[int]:
    """Identifiers of the CPUs the current process may run on, in ascending order."""
    if hasattr(os, "sched_getaffinity"):
        cpus = sorted(os.sched_getaffinity(0))
    else:
        cpus = list(range(os.cpu_count() or 1))
    affirm(cpus, "Failed to get affinity for main thread")
    return cpus


class _Traversal:
    """Shared state of one parallel traversal."""

    def __init__(
        self,
        graph: Graph,
        callback: TraverseCallback,
        threads_num: int,
        cpus: list[int],
    ) -> None:
        self.callback = callback
        self.total = threads_num
        self.cpus = cpus
        self.inputs = frozenset(graph.inputs)
        self.stacks: list[list[Node]] = [[] for _ in range(threads_num)]
        self.locks = [threading.Lock() for _ in range(threads_num)]
        self.visited: set[Node] = set()
        self.visited_lock = threading.Lock()
        self.depleted = 0
        self.depleted_lock = threading.Lock()
        self.stop = threading.Event()
        self.errors: list[BaseException] = []
        self.errors_lock = threading.Lock()

        for index, output in enumerate(graph.outputs):
            affirm(
                output is not None,
                f"Attempt to compute null graph output at index {index}. "
                "Was graph assembled properly?",
            )
            self.stacks[index % threads_num].append(output)

    def _add_depleted(self, delta: int) -> None:
        with self.depleted_lock:
            self.depleted += delta

    def _all_depleted(self) -> bool:
        with self.depleted_lock:
            return self.depleted == self.total

    def _is_visited(self, node: Node) -> bool:
        with self.visited_lock:
            return node in self.visited

    def _mark_visited(self, node: Node) -> bool:
        """Record ``node`` as visited; return whether it was not visited before."""
        with self.visited_lock:
            if node in self.visited:
                return False
            self.visited.add(node)
            return True

    def _push(self, worker: int, node: Node) -> None:
        with self.locks[worker]:
            self.stacks[worker].append(node)

    def _pop_and_deplete(self, worker: int) -> Optional[Node]:
        with self.locks[worker]:
            stack = self.stacks[worker]
            if stack:
                return stack.pop()
            self._add_depleted(1)
            return None

    def _pop_and_undeplete(self, worker: int) -> Optional[Node]:
        with self.locks[worker]:
            stack = self.stacks[worker]
            if not stack:
                return None
            node = stack.pop()
            self._add_depleted(-1)
            return node

    def _borrow(self, worker: int) -> Optional[Node]:
        if self._all_depleted():
            return None
        other = (worker + 1) % self.total
        while not self.stop.is_set():
            if other != worker:
                node = self._pop_and_undeplete(other)
                if node is None:
                    if self._all_depleted():
                        return None
                elif not self._is_visited(node):
                    return node
                else:
                    self._add_depleted(1)
            other = (other + 1) % self.total
            if other == 0:
                time.sleep(0)
        return None

    def _pin(self, worker: int) -> None:
        if hasattr(os, "sched_setaffinity"):
            with contextlib.suppress(OSError):
                os.sched_setaffinity(0, {self.cpus[worker % len(self.cpus)]})

    def run(self, worker: int) -> None:
        try:
            self._pin(worker)
            while not self.stop.is_set():
                node = self._pop_and_deplete(worker)
                if node is None:
                    node = self._borrow(worker)
                    if node is None:
                        return
                if not self._mark_visited(node):
                    continue
                is_input = node in self.inputs
                self.callback(node, is_input)
                if is_input:
                    continue
                for parent in node.parents:
                    if not self._is_visited(parent):
                        self._push(worker, parent)
        except BaseException as exc:  # re-raised by the caller after joining
            with self.errors_lock:
                self.errors.append(exc)
            self.stop.set()


def traverse_once_sync(
    graph: Graph,
    callback: TraverseCallback,
    threads_num: Optional[int] = None,
) -> None:
    """Visit every node reachable from the outputs once, using several threads.

    ``callback(node, is_input)`` may be called concurrently from different
    threads. Traversal stops at input nodes and constant nodes. By default
    one thread is started per available CPU.
    """
    affirm(graph is not None, "Expected valid graph but null was given")
    affirm(callback is not None, "Node visit callback must be specified")
    cpus = available_cpus()
    if threads_num is None:
        threads_num = len(cpus)
    affirm(threads_num > 0, "Number of threads must be greater than zero")

    state = _Traversal(graph, callback, threads_num, cpus)
    threads = [
        threading.Thread(target=state.run, args=(worker,), name=f"traverse-{worker}")
        for worker in range(threads_num)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    if state.errors:
        raise state.errors[0]