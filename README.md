# lockpick

A library for building and evaluating boolean logic graphs made of AND, OR,
NOT, XOR and constant nodes. It has no dependencies beyond the standard
library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `lockpick.graph` – `Graph`, `Node` and `NodeType`.
  `Graph(name, inputs_size, outputs_size, max_nodes)` creates `inputs_size`
  input nodes as constant `False` nodes and `outputs_size` output slots set to
  `None`, which the caller fills in. A graph holds at most `max_nodes` nodes,
  inputs included. Nodes are made with `node_and`, `node_or`, `node_not`,
  `node_xor` and `node_const`; each node keeps its `parents` (operands),
  `children` and `value`. `owns` and `allocated_nodes` report the nodes the
  graph currently holds. `release_node` drops a childless node that is neither
  an input nor an output, and then any of its parents left without children,
  stopping at inputs and outputs.
- `lockpick.traverse` – depth-first traversal towards the operands, either
  from one node (`traverse_node`, `traverse_node_once`) or from every output
  (`traverse`, `traverse_once`). Callbacks are called as
  `callback(node, is_input)`. `traverse` and `traverse_node` call `enter` when
  a node is first reached and `leave` once its operands are done; the `_once`
  variants call one callback on reach only. Traversal stops at input nodes,
  even if they have parents.
- `lockpick.traverse_sync` – `traverse_once_sync(graph, callback,
  threads_num=None)` visits the nodes reachable from the outputs over several
  threads that share work; by default one thread per CPU returned by
  `available_cpus()`. The callback may be called from different threads at
  once, and an exception raised in a worker is raised again by the caller.
- `lockpick.compute` – `compute(graph)` sets the `value` of every node that can
  be reached from the outputs, from the values of the inputs.
- `lockpick.properties` – `nodes_count` and `nodes_count_mt` (the same count
  over the parallel traversal), `nodes_count_super` (all nodes the graph
  holds), `count_dangling_nodes` and `count_redundant_inputs`.
- `lockpick.tsort` – `tsort(graph)` returns the nodes so that each comes after
  its parents: inputs first, then the constant nodes reached from the outputs,
  then the rest.
- `lockpick.inference` – `InferenceGraph(graph, gen_inverse_index=False)` packs
  a graph into a tuple of `PackedNode` in sorted order (`sorted_nodes`,
  `nodes_num`, `index_of`, and `node_at` when the inverse index was built). A
  graph with inputs that cannot be reached from the outputs is refused.
  `infer_host(inference_graph, input_values)` evaluates it for a `Bitset` of
  input values and returns a `Bitset` of outputs, ordered by where the output
  nodes sit in the sorted order.
- `lockpick.bitset` – `Bitset(size)`, a fixed number of bits stored as 32-bit
  words that keeps a count of set bits (`set`, `reset`, `update`, `test`,
  `set_all`, `reset_all`, `count`, `any`, `all`, `none`, `copy_from`,
  `to_words`), plus word-level helpers such as `bit_test_and_set` and the
  lock-guarded `atomic_bit_test_and_set`.
- `lockpick.dlist` – a circular doubly linked list (`DList`, `DListNode`) with
  `push_back`, `push_front`, `insert_before`, `insert_after` and `remove`.
- `lockpick.errors` – `LockpickError` and its subclasses `ConsistencyError`
  (raised by `affirm` when a check fails) and `UnrecoverableError` (raised by
  `fail`).

## Example

```python
from lockpick.graph import Graph
from lockpick.inference import InferenceGraph, infer_host
from lockpick.bitset import Bitset

graph = Graph("half-adder", inputs_size=2, outputs_size=2, max_nodes=16)
a, b = graph.inputs
graph.outputs[0] = graph.node_xor(a, b)   # sum
graph.outputs[1] = graph.node_and(a, b)   # carry

inference = InferenceGraph(graph, gen_inverse_index=False)
inputs = Bitset(2)
inputs.set(0)
inputs.set(1)
result = infer_host(inference, inputs)
print(result[0], result[1])   # False True
```

## What it does not do

- There is no command-line tool; the package is used as a library.
- Inference runs only in Python on the host through `infer_host`; there is no
  evaluation on a GPU or other compute device.
- Graphs live in memory only; there is no way to save or load them.