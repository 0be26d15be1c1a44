import pytest

from lockpick.errors import ConsistencyError
from lockpick.graph import Graph, Node, NodeType


def test_new_graph_has_false_const_inputs_and_empty_outputs():
    graph = Graph("g", 3, 2, 10)
    assert graph.name == "g"
    assert len(graph.inputs) == 3
    assert all(n.type is NodeType.CONST and n.value is False for n in graph.inputs)
    assert graph.outputs == [None, None]
    assert graph.allocated_nodes() == graph.inputs
    assert graph.is_super() is True


def test_parent_counts_follow_node_type():
    graph = Graph("g", 2, 1, 10)
    a, b = graph.inputs
    assert graph.node_and(a, b).parents_num() == 2
    assert graph.node_or(a, b).parents_num() == 2
    assert graph.node_xor(a, b).parents_num() == 2
    assert graph.node_not(a).parents_num() == 1
    assert graph.node_const(True).parents_num() == 0


def test_operators_link_parents_and_children():
    graph = Graph("g", 2, 1, 10)
    a, b = graph.inputs
    node = graph.node_and(a, b)
    assert node.type is NodeType.AND
    assert node.parents == [a, b]
    assert a.children == [node]
    assert b.children == [node]
    assert a.children_num() == 1
    assert node.children_num() == 0
    neg = graph.node_not(node)
    assert neg.parents == [node]
    assert node.children == [neg]


def test_const_keeps_value():
    graph = Graph("g", 0, 0, 2)
    assert graph.node_const(True).value is True
    assert graph.node_const(False).value is False


def test_capacity_limit_raises():
    graph = Graph("g", 1, 0, 2)
    graph.node_not(graph.inputs[0])
    with pytest.raises(ConsistencyError):
        graph.node_const(True)
    assert len(graph.allocated_nodes()) == 2


def test_too_many_inputs_for_capacity_raises():
    with pytest.raises(ConsistencyError):
        Graph("g", 3, 0, 2)


def test_owns_only_own_nodes():
    first = Graph("a", 1, 0, 4)
    second = Graph("b", 1, 0, 4)
    node = first.node_not(first.inputs[0])
    assert first.owns(node)
    assert not second.owns(node)


def test_null_operand_raises():
    graph = Graph("g", 1, 0, 4)
    with pytest.raises(ConsistencyError):
        graph.node_and(graph.inputs[0], None)
    with pytest.raises(ConsistencyError):
        graph.node_not(None)


def test_node_arity_checked():
    with pytest.raises(ConsistencyError):
        Node(NodeType.NOT, ())


def test_release_cascades_to_orphaned_ancestors():
    graph = Graph("g", 2, 1, 10)
    a, b = graph.inputs
    neg = graph.node_not(a)
    const = graph.node_const(True)
    top = graph.node_and(neg, const)
    kept = graph.node_or(a, b)
    graph.outputs[0] = kept
    graph.release_node(top)
    remaining = graph.allocated_nodes()
    assert remaining == [a, b, kept]
    assert a.children == [kept]
    assert not graph.owns(top)
    assert not graph.owns(neg)
    assert not graph.owns(const)


def test_release_stops_at_outputs():
    graph = Graph("g", 1, 1, 10)
    (a,) = graph.inputs
    out = graph.node_not(a)
    graph.outputs[0] = out
    extra = graph.node_not(out)
    graph.release_node(extra)
    assert graph.owns(out)
    assert out.children == []
    assert a.children == [out]


def test_release_with_repeated_parent():
    graph = Graph("g", 0, 0, 4)
    c = graph.node_const(True)
    node = graph.node_xor(c, c)
    assert c.children_num() == 2
    graph.release_node(node)
    assert graph.allocated_nodes() == []


def test_release_rejects_node_with_children():
    graph = Graph("g", 1, 0, 4)
    inner = graph.node_not(graph.inputs[0])
    graph.node_not(inner)
    with pytest.raises(ConsistencyError):
        graph.release_node(inner)


def test_release_rejects_inputs_and_outputs():
    graph = Graph("g", 1, 1, 4)
    with pytest.raises(ConsistencyError):
        graph.release_node(graph.inputs[0])
    out = graph.node_not(graph.inputs[0])
    graph.outputs[0] = out
    with pytest.raises(ConsistencyError):
        graph.release_node(out)


def test_release_rejects_foreign_node():
    first = Graph("a", 1, 0, 4)
    second = Graph("b", 1, 0, 4)
    node = first.node_not(first.inputs[0])
    with pytest.raises(ConsistencyError):
        second.release_node(node)


def test_released_slot_can_be_reused():
    graph = Graph("g", 1, 0, 2)
    node = graph.node_not(graph.inputs[0])
    graph.release_node(node)
    again = graph.node_not(graph.inputs[0])
    assert graph.allocated_nodes() == [graph.inputs[0], again]


def test_created_nodes_carry_type_values_and_arities():
    graph = Graph("g", 2, 0, 10)
    a, b = graph.inputs
    nodes = [
        graph.node_and(a, b),
        graph.node_or(a, b),
        graph.node_not(a),
        graph.node_xor(a, b),
        graph.node_const(True),
    ]
    assert [n.type.value for n in nodes] == [0, 1, 2, 3, 4]
    assert [n.parents_num() for n in nodes] == [2, 2, 1, 2, 0]
    assert [n.type.arity for n in nodes] == [2, 2, 1, 2, 0]