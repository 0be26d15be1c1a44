import pytest

from lockpick.dlist import DList, DListNode
from lockpick.errors import ConsistencyError


def _values(dlist):
    return [node.value for node in dlist]


def _backward_values(dlist):
    if dlist.head is None:
        return []
    out = []
    node = dlist.head.prev
    while True:
        out.append(node.value)
        if node is dlist.head:
            return out
        node = node.prev


def _assert_links_consistent(dlist):
    for node in dlist:
        assert node.next.prev is node
        assert node.prev.next is node
    assert _backward_values(dlist) == list(reversed(_values(dlist)))


def test_empty_list():
    dlist = DList()
    assert len(dlist) == 0
    assert list(dlist) == []
    assert dlist.head is None


def test_push_back_keeps_order():
    values = ["a", "b", "c", "d"]
    dlist = DList()
    for value in values:
        dlist.push_back(DListNode(value))
    assert _values(dlist) == values
    assert len(dlist) == len(values)
    _assert_links_consistent(dlist)


def test_push_front_reverses_order():
    values = ["a", "b", "c"]
    dlist = DList()
    for value in values:
        dlist.push_front(DListNode(value))
    assert _values(dlist) == list(reversed(values))
    assert dlist.head.value == values[-1]
    _assert_links_consistent(dlist)


def test_single_node_links_to_itself():
    node = DListNode("only")
    dlist = DList()
    dlist.push_back(node)
    assert node.next is node and node.prev is node
    assert dlist.head is node


def test_insert_before_head_moves_head():
    dlist = DList()
    first = DListNode("b")
    dlist.push_back(first)
    dlist.push_back(DListNode("c"))
    new = DListNode("a")
    dlist.insert_before(first, new)
    assert dlist.head is new
    assert _values(dlist) == ["a", "b", "c"]
    _assert_links_consistent(dlist)


def test_insert_before_middle_keeps_head():
    dlist = DList()
    a, c = DListNode("a"), DListNode("c")
    dlist.push_back(a)
    dlist.push_back(c)
    dlist.insert_before(c, DListNode("b"))
    assert dlist.head is a
    assert _values(dlist) == ["a", "b", "c"]
    _assert_links_consistent(dlist)


def test_insert_after():
    dlist = DList()
    a = DListNode("a")
    dlist.push_back(a)
    dlist.push_back(DListNode("c"))
    dlist.insert_after(a, DListNode("b"))
    assert _values(dlist) == ["a", "b", "c"]
    _assert_links_consistent(dlist)


def test_insert_after_tail_appends():
    dlist = DList()
    a = DListNode("a")
    dlist.push_back(a)
    dlist.insert_after(a, DListNode("z"))
    assert _values(dlist) == ["a", "z"]
    assert dlist.head is a


def test_remove_head_and_middle():
    nodes = [DListNode(v) for v in ["a", "b", "c", "d"]]
    dlist = DList()
    for node in nodes:
        dlist.push_back(node)
    dlist.remove(nodes[0])
    assert dlist.head is nodes[1]
    dlist.remove(nodes[2])
    assert _values(dlist) == ["b", "d"]
    assert len(dlist) == len(nodes) - 2
    _assert_links_consistent(dlist)


def test_remove_last_node_empties_list():
    node = DListNode("x")
    dlist = DList()
    dlist.push_back(node)
    dlist.remove(node)
    assert dlist.head is None
    assert list(dlist) == []
    assert len(dlist) == 0


@pytest.mark.parametrize("operation", ["insert_before", "insert_after"])
def test_insert_on_empty_list_fails(operation):
    dlist = DList()
    with pytest.raises(ConsistencyError):
        getattr(dlist, operation)(DListNode("p"), DListNode("n"))


def test_remove_on_empty_list_fails():
    with pytest.raises(ConsistencyError):
        DList().remove(DListNode("n"))


def test_push_none_fails():
    with pytest.raises(ConsistencyError):
        DList().push_back(None)


def test_mixed_operations_keep_structure():
    dlist = DList()
    nodes = {v: DListNode(v) for v in "abcdef"}
    dlist.push_back(nodes["c"])
    dlist.push_front(nodes["a"])
    dlist.insert_after(nodes["a"], nodes["b"])
    dlist.push_back(nodes["e"])
    dlist.insert_before(nodes["e"], nodes["d"])
    dlist.push_back(nodes["f"])
    assert _values(dlist) == list("abcdef")
    for v in "ace":
        dlist.remove(nodes[v])
    assert _values(dlist) == list("bdf")
    _assert_links_consistent(dlist)