import pytest

from treeviz.node import AVLNode
from treeviz.traversal import TraversalKind, traverse


def _tree():
    """
            4
          /   \\
         2     6
        / \\     \\
       1   3     7
    """
    nodes = {v: AVLNode(v, v) for v in (1, 2, 3, 4, 6, 7)}
    nodes[4].left, nodes[4].right = nodes[2], nodes[6]
    nodes[2].left, nodes[2].right = nodes[1], nodes[3]
    nodes[6].right = nodes[7]
    return nodes[4]


@pytest.mark.parametrize("kind, expected", [
    ("inorder",    [1, 2, 3, 4, 6, 7]),
    ("preorder",   [4, 2, 1, 3, 6, 7]),
    ("postorder",  [1, 3, 2, 7, 6, 4]),
    ("levelorder", [4, 2, 6, 1, 3, 7]),
])
def test_walks(kind, expected):
    assert traverse(_tree(), kind) == expected
    assert traverse(_tree(), TraversalKind(kind)) == expected


def test_kind_is_case_insensitive():
    assert traverse(_tree(), " PreOrder ") == [4, 2, 1, 3, 6, 7]


def test_empty_root():
    for kind in TraversalKind:
        assert traverse(None, kind) == []


def test_custom_presence_predicate():
    root = _tree()
    # treat node 2 as absent: its whole subtree disappears
    assert traverse(root, "inorder", lambda n: n is not None and n.value != 2) \
        == [4, 6, 7]


@pytest.mark.parametrize("kind", ["zigzag", "", 3])
def test_unknown_kind(kind):
    with pytest.raises(ValueError):
        traverse(_tree(), kind)


def test_deep_tree_does_not_recurse():
    # a 5000-long right spine would blow the default recursion limit
    root = cur = AVLNode(0, 0)
    for v in range(1, 5000):
        cur.right = AVLNode(v, v)
        cur = cur.right
    for kind in TraversalKind:
        assert len(traverse(root, kind)) == 5000
