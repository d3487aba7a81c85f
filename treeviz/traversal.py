"""
Traversal producers.

Each function walks a tree from ``root`` and returns the values in visiting
order.  ``present(node)`` tells a real node from an absent child, so the same
code serves the AVL engine (absent = None) and the Red-Black engine
(absent = the sentinel).  Walks are iterative and never touch the tree.
"""

import enum
from collections import deque


class TraversalKind(str, enum.Enum):
    INORDER    = "inorder"
    PREORDER   = "preorder"
    POSTORDER  = "postorder"
    LEVELORDER = "levelorder"


def _is_node(node):
    return node is not None


def inorder(root, present=_is_node):
    """Left, self, right.  Sorted order for any valid search tree."""
    out, stack, cur = [], [], root
    while stack or present(cur):
        while present(cur):
            stack.append(cur)
            cur = cur.left
        cur = stack.pop()
        out.append(cur.value)
        cur = cur.right
    return out


def preorder(root, present=_is_node):
    """Self, left, right."""
    out = []
    stack = [root] if present(root) else []
    while stack:
        node = stack.pop()
        out.append(node.value)
        # right pushed first so left is visited first
        if present(node.right):
            stack.append(node.right)
        if present(node.left):
            stack.append(node.left)
    return out


def postorder(root, present=_is_node):
    """Left, right, self."""
    out = []
    stack = [root] if present(root) else []
    while stack:
        node = stack.pop()
        out.append(node.value)
        if present(node.left):
            stack.append(node.left)
        if present(node.right):
            stack.append(node.right)
    out.reverse()
    return out


def levelorder(root, present=_is_node):
    """Breadth first, left before right on every level."""
    out = []
    queue = deque([root] if present(root) else [])
    while queue:
        node = queue.popleft()
        out.append(node.value)
        if present(node.left):
            queue.append(node.left)
        if present(node.right):
            queue.append(node.right)
    return out


_WALKERS = {
    TraversalKind.INORDER:    inorder,
    TraversalKind.PREORDER:   preorder,
    TraversalKind.POSTORDER:  postorder,
    TraversalKind.LEVELORDER: levelorder,
}


def traverse(root, kind, present=_is_node):
    """
    Dispatch to one of the four walks.

    Args:
        root    (node|None)           : Subtree root.
        kind    (TraversalKind|str)   : Which walk; case-insensitive string ok.
        present (callable)            : Real-node predicate.

    Raises:
        ValueError: *kind* is not a known traversal.
    """
    if isinstance(kind, str) and not isinstance(kind, TraversalKind):
        try:
            kind = TraversalKind(kind.strip().lower())
        except ValueError:
            raise ValueError(f"unknown traversal kind: {kind!r}") from None
    try:
        walker = _WALKERS[kind]
    except KeyError:
        raise ValueError(f"unknown traversal kind: {kind!r}") from None
    return walker(root, present)
