"""
Invariant checks and statistics for live trees.

The checkers return lists of human-readable violations instead of stopping
at the first one; ``assert_valid`` turns a non-empty list into an
``InvariantViolation``.
"""

from dataclasses import dataclass
from typing import Optional

from treeviz.errors import InvariantViolation
from treeviz.node import BLACK, RED


@dataclass(frozen=True)
class TreeStats:
    kind: str
    nodes: int
    height: int
    black_height: Optional[int] = None
    black: Optional[int] = None
    red: Optional[int] = None
    valid: bool = True


def _walk(tree):
    """Pre-order list of live nodes (explicit stack)."""
    out, stack = [], [tree._root]
    while stack:
        node = stack.pop()
        if not tree._present(node):
            continue
        out.append(node)
        stack.append(node.right)
        stack.append(node.left)
    return out


def check_bst(tree):
    """
    Strict ordering, consistent parent links and a matching ``len``.
    """
    problems = []
    present = tree._present
    root = tree._root
    if present(root) and root.parent is not None:
        problems.append(f"root {root.value} has a parent link")

    # (node, low, high) bounds, exclusive
    stack = [(root, None, None)]
    seen = 0
    while stack:
        node, lo, hi = stack.pop()
        if not present(node):
            continue
        seen += 1
        if lo is not None and not node.value > lo:
            problems.append(f"{node.value} is not greater than ancestor {lo}")
        if hi is not None and not node.value < hi:
            problems.append(f"{node.value} is not less than ancestor {hi}")
        for child in (node.left, node.right):
            if present(child) and child.parent is not node:
                problems.append(f"{child.value} has a stale parent link")
        stack.append((node.left, lo, node.value))
        stack.append((node.right, node.value, hi))

    if seen != len(tree):
        problems.append(f"size is {len(tree)} but {seen} nodes are reachable")
    return problems


def check_avl(tree):
    """Stored heights / balance factors are exact and ``|bf| <= 1``."""
    problems = []
    heights = {}
    # children are popped before parents when the pre-order list is reversed
    for node in reversed(_walk(tree)):
        lh = heights.get(id(node.left), 0) if node.left is not None else 0
        rh = heights.get(id(node.right), 0) if node.right is not None else 0
        h = 1 + max(lh, rh)
        heights[id(node)] = h
        if node.height != h:
            problems.append(f"node {node.value}: stored height "
                            f"{node.height}, actual {h}")
        if node.balance_factor != lh - rh:
            problems.append(f"node {node.value}: stored balance factor "
                            f"{node.balance_factor}, actual {lh - rh}")
        if abs(lh - rh) > 1:
            problems.append(f"node {node.value} is unbalanced "
                            f"(balance factor {lh - rh})")
    return problems


def _black_heights(tree):
    """
    Black-height of every subtree, counting the sentinel as 1.

    Returns:
        tuple[dict, list[str]]: id(node) -> black height, and problems.
    """
    problems = []
    bh = {id(tree.NIL): 1}
    for node in reversed(_walk(tree)):
        left, right = bh[id(node.left)], bh[id(node.right)]
        if left != right:
            problems.append(f"node {node.value}: black height {left} on the "
                            f"left, {right} on the right")
        bh[id(node)] = left + (1 if node.color == BLACK else 0)
    return bh, problems


def check_red_black(tree):
    """Root black, sentinel black, no red-red edge, equal black heights."""
    problems = []
    root, nil = tree._root, tree.NIL
    if nil.color != BLACK:
        problems.append("sentinel is not black")
    if root is not nil and root.color != BLACK:
        problems.append(f"root {root.value} is red")
    for node in _walk(tree):
        if node.color not in (RED, BLACK):
            problems.append(f"node {node.value} has colour {node.color!r}")
        if node.color == RED:
            for child in (node.left, node.right):
                if child.color == RED:
                    problems.append(f"red node {node.value} has red child "
                                    f"{child.value}")
    problems.extend(_black_heights(tree)[1])
    return problems


def violations(tree):
    """Every violation for the checks matching *tree*'s kind."""
    problems = check_bst(tree)
    if tree.kind == "avl":
        problems += check_avl(tree)
    elif tree.kind == "redblack":
        problems += check_red_black(tree)
    return problems


def assert_valid(tree):
    """
    Raise ``InvariantViolation`` listing every broken invariant.
    """
    problems = violations(tree)
    if problems:
        raise InvariantViolation(problems)


def tree_stats(tree):
    """Node count, height and (Red-Black) colour statistics."""
    stats = {
        "kind": tree.kind,
        "nodes": len(tree),
        "height": tree.height,
        "valid": not violations(tree),
    }
    if tree.kind == "redblack":
        nodes = _walk(tree)
        red = sum(1 for n in nodes if n.color == RED)
        stats["red"] = red
        stats["black"] = len(nodes) - red
        bh, _ = _black_heights(tree)
        # excluding the node itself, as in the glossary
        root = tree._root
        stats["black_height"] = (bh[id(root)] - (1 if root.color == BLACK else 0)
                                 if root is not tree.NIL else 0)
    return TreeStats(**stats)
