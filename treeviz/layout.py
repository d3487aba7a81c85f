"""
Layout algorithm: tree shape -> positioned, read-only render graph.

Each node sits at the midpoint of a horizontal interval it inherits from its
parent.  The root gets the middle of the full canvas; a child gets the middle
of the half-interval on its side, damped so siblings keep some breathing room;
every level is one row lower.  The canvas widens with depth so deep trees are
not crowded.

The result is a flat list of ``RenderNode``s in pre-order.  Each entry's
``left`` / ``right`` point at other entries of the same list, never at live
tree nodes, and a new list is built on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry constants (pixels)."""

    root_y: float = 100.0
    row_height: float = 100.0
    min_width: float = 1000.0
    leaf_spacing: float = 120.0
    damping: float = 0.95

    def canvas_width(self, depth):
        """Width for a tree of *depth* levels (0 = empty)."""
        if depth <= 0:
            return self.min_width
        return max(self.min_width, 2 ** (depth - 1) * self.leaf_spacing)


DEFAULT_LAYOUT = LayoutConfig()


@dataclass(frozen=True)
class RenderNode:
    id: int
    value: int
    x: float
    y: float
    depth: int
    height: Optional[int] = None
    balance_factor: Optional[int] = None
    color: Optional[str] = None
    parent_id: Optional[int] = None
    left: Optional["RenderNode"] = field(default=None, repr=False)
    right: Optional["RenderNode"] = field(default=None, repr=False)

    def to_dict(self):
        return {
            "id": self.id,
            "value": self.value,
            "x": self.x,
            "y": self.y,
            "depth": self.depth,
            "height": self.height,
            "balanceFactor": self.balance_factor,
            "color": self.color,
            "parentId": self.parent_id,
            "left": self.left.id if self.left is not None else None,
            "right": self.right.id if self.right is not None else None,
        }


# ═════════════════════════════════════════════════════════════════
#  TREE GEOMETRY HELPERS
# ═════════════════════════════════════════════════════════════════

def tree_depth(node, present):
    """
    Number of levels below and including *node* (0 for an absent node).

    Args:
        node    : Subtree root.
        present : Real-node predicate.
    """
    if not present(node):
        return 0
    return 1 + max(tree_depth(node.left, present),
                   tree_depth(node.right, present))


def layout_tree(root, present, config=DEFAULT_LAYOUT) -> List[RenderNode]:
    """
    Position every node of the tree rooted at *root*.

    Args:
        root    : Live tree root (may be absent).
        present : Real-node predicate (``None`` check or sentinel check).
        config  : Geometry constants.

    Returns:
        list[RenderNode]: Pre-order, root first; empty for an empty tree.
    """
    out: List[Optional[RenderNode]] = []
    if not present(root):
        return []

    width = config.canvas_width(tree_depth(root, present))
    half  = config.damping / 2.0

    def _place(node, x, y, depth, lo, hi, parent_id):
        slot = len(out)
        out.append(None)    # reserve pre-order position
        left = right = None
        if present(node.left):
            left = _place(node.left, x - (x - lo) * half,
                          y + config.row_height, depth + 1, lo, x, node.id)
        if present(node.right):
            right = _place(node.right, x + (hi - x) * half,
                           y + config.row_height, depth + 1, x, hi, node.id)
        rn = RenderNode(
            id=node.id,
            value=node.value,
            x=x,
            y=y,
            depth=depth,
            height=getattr(node, "height", None),
            balance_factor=getattr(node, "balance_factor", None),
            color=node.color,
            parent_id=parent_id,
            left=left,
            right=right,
        )
        out[slot] = rn
        return rn

    _place(root, width / 2.0, config.root_y, 0, 0.0, width, None)
    logger.debug("layout: %d nodes, canvas width %.0f", len(out), width)
    return out  # type: ignore[return-value]


def render_bounds(nodes):
    """
    Bounding box ``(min_x, min_y, max_x, max_y)`` of a render graph, or
    None for an empty one.
    """
    if not nodes:
        return None
    xs = [n.x for n in nodes]
    ys = [n.y for n in nodes]
    return min(xs), min(ys), max(xs), max(ys)
