"""
Node model shared by the AVL and Red-Black engines.

Children are owned by their parent; ``parent`` is a plain back-reference
used only to walk upward during fixups.  Nothing ever follows ``parent``
to decide what to drop.
"""

import itertools

# ═════════════════════════════════════════════════════════════════
#  COLOUR TAGS (Red-Black only)
# ═════════════════════════════════════════════════════════════════
RED   = "red"
BLACK = "black"


class IdCounter:
    """
    Per-tree source of node ids.

    Ids start at 1, only ever increase and are never handed out twice,
    even after the node that carried one has been deleted.
    """

    __slots__ = ("_it",)

    def __init__(self):
        self._it = itertools.count(1)

    def next(self):
        return next(self._it)


# ═════════════════════════════════════════════════════════════════
#  AVL NODE
#
#    id             : int        – stable identity
#    value          : int        – ordered scalar
#    left / right   : AVLNode?   – owned children (None = absent)
#    parent         : AVLNode?   – back-reference (None for root)
#    height         : int        – 1 for a leaf
#    balance_factor : int        – height(left) - height(right)
# ═════════════════════════════════════════════════════════════════
class AVLNode:
    __slots__ = ("id", "value", "left", "right", "parent",
                 "height", "balance_factor")

    def __init__(self, node_id, value, parent=None):
        self.id             = node_id
        self.value          = value
        self.left           = None
        self.right          = None
        self.parent         = parent
        self.height         = 1
        self.balance_factor = 0

    @property
    def color(self):
        return None

    def __repr__(self):
        return (f"AVLNode(id={self.id}, value={self.value!r}, "
                f"h={self.height}, bf={self.balance_factor})")


def height(node):
    """Height of *node*, 0 for an absent child."""
    return node.height if node is not None else 0


def update_height(node):
    """
    Recompute ``height`` and ``balance_factor`` of *node* from its
    children.  Children must already be up to date.
    """
    lh, rh = height(node.left), height(node.right)
    node.height         = 1 + max(lh, rh)
    node.balance_factor = lh - rh


# ═════════════════════════════════════════════════════════════════
#  RB NODE
#
#  Leaves point at the tree's sentinel instead of None, so colour
#  lookups never need a None check.
# ═════════════════════════════════════════════════════════════════
class RBNode:
    """
    A single node in the Red-Black tree.

    Attributes:
        id     (int)      : Stable identity; 0 for the sentinel.
        value  (int|None) : Node value; None for the sentinel.
        color  (str)      : RED or BLACK.
        left   (RBNode)   : Left child (or the sentinel).
        right  (RBNode)   : Right child (or the sentinel).
        parent (RBNode?)  : Parent node (None for root).
    """
    __slots__ = ("id", "value", "color", "left", "right", "parent")

    def __init__(self, node_id, value, color=RED, nil=None):
        self.id     = node_id
        self.value  = value
        self.color  = color
        self.left   = nil
        self.right  = nil
        self.parent = None

    def __repr__(self):
        if self.value is None:
            return "RBNode(NIL)"
        return f"RBNode(id={self.id}, value={self.value!r}, {self.color})"


def make_sentinel():
    """
    Build the black ``nil`` node that terminates every leaf of one tree.

    Its children point back at itself.  Its colour is never changed; its
    ``parent`` is only written transiently by delete (see RedBlackTree).
    """
    nil = RBNode(0, None, BLACK)
    nil.left = nil.right = nil
    return nil
