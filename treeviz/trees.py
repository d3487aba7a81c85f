"""Tree-type registry.  Switching type means building a fresh, empty tree."""

from treeviz.avl import AVLTree
from treeviz.rbtree import RedBlackTree

TREE_TYPES = {
    "avl": AVLTree,
    "redblack": RedBlackTree,
}

_ALIASES = {
    "rb": "redblack",
    "red-black": "redblack",
    "red_black": "redblack",
}


def make_tree(kind, **kwargs):
    """
    Build an empty tree of *kind* (``"avl"`` or ``"redblack"``).

    Keyword arguments are passed to the tree constructor.

    Raises:
        ValueError: Unknown kind.
    """
    key = kind.strip().lower()
    key = _ALIASES.get(key, key)
    try:
        cls = TREE_TYPES[key]
    except KeyError:
        raise ValueError(f"unknown tree kind {kind!r}; "
                         f"expected one of {sorted(TREE_TYPES)}") from None
    return cls(**kwargs)
