"""
treeviz
=======

AVL and Red-Black tree engines that can record a replayable step trace of
every insert, delete and find, plus a layout algorithm that positions the
tree for drawing.

>>> from treeviz import AVLTree
>>> tree = AVLTree()
>>> result = tree.insert(10, trace=True)
>>> result.success, tree.traverse("inorder")
(True, [10])
"""

from treeviz.avl import AVLTree
from treeviz.errors import InvariantViolation, TreeError
from treeviz.layout import DEFAULT_LAYOUT, LayoutConfig, RenderNode
from treeviz.node import BLACK, RED
from treeviz.player import PlaybackState, TracePlayer
from treeviz.rbtree import RedBlackTree
from treeviz.settings import Settings
from treeviz.steps import (FindResult, OperationResult, RotationKind, Step,
                           StepKind)
from treeviz.traversal import TraversalKind
from treeviz.trees import TREE_TYPES, make_tree
from treeviz.validate import assert_valid, tree_stats

__version__ = "1.0.0"

__all__ = [
    "AVLTree",
    "BLACK",
    "DEFAULT_LAYOUT",
    "FindResult",
    "InvariantViolation",
    "LayoutConfig",
    "OperationResult",
    "PlaybackState",
    "RED",
    "RedBlackTree",
    "RenderNode",
    "RotationKind",
    "Settings",
    "Step",
    "StepKind",
    "TREE_TYPES",
    "TracePlayer",
    "TraversalKind",
    "TreeError",
    "assert_valid",
    "make_tree",
    "tree_stats",
]
