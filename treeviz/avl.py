"""
avl.py
------

Height-balanced binary search tree with an optional step trace.

Insert and delete descend recursively; on the way back up every node on the
path gets its height and balance factor recomputed and is rotated back into
balance when ``|balance_factor| > 1``:

    balance >  1, left child leans right   → LR: rotate left child, rotate right
    balance >  1 otherwise                 → LL: rotate right
    balance < -1, right child leans left   → RL: rotate right child, rotate left
    balance < -1 otherwise                 → RR: rotate left

Rotations only relink nodes.  Ids and values never move between nodes during
a rotation; the only value copy is the in-order successor copy in delete.
"""

import logging

from treeviz.base import BalancedTree
from treeviz.node import AVLNode, update_height
from treeviz.steps import RotationKind, StepKind

logger = logging.getLogger(__name__)

_CASE_NAMES = {
    RotationKind.LL: "Left-Left",
    RotationKind.LR: "Left-Right",
    RotationKind.RR: "Right-Right",
    RotationKind.RL: "Right-Left",
}


class AVLTree(BalancedTree):
    """
    AVL tree of unique, ordered scalar values.

    >>> t = AVLTree(values=[10, 20, 30])
    >>> t.root_value, t.traverse("levelorder")
    (20, [20, 10, 30])
    """

    kind = "avl"

    def _reset(self):
        self._root_node = None

    @property
    def _root(self):
        return self._root_node

    def _present(self, node):
        return node is not None

    def _new_node(self, value):
        self._size += 1
        return AVLNode(self._ids.next(), value)

    # ─────────────────────────────────────────────────────────────
    #  ROTATIONS
    #
    #  Each takes the subtree root that must have the child it
    #  promotes and returns the new subtree root.  The caller
    #  re-attaches the returned node to its parent slot.
    # ─────────────────────────────────────────────────────────────

    def _rotate_right(self, y, rec, case):
        """
        Right-rotate the subtree rooted at *y*.

        Before:       After:
            y           x
           / \\         / \\
          x   γ       α   y
         / \\             / \\
        α   β           β   γ
        """
        x  = y.left
        t2 = x.right
        rec.record(StepKind.ROTATION, y.value,
                   f"Right rotation at node {y.value}",
                   affected=[y.value, x.value], rotation_kind=case)

        x.right  = y
        y.left   = t2
        x.parent = y.parent
        y.parent = x
        if t2 is not None:
            t2.parent = y

        # demoted node first: the promoted node's height depends on it
        update_height(y)
        update_height(x)

        rec.record(StepKind.UPDATE, x.value,
                   f"Tree updated after right rotation: {x.value} "
                   f"replaces {y.value}",
                   affected=[x.value, y.value])
        return x

    def _rotate_left(self, x, rec, case):
        """
        Left-rotate the subtree rooted at *x* (mirror of ``_rotate_right``).
        """
        y  = x.right
        t2 = y.left
        rec.record(StepKind.ROTATION, x.value,
                   f"Left rotation at node {x.value}",
                   affected=[x.value, y.value], rotation_kind=case)

        y.left   = x
        x.right  = t2
        y.parent = x.parent
        x.parent = y
        if t2 is not None:
            t2.parent = x

        update_height(x)
        update_height(y)

        rec.record(StepKind.UPDATE, y.value,
                   f"Tree updated after left rotation: {y.value} "
                   f"replaces {x.value}",
                   affected=[y.value, x.value])
        return y

    def _rebalance(self, node, rec):
        """
        Refresh *node*'s height / balance factor and rotate if it is out
        of balance.  Returns the (possibly new) subtree root.
        """
        update_height(node)
        bf = node.balance_factor
        rec.record(StepKind.HIGHLIGHT, node.value,
                   f"Checking balance factor at node {node.value}: {bf}",
                   path=[node.value])

        if bf > 1:
            if node.left.balance_factor < 0:
                case = RotationKind.LR
                self._announce(node, node.left, case, rec)
                node.left = self._rotate_left(node.left, rec, case)
                node.left.parent = node
                return self._rotate_right(node, rec, case)
            case = RotationKind.LL
            self._announce(node, node.left, case, rec)
            return self._rotate_right(node, rec, case)

        if bf < -1:
            if node.right.balance_factor > 0:
                case = RotationKind.RL
                self._announce(node, node.right, case, rec)
                node.right = self._rotate_right(node.right, rec, case)
                node.right.parent = node
                return self._rotate_left(node, rec, case)
            case = RotationKind.RR
            self._announce(node, node.right, case, rec)
            return self._rotate_left(node, rec, case)

        return node

    @staticmethod
    def _announce(node, child, case, rec):
        rec.record(StepKind.HIGHLIGHT, node.value,
                   f"{_CASE_NAMES[case]} case detected at node {node.value}",
                   affected=[node.value, child.value], rotation_kind=case)

    # ─────────────────────────────────────────────────────────────
    #  INSERT
    # ─────────────────────────────────────────────────────────────

    def _insert(self, value, rec):
        if self._root_node is None:
            self._root_node = self._new_node(value)
            rec.record(StepKind.HIGHLIGHT, value,
                       f"Inserted root node {value}", path=[value])
            rec.record(StepKind.UPDATE, value,
                       f"Tree updated with new root {value}")
            return True, [value], f"Node {value} inserted as root"

        path = []
        root, new_node = self._insert_at(self._root_node, value, path, rec)
        self._root_node = root
        root.parent = None

        if new_node is None:
            return True, path, f"Node {value} already exists"
        path.append(value)
        rec.record(StepKind.UPDATE, value,
                   f"Node {value} inserted successfully", duration=800)
        return True, path, f"Node {value} inserted successfully"

    def _insert_at(self, node, value, path, rec):
        """
        Insert below *node*.

        Returns:
            tuple[AVLNode, AVLNode|None]: New subtree root and the created
            node (None when *value* was already present).
        """
        if node is None:
            rec.record(StepKind.HIGHLIGHT, value,
                       f"Found insertion point for node {value}", path=path)
            new_node = self._new_node(value)
            return new_node, new_node

        path.append(node.value)
        rec.record(StepKind.COMPARISON, node.value,
                   f"Comparing {value} with {node.value}", target_value=value)

        if value == node.value:
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"Node {value} already exists in the tree", path=path)
            return node, None

        if value < node.value:
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"{value} < {node.value}, going to left subtree",
                       path=path)
            child, new_node = self._insert_at(node.left, value, path, rec)
            node.left = child
        else:
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"{value} > {node.value}, going to right subtree",
                       path=path)
            child, new_node = self._insert_at(node.right, value, path, rec)
            node.right = child
        child.parent = node

        if new_node is None:
            return node, None
        if child is new_node:
            rec.record(StepKind.UPDATE, value,
                       f"Connected node {value} to parent {node.value}",
                       affected=[value, node.value])
        return self._rebalance(node, rec), new_node

    # ─────────────────────────────────────────────────────────────
    #  DELETE
    # ─────────────────────────────────────────────────────────────

    def _delete(self, value, rec):
        path = []
        root = self._delete_at(self._root_node, value, path, rec)
        self._root_node = root
        if root is not None:
            root.parent = None
        return path

    def _min_node(self, node, rec):
        """Leftmost node of the subtree rooted at *node*, traced."""
        rec.record(StepKind.HIGHLIGHT, node.value,
                   f"Finding minimum value in the subtree rooted at "
                   f"{node.value}")
        while node.left is not None:
            rec.record(StepKind.COMPARISON, node.value,
                       f"Checking if {node.value} has a left child",
                       duration=600)
            node = node.left
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"Moving to left child: {node.value}", duration=600)
        rec.record(StepKind.HIGHLIGHT, node.value,
                   f"Found minimum value: {node.value}")
        return node

    def _delete_at(self, node, value, path, rec):
        """
        Delete *value* from the subtree rooted at *node*, where it is known
        to be present.  Returns the new subtree root.
        """
        path.append(node.value)
        rec.record(StepKind.COMPARISON, node.value,
                   f"Comparing {value} with {node.value}", target_value=value)

        if value < node.value:
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"{value} < {node.value}, searching in left subtree",
                       path=path)
            node.left = self._delete_at(node.left, value, path, rec)
            if node.left is not None:
                node.left.parent = node
            rec.record(StepKind.UPDATE, node.value,
                       f"Updated left subtree of node {node.value}")

        elif value > node.value:
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"{value} > {node.value}, searching in right subtree",
                       path=path)
            node.right = self._delete_at(node.right, value, path, rec)
            if node.right is not None:
                node.right.parent = node
            rec.record(StepKind.UPDATE, node.value,
                       f"Updated right subtree of node {node.value}")

        else:
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"Found node {value} to delete", path=path)

            # ── Zero or one child: splice the child into this slot ──
            if node.left is None or node.right is None:
                if node.left is None:
                    child, side = node.right, "right"
                    rec.record(StepKind.HIGHLIGHT, node.value,
                               f"Node {value} has no left child, "
                               f"replacing with right child")
                else:
                    child, side = node.left, "left"
                    rec.record(StepKind.HIGHLIGHT, node.value,
                               f"Node {value} has no right child, "
                               f"replacing with left child")
                rec.record(StepKind.UPDATE,
                           child.value if child is not None else value,
                           f"Removed node {value} from the tree",
                           affected=[value,
                                     child.value if child is not None else None],
                           duration=800)
                if child is not None:
                    child.parent = node.parent
                node.left = node.right = node.parent = None
                logger.debug("avl: spliced %r (%s child kept)", value, side)
                return child

            # ── Two children: copy successor value, delete successor ──
            rec.record(StepKind.HIGHLIGHT, node.value,
                       f"Node {value} has two children, "
                       f"finding inorder successor")
            successor = self._min_node(node.right, rec)
            succ_value = successor.value
            rec.record(StepKind.HIGHLIGHT, succ_value,
                       f"Replacing node {node.value} with inorder "
                       f"successor {succ_value}",
                       affected=[node.value, succ_value])
            node.value = succ_value
            rec.record(StepKind.HIGHLIGHT, succ_value,
                       f"Now deleting the inorder successor {succ_value} "
                       f"from its original position")
            node.right = self._delete_at(node.right, succ_value, [], rec)
            if node.right is not None:
                node.right.parent = node
            rec.record(StepKind.UPDATE, node.value,
                       f"Replaced deleted node with successor {node.value}",
                       affected=[node.value])

        return self._rebalance(node, rec)
