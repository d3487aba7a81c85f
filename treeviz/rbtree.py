"""
rbtree.py
---------

Red-Black tree (CLRS chapter 13) with an optional step trace.

Every sub-step of insert and delete (comparison, placement, recolour,
rotation, case identification) can be recorded; with tracing off the same
code runs against a recorder that drops everything.

A single black sentinel ``NIL`` per tree terminates every leaf, so colour
lookups never need a None check.  ``NIL.color`` is never changed.  Its
``parent`` field is written by delete, as in CLRS, so the fixup can walk up
from a sentinel ``x``; it is cleared again before delete returns.

Rotation tags
~~~~~~~~~~~~~
Rotation steps carry the heavy path they repair: a single right rotation
fixes a left-left chain (``LL``), a single left rotation a right-right chain
(``RR``); the two rotations of insert case 2 + 3 or delete case 3 + 4 are
tagged ``LR`` / ``RL``.
"""

import logging

from treeviz.base import BalancedTree
from treeviz.node import BLACK, RED, RBNode, make_sentinel
from treeviz.steps import RotationKind, StepKind

logger = logging.getLogger(__name__)


class RedBlackTree(BalancedTree):
    """
    Red-Black tree of unique, ordered scalar values.

    Attributes:
        NIL (RBNode) : Sentinel node (shared by all leaves of this tree).
    """

    kind = "redblack"

    def _reset(self):
        self.NIL = make_sentinel()
        self._root_node = self.NIL

    @property
    def _root(self):
        return self._root_node

    def _present(self, node):
        return node is not self.NIL

    def _label(self, node):
        return node.value if node is not self.NIL else "NIL"

    def _recolor(self, node, color, rec, message):
        node.color = color
        rec.record(StepKind.UPDATE, node.value, message,
                   affected=[node.value])

    # ─────────────────────────────────────────────────────────────
    #  ROTATIONS
    #
    #  Standard left/right rotations per CLRS.  Each is logged as a
    #  rotation step followed by an update step.
    # ─────────────────────────────────────────────────────────────

    def _rotate_left(self, x, rec, case):
        """
        Left-rotate subtree rooted at x.

        Before:       After:
            x           y
           / \\         / \\
          α   y       x   γ
             / \\     / \\
            β   γ   α   β
        """
        y = x.right
        rec.record(StepKind.ROTATION, x.value,
                   f"Left rotation at node {x.value}",
                   affected=[x.value, y.value], rotation_kind=case)

        x.right = y.left               # Turn y's left subtree into x's right
        if y.left is not self.NIL:
            y.left.parent = x

        y.parent = x.parent            # Link x's parent to y
        if x.parent is None:
            self._root_node = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y

        y.left   = x                   # Put x on y's left
        x.parent = y

        rec.record(StepKind.UPDATE, y.value,
                   f"Tree updated after left rotation: {y.value} "
                   f"replaces {x.value}",
                   affected=[y.value, x.value])

    def _rotate_right(self, y, rec, case):
        """Right-rotate subtree rooted at y (mirror of left-rotate)."""
        x = y.left
        rec.record(StepKind.ROTATION, y.value,
                   f"Right rotation at node {y.value}",
                   affected=[y.value, x.value], rotation_kind=case)

        y.left = x.right
        if x.right is not self.NIL:
            x.right.parent = y

        x.parent = y.parent
        if y.parent is None:
            self._root_node = x
        elif y is y.parent.right:
            y.parent.right = x
        else:
            y.parent.left = x

        x.right  = y
        y.parent = x

        rec.record(StepKind.UPDATE, x.value,
                   f"Tree updated after right rotation: {x.value} "
                   f"replaces {y.value}",
                   affected=[x.value, y.value])

    # ─────────────────────────────────────────────────────────────
    #  INSERT  (CLRS RB-INSERT)
    #
    #  1. Standard BST walk, attach as leaf
    #  2. Colour new node RED
    #  3. _insert_fixup() restores RB properties
    # ─────────────────────────────────────────────────────────────

    def _insert(self, value, rec):
        nil = self.NIL
        if self._root_node is nil:
            rec.record(StepKind.HIGHLIGHT, value,
                       f"Inserting root node {value}", path=[value])

        parent, cur, path = None, self._root_node, []
        while cur is not nil:
            parent = cur
            path.append(cur.value)
            rec.record(StepKind.COMPARISON, cur.value,
                       f"Comparing {value} with {cur.value}",
                       target_value=value)
            if value == cur.value:
                rec.record(StepKind.HIGHLIGHT, cur.value,
                           f"Node {value} already exists in the tree",
                           path=path)
                return True, path, f"Node {value} already exists"
            if value < cur.value:
                rec.record(StepKind.HIGHLIGHT, cur.value,
                           f"{value} < {cur.value}, going to left subtree",
                           path=path)
                cur = cur.left
            else:
                rec.record(StepKind.HIGHLIGHT, cur.value,
                           f"{value} > {cur.value}, going to right subtree",
                           path=path)
                cur = cur.right

        z = RBNode(self._ids.next(), value, RED, nil)
        z.parent = parent
        self._size += 1
        if parent is None:
            self._root_node = z
            rec.record(StepKind.UPDATE, value,
                       f"Tree empty, {value} becomes the root",
                       affected=[value])
        elif value < parent.value:
            parent.left = z
            rec.record(StepKind.UPDATE, value,
                       f"Place {value} as left child of {parent.value}",
                       affected=[value, parent.value])
        else:
            parent.right = z
            rec.record(StepKind.UPDATE, value,
                       f"Place {value} as right child of {parent.value}",
                       affected=[value, parent.value])
        rec.record(StepKind.HIGHLIGHT, value,
                   f"New node {value} is red", affected=[value])

        self._insert_fixup(z, rec)

        path.append(value)
        message = (f"Node {value} inserted as root" if parent is None
                   else f"Node {value} inserted successfully")
        rec.record(StepKind.UPDATE, value, message, duration=800)
        return True, path, message

    # ─────────────────────────────────────────────────────────────
    #  INSERT FIXUP  (CLRS RB-INSERT-FIXUP)
    #
    #  Case 1: Uncle RED           → recolour P, U, GP; move z up
    #  Case 2: Uncle BLACK, inner  → rotate at parent (→ Case 3)
    #  Case 3: Uncle BLACK, outer  → recolour + rotate GP (terminal)
    # ─────────────────────────────────────────────────────────────

    def _insert_fixup(self, z, rec):
        while z.parent is not None and z.parent.color == RED:
            p, gp = z.parent, z.parent.parent
            rec.record(StepKind.HIGHLIGHT, z.value,
                       f"Parent {p.value} of {z.value} is red: "
                       f"red-red violation",
                       affected=[z.value, p.value])

            if p is gp.left:
                uncle = gp.right
                if uncle.color == RED:
                    z = self._uncle_red(z, p, gp, uncle, rec)
                    continue
                case = RotationKind.LL
                if z is p.right:
                    case = RotationKind.LR
                    rec.record(StepKind.HIGHLIGHT, z.value,
                               f"Uncle {self._label(uncle)} is black and "
                               f"{z.value} is an inner child: rotate at "
                               f"parent {p.value}",
                               affected=[z.value, p.value])
                    z = p
                    self._rotate_left(z, rec, case)
                p, gp = z.parent, z.parent.parent
                rec.record(StepKind.HIGHLIGHT, z.value,
                           f"Uncle {self._label(gp.right)} is black and "
                           f"{z.value} is an outer child: recolor and "
                           f"rotate at grandparent {gp.value}",
                           affected=[z.value, p.value, gp.value])
                self._recolor(p, BLACK, rec, f"Parent {p.value} → black")
                self._recolor(gp, RED, rec, f"Grandparent {gp.value} → red")
                self._rotate_right(gp, rec, case)

            else:
                # Mirror: parent is a right child
                uncle = gp.left
                if uncle.color == RED:
                    z = self._uncle_red(z, p, gp, uncle, rec)
                    continue
                case = RotationKind.RR
                if z is p.left:
                    case = RotationKind.RL
                    rec.record(StepKind.HIGHLIGHT, z.value,
                               f"Uncle {self._label(uncle)} is black and "
                               f"{z.value} is an inner child: rotate at "
                               f"parent {p.value}",
                               affected=[z.value, p.value])
                    z = p
                    self._rotate_right(z, rec, case)
                p, gp = z.parent, z.parent.parent
                rec.record(StepKind.HIGHLIGHT, z.value,
                           f"Uncle {self._label(gp.left)} is black and "
                           f"{z.value} is an outer child: recolor and "
                           f"rotate at grandparent {gp.value}",
                           affected=[z.value, p.value, gp.value])
                self._recolor(p, BLACK, rec, f"Parent {p.value} → black")
                self._recolor(gp, RED, rec, f"Grandparent {gp.value} → red")
                self._rotate_left(gp, rec, case)

        # ── Root is always BLACK ──
        if self._root_node.color == RED:
            self._recolor(self._root_node, BLACK, rec,
                          f"Root {self._root_node.value} → black")

    def _uncle_red(self, z, p, gp, uncle, rec):
        """Case 1: push blackness down from the grandparent; return gp."""
        rec.record(StepKind.HIGHLIGHT, z.value,
                   f"Uncle {uncle.value} is red: recolor parent, uncle "
                   f"and grandparent",
                   affected=[z.value, p.value, uncle.value, gp.value])
        self._recolor(p, BLACK, rec, f"Parent {p.value} → black")
        self._recolor(uncle, BLACK, rec, f"Uncle {uncle.value} → black")
        self._recolor(gp, RED, rec, f"Grandparent {gp.value} → red")
        rec.record(StepKind.HIGHLIGHT, gp.value,
                   f"Continue fixup from grandparent {gp.value}",
                   affected=[gp.value])
        return gp

    # ─────────────────────────────────────────────────────────────
    #  DELETE  (CLRS RB-DELETE)
    #
    #    a) No left child   → transplant right child
    #    b) No right child  → transplant left child
    #    c) Two children    → graft the in-order successor
    #
    #  If the spliced-out colour was BLACK, call _delete_fixup().
    # ─────────────────────────────────────────────────────────────

    def _transplant(self, u, v, rec):
        """Replace subtree rooted at *u* with subtree rooted at *v*."""
        if u.parent is None:
            self._root_node = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent
        rec.record(StepKind.UPDATE, u.value,
                   f"Replaced {u.value} with {self._label(v)}",
                   affected=[u.value, v.value])

    def _minimum(self, x, rec):
        rec.record(StepKind.HIGHLIGHT, x.value,
                   f"Finding minimum value in the subtree rooted at "
                   f"{x.value}")
        while x.left is not self.NIL:
            x = x.left
            rec.record(StepKind.HIGHLIGHT, x.value,
                       f"Moving to left child: {x.value}", duration=600)
        rec.record(StepKind.HIGHLIGHT, x.value,
                   f"Found minimum value: {x.value}")
        return x

    def _delete(self, value, rec):
        nil = self.NIL
        z, path = self._search(value, rec)

        y = z
        y_orig_color = y.color
        if z.left is nil:
            rec.record(StepKind.HIGHLIGHT, z.value,
                       f"Node {value} has no left child, replacing with "
                       f"right child")
            x = z.right
            self._transplant(z, z.right, rec)
        elif z.right is nil:
            rec.record(StepKind.HIGHLIGHT, z.value,
                       f"Node {value} has no right child, replacing with "
                       f"left child")
            x = z.left
            self._transplant(z, z.left, rec)
        else:
            rec.record(StepKind.HIGHLIGHT, z.value,
                       f"Node {value} has two children, finding inorder "
                       f"successor")
            y = self._minimum(z.right, rec)
            y_orig_color = y.color
            x = y.right
            if y.parent is z:
                x.parent = y
            else:
                self._transplant(y, y.right, rec)
                y.right        = z.right
                y.right.parent = y
            self._transplant(z, y, rec)
            y.left        = z.left
            y.left.parent = y
            y.color       = z.color
            rec.record(StepKind.UPDATE, y.value,
                       f"Successor {y.value} takes the place and color "
                       f"of {value}",
                       affected=[y.value])

        z.left = z.right = z.parent = None

        if y_orig_color == BLACK:
            rec.record(StepKind.HIGHLIGHT, value,
                       f"Removed a black node: fix double black at "
                       f"{self._label(x)}",
                       affected=[x.value])
            self._delete_fixup(x, rec)
        else:
            rec.record(StepKind.HIGHLIGHT, value,
                       "Removed a red node: no fixup needed")
        nil.parent = None
        logger.debug("redblack: removed %r (%s spliced)", value, y_orig_color)
        return path

    # ─────────────────────────────────────────────────────────────
    #  DELETE FIXUP  (CLRS RB-DELETE-FIXUP)
    #
    #  Case 1: sibling w RED                   → recolour, rotate parent
    #  Case 2: w BLACK, both nephews BLACK     → w RED, move x up
    #  Case 3: w BLACK, near RED, far BLACK    → rotate w (→ Case 4)
    #  Case 4: w BLACK, far nephew RED         → recolour, rotate parent
    # ─────────────────────────────────────────────────────────────

    def _delete_fixup(self, x, rec):
        while x is not self._root_node and x.color == BLACK:
            parent = x.parent
            if x is parent.left:
                w = parent.right
                if w.color == RED:
                    rec.record(StepKind.HIGHLIGHT, w.value,
                               f"Sibling {w.value} is red: rotate it above "
                               f"parent {parent.value}",
                               affected=[w.value, parent.value])
                    self._recolor(w, BLACK, rec, f"Sibling {w.value} → black")
                    self._recolor(parent, RED, rec,
                                  f"Parent {parent.value} → red")
                    self._rotate_left(parent, rec, RotationKind.RR)
                    w = parent.right

                if w.left.color == BLACK and w.right.color == BLACK:
                    self._recolor(w, RED, rec,
                                  f"Both children of sibling {w.value} are "
                                  f"black: sibling → red")
                    x = parent
                    rec.record(StepKind.HIGHLIGHT, x.value,
                               f"Move double black up to {x.value}",
                               affected=[x.value])
                    continue

                case = RotationKind.RR
                if w.right.color == BLACK:
                    case = RotationKind.RL
                    rec.record(StepKind.HIGHLIGHT, w.value,
                               f"Near child {w.left.value} of sibling "
                               f"{w.value} is red, far child black",
                               affected=[w.value, w.left.value])
                    self._recolor(w.left, BLACK, rec,
                                  f"Near child {w.left.value} → black")
                    self._recolor(w, RED, rec, f"Sibling {w.value} → red")
                    self._rotate_right(w, rec, case)
                    w = parent.right

                rec.record(StepKind.HIGHLIGHT, w.value,
                           f"Far child {w.right.value} of sibling {w.value} "
                           f"is red: recolor and rotate at {parent.value}",
                           affected=[w.value, w.right.value, parent.value])
                self._recolor(w, parent.color, rec,
                              f"Sibling {w.value} → {parent.color}")
                self._recolor(parent, BLACK, rec,
                              f"Parent {parent.value} → black")
                self._recolor(w.right, BLACK, rec,
                              f"Far child {w.right.value} → black")
                self._rotate_left(parent, rec, case)
                x = self._root_node

            else:
                # Mirror: x is a right child
                w = parent.left
                if w.color == RED:
                    rec.record(StepKind.HIGHLIGHT, w.value,
                               f"Sibling {w.value} is red: rotate it above "
                               f"parent {parent.value}",
                               affected=[w.value, parent.value])
                    self._recolor(w, BLACK, rec, f"Sibling {w.value} → black")
                    self._recolor(parent, RED, rec,
                                  f"Parent {parent.value} → red")
                    self._rotate_right(parent, rec, RotationKind.LL)
                    w = parent.left

                if w.right.color == BLACK and w.left.color == BLACK:
                    self._recolor(w, RED, rec,
                                  f"Both children of sibling {w.value} are "
                                  f"black: sibling → red")
                    x = parent
                    rec.record(StepKind.HIGHLIGHT, x.value,
                               f"Move double black up to {x.value}",
                               affected=[x.value])
                    continue

                case = RotationKind.LL
                if w.left.color == BLACK:
                    case = RotationKind.LR
                    rec.record(StepKind.HIGHLIGHT, w.value,
                               f"Near child {w.right.value} of sibling "
                               f"{w.value} is red, far child black",
                               affected=[w.value, w.right.value])
                    self._recolor(w.right, BLACK, rec,
                                  f"Near child {w.right.value} → black")
                    self._recolor(w, RED, rec, f"Sibling {w.value} → red")
                    self._rotate_left(w, rec, case)
                    w = parent.left

                rec.record(StepKind.HIGHLIGHT, w.value,
                           f"Far child {w.left.value} of sibling {w.value} "
                           f"is red: recolor and rotate at {parent.value}",
                           affected=[w.value, w.left.value, parent.value])
                self._recolor(w, parent.color, rec,
                              f"Sibling {w.value} → {parent.color}")
                self._recolor(parent, BLACK, rec,
                              f"Parent {parent.value} → black")
                self._recolor(w.left, BLACK, rec,
                              f"Far child {w.left.value} → black")
                self._rotate_right(parent, rec, case)
                x = self._root_node

        # ── Final: x is BLACK (never recolours the sentinel) ──
        if x.color != BLACK:
            self._recolor(x, BLACK, rec, f"{x.value} → black")
