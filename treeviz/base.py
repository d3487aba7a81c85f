"""
The contract both engines expose.

``BalancedTree`` owns everything that does not depend on the balancing
scheme: argument checks, the find-before-delete guard, traced search,
traversals and the rendering snapshot.  Subclasses supply ``_insert`` and
``_delete`` plus a ``_present`` predicate telling real nodes from absent
children.
"""

import logging
import math

from treeviz import traversal
from treeviz.layout import DEFAULT_LAYOUT, layout_tree, tree_depth
from treeviz.node import IdCounter
from treeviz.steps import (FindResult, OperationResult, StepKind,
                           make_recorder)

logger = logging.getLogger(__name__)


class BalancedTree:
    """
    Base class for the AVL and Red-Black engines.

    Args:
        settings (Settings|None)   : Supplies the playback speed used for
                                     suggested step durations.
        layout   (LayoutConfig)    : Geometry for ``snapshot_for_rendering``.
        values   (iterable|None)   : Inserted in order, untraced.
    """

    kind = None

    def __init__(self, settings=None, layout=DEFAULT_LAYOUT, values=None):
        self.settings = settings
        self.layout   = layout
        self._ids     = IdCounter()
        self._size    = 0
        self._reset()
        if values is not None:
            self.extend(values)

    # ─────────────────────────────────────────────────────────────
    #  HOOKS
    # ─────────────────────────────────────────────────────────────
    def _reset(self):
        raise NotImplementedError

    @property
    def _root(self):
        raise NotImplementedError

    def _present(self, node):
        raise NotImplementedError

    def _insert(self, value, rec):
        """Return ``(success, path, message)``."""
        raise NotImplementedError

    def _delete(self, value, rec):
        """Remove a value known to be present; return the search path."""
        raise NotImplementedError

    # ─────────────────────────────────────────────────────────────
    #  HELPERS
    # ─────────────────────────────────────────────────────────────
    def _recorder(self, trace):
        if self.settings is not None:
            return make_recorder(trace, scale=self.settings.scaled_duration)
        return make_recorder(trace)

    @staticmethod
    def _check_value(value):
        if value is None:
            raise TypeError("tree values must be ordered scalars, got None")
        if isinstance(value, float) and math.isnan(value):
            raise ValueError("NaN cannot be stored in a search tree")

    def _locate(self, value):
        """Untraced search.  Return ``(node_or_None, path)``."""
        node, path = self._root, []
        while self._present(node):
            path.append(node.value)
            if value == node.value:
                return node, path
            node = node.left if value < node.value else node.right
        return None, path

    def _search(self, value, rec):
        """
        Traced search from the root.

        Records a comparison and a highlight for each visited node, and a
        final highlight when the walk falls off the tree.

        Returns:
            tuple[node|None, list[int]]: Matching node and visited values.
        """
        node, path = self._root, []
        while self._present(node):
            path.append(node.value)
            rec.record(StepKind.COMPARISON, node.value,
                       f"Comparing {value} with {node.value}",
                       target_value=value)
            if value == node.value:
                rec.record(StepKind.HIGHLIGHT, node.value,
                           f"Found node {value}!", path=path, duration=1000)
                return node, path
            if value < node.value:
                rec.record(StepKind.HIGHLIGHT, node.value,
                           f"{value} < {node.value}, searching in left subtree",
                           path=path)
                node = node.left
            else:
                rec.record(StepKind.HIGHLIGHT, node.value,
                           f"{value} > {node.value}, searching in right subtree",
                           path=path)
                node = node.right
        rec.record(StepKind.HIGHLIGHT, value,
                   f"Search complete: Node {value} not found")
        return None, path

    # ─────────────────────────────────────────────────────────────
    #  PUBLIC OPERATIONS
    # ─────────────────────────────────────────────────────────────
    def insert(self, value, trace=False):
        """
        Insert *value*.  Inserting a value that is already present is a
        no-op reported as success with an explanatory message.

        Args:
            value (int)  : Value to insert.
            trace (bool) : Collect a step trace.

        Returns:
            OperationResult
        """
        self._check_value(value)
        rec = self._recorder(trace)
        success, path, message = self._insert(value, rec)
        logger.debug("%s insert %r: %s", self.kind, value, message)
        return OperationResult(success, path, message, rec.result())

    def delete(self, value, trace=False):
        """
        Delete *value*.  Deleting an absent value (or from an empty tree)
        fails without touching the tree.

        Returns:
            OperationResult
        """
        self._check_value(value)
        rec = self._recorder(trace)
        if not self._present(self._root):
            rec.record(StepKind.HIGHLIGHT, value,
                       "Tree is empty, nothing to delete")
            logger.debug("%s delete %r: empty tree", self.kind, value)
            return OperationResult(False, [], "Tree is empty", rec.result())

        node, _ = self._locate(value)
        if node is None:
            _, path = self._search(value, rec)
            rec.record(StepKind.HIGHLIGHT, value,
                       f"Node {value} not found for deletion")
            logger.debug("%s delete %r: not found", self.kind, value)
            return OperationResult(False, path, f"Node {value} not found",
                                   rec.result())

        path = self._delete(value, rec)
        self._size -= 1
        message = f"Node {value} deleted successfully"
        rec.record(StepKind.UPDATE, value, message, duration=800)
        logger.debug("%s delete %r: ok (%d left)", self.kind, value,
                     self._size)
        return OperationResult(True, path, message, rec.result())

    def find(self, value, trace=False):
        """
        Look *value* up.

        Returns:
            FindResult: ``path`` lists every value visited, ending at
            *value* when found.
        """
        self._check_value(value)
        rec = self._recorder(trace)
        if not self._present(self._root):
            rec.record(StepKind.HIGHLIGHT, value, "Tree is empty")
            return FindResult(False, [], "Tree is empty", rec.result())
        node, path = self._search(value, rec)
        if node is None:
            return FindResult(False, path, f"Node {value} not found",
                              rec.result())
        return FindResult(True, path, f"Found node {value}", rec.result())

    def traverse(self, kind):
        """
        Values in *kind* order (``"inorder"``, ``"preorder"``,
        ``"postorder"`` or ``"levelorder"``).
        """
        return traversal.traverse(self._root, kind, self._present)

    def snapshot_for_rendering(self):
        """Fresh, positioned render graph (see ``treeviz.layout``)."""
        return layout_tree(self._root, self._present, self.layout)

    # ─────────────────────────────────────────────────────────────
    #  CONVENIENCE
    # ─────────────────────────────────────────────────────────────
    def extend(self, values, trace=False):
        """Insert every value in order; return the list of results."""
        return [self.insert(v, trace) for v in values]

    def clear(self):
        """Drop every node.  Node ids keep increasing afterwards."""
        self._reset()
        self._size = 0

    @property
    def root_value(self):
        root = self._root
        return root.value if self._present(root) else None

    @property
    def height(self):
        """Number of levels (0 for an empty tree)."""
        return tree_depth(self._root, self._present)

    def min_value(self):
        """Smallest stored value.  Raises ``ValueError`` when empty."""
        node = self._root
        if not self._present(node):
            raise ValueError("tree is empty")
        while self._present(node.left):
            node = node.left
        return node.value

    def max_value(self):
        """Largest stored value.  Raises ``ValueError`` when empty."""
        node = self._root
        if not self._present(node):
            raise ValueError("tree is empty")
        while self._present(node.right):
            node = node.right
        return node.value

    def __len__(self):
        return self._size

    def __bool__(self):
        return self._size > 0

    def __contains__(self, value):
        if value is None:
            return False
        return self._locate(value)[0] is not None

    def __iter__(self):
        return iter(traversal.inorder(self._root, self._present))

    def __repr__(self):
        return f"{type(self).__name__}({traversal.inorder(self._root, self._present)!r})"
