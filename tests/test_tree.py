"""Behaviour shared by both engines (run once per tree kind)."""

import pytest

from treeviz import (AVLTree, FindResult, OperationResult, RedBlackTree,
                     Settings, StepKind, make_tree)

from tests.helpers import build, shape


VALUES = [50, 30, 70, 20, 40, 60, 80, 35, 45, 65]


def test_make_tree_kinds_and_aliases():
    assert isinstance(make_tree("avl"), AVLTree)
    for alias in ("redblack", "rb", "Red-Black", " red_black "):
        assert isinstance(make_tree(alias), RedBlackTree)
    with pytest.raises(ValueError, match="unknown tree kind"):
        make_tree("splay")


def test_new_tree_is_empty(kind):
    tree = make_tree(kind)
    assert len(tree) == 0
    assert not tree
    assert tree.root_value is None
    assert tree.height == 0
    assert tree.snapshot_for_rendering() == []
    assert tree.traverse("inorder") == []


def test_values_argument_inserts_in_order(kind):
    tree = make_tree(kind, values=VALUES)
    assert len(tree) == len(VALUES)
    assert list(tree) == sorted(VALUES)


def test_inorder_is_sorted_and_levelorder_starts_at_root(kind):
    tree = build(kind, VALUES)
    assert tree.traverse("inorder") == sorted(VALUES)
    assert tree.traverse("LevelOrder")[0] == tree.root_value
    for order in ("preorder", "postorder", "levelorder"):
        assert sorted(tree.traverse(order)) == sorted(VALUES)


def test_unknown_traversal_kind(kind):
    with pytest.raises(ValueError, match="unknown traversal kind"):
        build(kind, [1]).traverse("zigzag")


def test_result_types(kind):
    tree = make_tree(kind)
    assert isinstance(tree.insert(1), OperationResult)
    assert isinstance(tree.delete(1), OperationResult)
    assert isinstance(tree.find(1), FindResult)


def test_untraced_calls_have_no_steps(kind):
    tree = build(kind, VALUES)
    assert tree.insert(10).steps is None
    assert tree.find(10).steps is None
    assert tree.delete(10).steps is None


def test_traced_and_untraced_runs_build_the_same_tree(kind):
    plain = make_tree(kind)
    traced = make_tree(kind)
    for v in VALUES:
        plain.insert(v)
        traced.insert(v, trace=True)
    for v in (30, 65, 50):
        plain.delete(v)
        traced.delete(v, trace=True)
    assert shape(plain) == shape(traced)


def test_every_traced_operation_ends_with_its_outcome(kind):
    tree = build(kind, VALUES)
    steps = tree.insert(33, trace=True).steps
    assert steps[-1].kind is StepKind.UPDATE
    assert steps[-1].message == "Node 33 inserted successfully"

    steps = tree.delete(70, trace=True).steps
    assert steps[-1].message == "Node 70 deleted successfully"
    assert steps[0].kind is StepKind.COMPARISON


def test_trace_begins_with_root_comparison(kind):
    tree = build(kind, VALUES)
    first = tree.insert(33, trace=True).steps[0]
    assert first.kind is StepKind.COMPARISON
    assert first.value == tree.root_value
    assert first.target_value == 33
    assert first.message == f"Comparing 33 with {tree.root_value}"


def test_find_on_empty_tree(kind):
    result = make_tree(kind).find(5, trace=True)
    assert not result
    assert result.message == "Tree is empty"
    assert result.path == []
    assert len(result.steps) == 1


def test_find_messages(kind):
    tree = build(kind, VALUES)
    assert tree.find(45).message == "Found node 45"
    missing = tree.find(46, trace=True)
    assert missing.message == "Node 46 not found"
    assert missing.steps[-1].message == "Search complete: Node 46 not found"


def test_find_path_ends_at_value(kind):
    tree = build(kind, VALUES)
    for v in VALUES:
        result = tree.find(v)
        assert result.found
        assert result.path[0] == tree.root_value
        assert result.path[-1] == v


def test_contains_and_iteration(kind):
    tree = build(kind, VALUES)
    assert 35 in tree
    assert 36 not in tree
    assert None not in tree
    assert list(tree) == sorted(VALUES)


def test_min_max(kind):
    tree = build(kind, VALUES)
    assert tree.min_value() == 20
    assert tree.max_value() == 80
    empty = make_tree(kind)
    with pytest.raises(ValueError):
        empty.min_value()
    with pytest.raises(ValueError):
        empty.max_value()


def test_clear_keeps_ids_increasing(kind):
    tree = build(kind, [1, 2, 3])
    old_ids = {n.id for n in tree.snapshot_for_rendering()}
    tree.clear()
    assert len(tree) == 0
    assert tree.root_value is None
    tree.insert(1)
    (node,) = tree.snapshot_for_rendering()
    assert node.id > max(old_ids)


def test_ids_are_never_reused(kind):
    tree = build(kind, [1, 2, 3])
    seen = {n.id for n in tree.snapshot_for_rendering()}
    tree.delete(2)
    tree.insert(2)
    new = {n.id for n in tree.snapshot_for_rendering()} - seen
    assert len(new) == 1
    assert new.pop() > max(seen)


def test_none_and_nan_are_rejected(kind):
    tree = make_tree(kind)
    with pytest.raises(TypeError):
        tree.insert(None)
    with pytest.raises(ValueError):
        tree.insert(float("nan"))
    with pytest.raises(TypeError):
        tree.find(None)
    assert len(tree) == 0


def test_extend_returns_results(kind):
    tree = make_tree(kind)
    results = tree.extend([3, 1, 3])
    assert [r.success for r in results] == [True, True, True]
    assert results[2].message == "Node 3 already exists"
    assert len(tree) == 2


def test_speed_scales_suggested_durations(kind, tmp_path):
    fast = Settings(path=str(tmp_path / "s.json"), load=False)
    fast.update(speed=2.0)
    slow = make_tree(kind)
    quick = make_tree(kind, settings=fast)

    a = slow.insert(5, trace=True).steps
    b = quick.insert(5, trace=True).steps
    assert [s.message for s in a] == [s.message for s in b]
    assert [s.suggested_duration_ms // 2 for s in a] == \
        [s.suggested_duration_ms for s in b]


def test_repr_lists_sorted_values(kind):
    tree = build(kind, [2, 1, 3])
    assert repr(tree).endswith("([1, 2, 3])")


def test_durations_come_from_settings(kind, tmp_path):
    class Doubling(Settings):
        def scaled_duration(self, ms):
            return ms * 2

    settings = Doubling(path=str(tmp_path / "s.json"), load=False)
    steps = make_tree(kind, settings=settings).insert(5, trace=True).steps
    assert steps[0].suggested_duration_ms == 1600
    assert all(s.suggested_duration_ms % 2 == 0 for s in steps)
