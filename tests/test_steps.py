import dataclasses

import pytest

from treeviz.steps import (DEFAULT_DURATIONS, FindResult, NullRecorder,
                           OperationResult, RotationKind, Step, StepKind,
                           StepRecorder, make_recorder)


def test_recorder_applies_default_durations():
    rec = StepRecorder()
    for kind in StepKind:
        rec.record(kind, 1, kind.value)
    steps = rec.result()
    assert [s.suggested_duration_ms for s in steps] == \
        [DEFAULT_DURATIONS[k] for k in StepKind]
    assert DEFAULT_DURATIONS[StepKind.ROTATION] == 1000


def test_speed_divides_durations():
    rec = StepRecorder(speed=2.0)
    rec.record(StepKind.ROTATION, 1, "r")
    rec.record(StepKind.UPDATE, 1, "u", duration=600)
    assert [s.suggested_duration_ms for s in rec.result()] == [500, 300]


@pytest.mark.parametrize("speed", [0, -1.5])
def test_non_positive_speed_rejected(speed):
    with pytest.raises(ValueError):
        StepRecorder(speed=speed)


def test_recorder_copies_path_and_drops_absent_values():
    rec = StepRecorder()
    path = [5, 3]
    rec.record(StepKind.HIGHLIGHT, 3, "h", path=path, affected=[3, None])
    path.append(99)
    (step,) = rec.result()
    assert step.path == (5, 3)
    assert step.affected_nodes == (3,)
    assert len(rec) == 1


def test_steps_are_immutable():
    step = Step(StepKind.COMPARISON, 1, "Comparing 2 with 1", target_value=2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        step.message = "changed"


def test_step_to_dict_uses_camel_case():
    step = Step(StepKind.ROTATION, 10, "Left rotation at node 10",
                affected_nodes=(10, 20), rotation_kind=RotationKind.RR,
                suggested_duration_ms=1000)
    assert step.to_dict() == {
        "kind": "rotation",
        "value": 10,
        "targetValue": None,
        "message": "Left rotation at node 10",
        "path": None,
        "affectedNodes": [10, 20],
        "rotationKind": "RR",
        "suggestedDurationMs": 1000,
    }
    assert str(step).endswith("[RR]")


def test_null_recorder_drops_everything():
    rec = make_recorder(False)
    assert isinstance(rec, NullRecorder)
    assert not rec.enabled
    rec.record(StepKind.UPDATE, 1, "ignored")
    assert rec.result() is None
    assert isinstance(make_recorder(True, 3.0), StepRecorder)


def test_results_truthiness_and_dicts():
    ok = OperationResult(True, [1, 2], "Node 2 inserted successfully")
    assert ok
    assert ok.to_dict() == {"success": True, "path": [1, 2],
                            "message": "Node 2 inserted successfully",
                            "steps": None}
    miss = FindResult(False, [1], "Node 4 not found", ())
    assert not miss
    assert miss.to_dict()["steps"] == []


def test_scale_callable_replaces_speed_division():
    rec = make_recorder(True, scale=lambda ms: ms + 1)
    rec.record(StepKind.COMPARISON, 1, "c")
    rec.record(StepKind.UPDATE, 1, "u", duration=600)
    assert [s.suggested_duration_ms for s in rec.result()] == [801, 601]
