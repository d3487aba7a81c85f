"""
steps.py
--------

The step-trace protocol.

Every traced engine call yields a flat, append-only sequence of ``Step``
records in strict execution order.  A consumer replays them by moving an
index over the finished sequence (see ``treeviz.player``); nothing ever calls
back into the tree during replay.

Tracing is injected, not branched on: the engines write every event to a
recorder.  ``StepRecorder`` keeps the events, ``NullRecorder`` drops them, so
the algorithms are written once and an untraced call pays nothing but the
method dispatch.

Step dict schema (``Step.to_dict()``)
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    { "kind"                : "comparison" | "highlight" | "rotation" | "update",
      "value"               : int,
      "targetValue"         : int?,
      "message"             : str,
      "path"                : [int]?,
      "affectedNodes"       : [int]?,
      "rotationKind"        : "LL" | "RR" | "LR" | "RL" | None,
      "suggestedDurationMs" : int? }
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


class StepKind(str, enum.Enum):
    COMPARISON = "comparison"
    HIGHLIGHT  = "highlight"
    ROTATION   = "rotation"
    UPDATE     = "update"


class RotationKind(str, enum.Enum):
    """Rebalancing case a rotation serves (named after the heavy path)."""
    LL = "LL"
    RR = "RR"
    LR = "LR"
    RL = "RL"


# Base display time per kind, in milliseconds at speed 1.0.
DEFAULT_DURATIONS = {
    StepKind.COMPARISON: 800,
    StepKind.HIGHLIGHT:  800,
    StepKind.ROTATION:   1000,
    StepKind.UPDATE:     500,
}


@dataclass(frozen=True)
class Step:
    """One algorithm micro-event.  Immutable once recorded."""

    kind: StepKind
    value: Optional[int]
    message: str
    target_value: Optional[int] = None
    path: Optional[Tuple[int, ...]] = None
    affected_nodes: Optional[Tuple[int, ...]] = None
    rotation_kind: Optional[RotationKind] = None
    suggested_duration_ms: Optional[int] = None

    def to_dict(self):
        return {
            "kind": self.kind.value,
            "value": self.value,
            "targetValue": self.target_value,
            "message": self.message,
            "path": list(self.path) if self.path is not None else None,
            "affectedNodes": (list(self.affected_nodes)
                              if self.affected_nodes is not None else None),
            "rotationKind": (self.rotation_kind.value
                             if self.rotation_kind is not None else None),
            "suggestedDurationMs": self.suggested_duration_ms,
        }

    def __str__(self):
        tag = f" [{self.rotation_kind.value}]" if self.rotation_kind else ""
        return f"{self.kind.value:<10} {self.message}{tag}"


# ═════════════════════════════════════════════════════════════════
#  RECORDERS
# ═════════════════════════════════════════════════════════════════
class NullRecorder:
    """Recorder used when tracing is off.  Every call is a no-op."""

    enabled = False

    def record(self, kind, value, message, *, target_value=None, path=None,
               affected=None, rotation_kind=None, duration=None):
        pass

    def result(self):
        return None


class StepRecorder:
    """
    Append-only step sink.

    Args:
        speed (float)          : Playback multiplier applied to every
                                 suggested duration (2.0 halves them).
                                 Must be > 0.
        scale (callable|None)  : Maps a base duration (ms) to the suggested
                                 one, e.g. ``Settings.scaled_duration``.
                                 Replaces the *speed* division when given.
    """

    enabled = True

    def __init__(self, speed=1.0, scale=None):
        if speed <= 0:
            raise ValueError(f"speed must be positive, got {speed!r}")
        self.speed  = speed
        self._scale = scale
        self._steps: List[Step] = []

    def record(self, kind, value, message, *, target_value=None, path=None,
               affected=None, rotation_kind=None, duration=None):
        """
        Append one step.

        Args:
            kind          (StepKind)       : Event category.
            value         (int|None)       : Primary value involved.
            message       (str)            : Human-readable explanation.
            target_value  (int|None)       : Value being searched/inserted.
            path          (Sequence|None)  : Visited values; copied here.
            affected      (Sequence|None)  : Structurally affected values.
            rotation_kind (RotationKind?)  : Case tag for rotation steps.
            duration      (int|None)       : Base duration override (ms).
        """
        base = duration if duration is not None else DEFAULT_DURATIONS[kind]
        self._steps.append(Step(
            kind=kind,
            value=value,
            message=message,
            target_value=target_value,
            path=tuple(path) if path is not None else None,
            affected_nodes=(tuple(v for v in affected if v is not None)
                            if affected is not None else None),
            rotation_kind=rotation_kind,
            suggested_duration_ms=self._scaled(base),
        ))

    def _scaled(self, base):
        if self._scale is not None:
            return self._scale(base)
        return int(base / self.speed)

    def __len__(self):
        return len(self._steps)

    def result(self) -> Tuple[Step, ...]:
        return tuple(self._steps)


def make_recorder(trace, speed=1.0, scale=None):
    return StepRecorder(speed, scale) if trace else NullRecorder()


# ═════════════════════════════════════════════════════════════════
#  OPERATION RESULTS
# ═════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class OperationResult:
    """Outcome of ``insert`` / ``delete``.  ``steps`` is None when untraced."""

    success: bool
    path: List[int] = field(default_factory=list)
    message: Optional[str] = None
    steps: Optional[Sequence[Step]] = None

    def __bool__(self):
        return self.success

    def to_dict(self):
        return {
            "success": self.success,
            "path": list(self.path),
            "message": self.message,
            "steps": ([s.to_dict() for s in self.steps]
                      if self.steps is not None else None),
        }


@dataclass(frozen=True)
class FindResult:
    """Outcome of ``find``."""

    found: bool
    path: List[int] = field(default_factory=list)
    message: Optional[str] = None
    steps: Optional[Sequence[Step]] = None

    def __bool__(self):
        return self.found

    def to_dict(self):
        return {
            "found": self.found,
            "path": list(self.path),
            "message": self.message,
            "steps": ([s.to_dict() for s in self.steps]
                      if self.steps is not None else None),
        }
