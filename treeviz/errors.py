"""
Exception hierarchy.

Domain outcomes (value not found, duplicate insert, empty tree) are never
raised: the engines report them through ``OperationResult`` / ``FindResult``.
The classes below are for programming errors only.
"""


class TreeError(Exception):
    """Base class for every error raised by treeviz."""


class InvariantViolation(TreeError):
    """
    A tree no longer satisfies its structural invariants.

    Attributes:
        violations (list[str]): Every problem found, in discovery order.
    """

    def __init__(self, violations):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations) or "invariant violated")
