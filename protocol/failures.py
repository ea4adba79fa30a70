"""Reasons a witness is rejected.

The checker never stops at the first problem; it returns one record per
failing constraint so tests and callers can assert on exactly what broke.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from constraints.base import Cell, Column


class GateFailureReason(Enum):
    NONZERO = "nonzero"
    INCOMPLETE = "incomplete"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class VerifyFailure:
    """Base class for checker failures."""


@dataclass(frozen=True)
class GateUnsatisfied(VerifyFailure):
    """Polynomial ``index`` of gate ``gate`` does not hold at ``row``.

    ``reason`` tells whether the polynomial evaluated to a nonzero value,
    read an unassigned cell, or read a row outside the table. ``region`` and
    ``offset`` locate the row when it belongs to a laid-out region.
    """
    gate: str
    index: int
    row: int
    reason: GateFailureReason
    region: Optional[str] = None
    offset: Optional[int] = None

    def __str__(self):
        where = f"row {self.row}"
        if self.region is not None:
            where += f" (region '{self.region}', offset {self.offset})"
        return f"gate '{self.gate}' constraint {self.index} unsatisfied at {where}: {self.reason.value}"


@dataclass(frozen=True)
class CopyConstraintUnsatisfied(VerifyFailure):
    """An equivalence class of copy-constrained cells is not all equal."""
    cells: Tuple[Cell, ...]
    unassigned: Tuple[Cell, ...] = ()

    def __str__(self):
        msg = "copy constraint unsatisfied among " + ", ".join(str(c) for c in self.cells)
        if self.unassigned:
            msg += " (unassigned: " + ", ".join(str(c) for c in self.unassigned) + ")"
        return msg


@dataclass(frozen=True)
class PublicInputMismatch(VerifyFailure):
    """A bound cell does not match public input ``index`` of ``column``.

    ``expected`` is None when the index lies outside the supplied vector,
    ``actual`` is None when the bound cell is unassigned.
    """
    index: int
    column: Optional[Column] = None
    cell: Optional[Cell] = None
    expected: Optional[int] = None
    actual: Optional[int] = None

    def __str__(self):
        expected = "missing" if self.expected is None else self.expected
        actual = "unassigned" if self.actual is None else self.actual
        return (f"public input {self.index} of {self.column} mismatch at {self.cell}: "
                f"expected {expected}, got {actual}")
