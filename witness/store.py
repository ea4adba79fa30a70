"""Witness storage.

The store keeps one galois field array per column, a parallel numpy mask
recording which cells have been assigned and one boolean array per
selector. Rows are absolute; the layouter is responsible for translating
region offsets.
"""

import logging
from typing import Dict, Iterable, List, Sequence

import numpy as np

from primitives.errors import (
    CellAlreadyAssigned,
    ConfigurationError,
    NotEnoughRowsAvailable,
    SynthesisError,
)
from primitives.field import FieldLike, to_field
from primitives.value import Value
from constraints.base import Cell, Column, ColumnType, Selector
from constraints.system import ConstraintSystem

logger = logging.getLogger(__name__)


class WitnessStore:
    """Per-cell witness values for one circuit instance.

    Args:
        cs: Constraint system fixing the number of columns and selectors
        n: Number of rows (2^k)
    """

    def __init__(self, cs: ConstraintSystem, n: int):
        self.field = cs.field
        self.n = n
        self._values: Dict[Column, np.ndarray] = {}
        self._assigned: Dict[Column, np.ndarray] = {}
        for kind in ColumnType:
            for column in cs.columns(kind):
                self._values[column] = self.field.Zeros(n)
                self._assigned[column] = np.zeros(n, dtype=bool)
        self._selectors: Dict[Selector, np.ndarray] = {
            s: np.zeros(n, dtype=bool) for s in cs.selectors()
        }
        self._frozen = False

    # --- Writes ---

    def assign(self, column: Column, row: int, value: FieldLike) -> Cell:
        """Store ``value`` at (column, row). Each cell can be written once."""
        self._check_writable()
        self._check_row(row)
        assigned = self._column_mask(column)
        cell = Cell(column, row)
        if assigned[row]:
            raise CellAlreadyAssigned(cell)
        self._values[column][row] = to_field(value, self.field)
        assigned[row] = True
        return cell

    def enable_selector(self, selector: Selector, row: int) -> None:
        self._check_writable()
        self._check_row(row)
        if selector not in self._selectors:
            raise ConfigurationError(f"{selector} has not been declared")
        self._selectors[selector][row] = True

    def load_instance(self, column: Column, values: Sequence[FieldLike]) -> None:
        """Fill an instance column from public inputs.

        Rows past the end of ``values`` are padded with zero, as a prover
        pads instance polynomials.
        """
        if column.kind is not ColumnType.INSTANCE:
            raise ConfigurationError(f"{column} is not an instance column")
        if len(values) > self.n:
            raise ConfigurationError(
                f"{len(values)} public inputs do not fit in {self.n} rows of {column}"
            )
        for row in range(self.n):
            self.assign(column, row, values[row] if row < len(values) else 0)

    def freeze(self, referenced: Iterable[Cell] = ()) -> List[Cell]:
        """Make the store read-only.

        Returns the cells in ``referenced`` that were never assigned. Such a
        cell makes any gate or copy constraint that touches it fail.
        """
        self._frozen = True
        dangling = sorted(
            {cell for cell in referenced if not self.is_assigned(cell.column, cell.row)},
            key=Cell.sort_key,
        )
        for cell in dangling:
            logger.warning("referenced cell %s is unassigned", cell)
        return dangling

    # --- Reads ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def read(self, column: Column, row: int) -> Value:
        """Value at (column, row); unknown if unassigned or out of range."""
        if not 0 <= row < self.n or not self._column_mask(column)[row]:
            return Value.unknown()
        return Value(self._values[column][row])

    def is_assigned(self, column: Column, row: int) -> bool:
        return 0 <= row < self.n and bool(self._column_mask(column)[row])

    def is_selector_enabled(self, selector: Selector, row: int) -> bool:
        return 0 <= row < self.n and bool(self._selectors[selector][row])

    def enabled_rows(self, selector: Selector) -> List[int]:
        return [int(r) for r in np.flatnonzero(self._selectors[selector])]

    def column_values(self, column: Column) -> np.ndarray:
        """Copy of the column as a field array (unassigned cells read 0)."""
        self._column_mask(column)
        return self._values[column].copy()

    def selector_values(self, selector: Selector) -> np.ndarray:
        return self._selectors[selector].copy()

    def assigned_count(self) -> int:
        return int(sum(mask.sum() for mask in self._assigned.values()))

    # --- Checks ---

    def _column_mask(self, column: Column) -> np.ndarray:
        try:
            return self._assigned[column]
        except KeyError:
            raise ConfigurationError(f"{column} has not been declared") from None

    def _check_row(self, row: int):
        if not 0 <= row < self.n:
            raise NotEnoughRowsAvailable(row, self.n)

    def _check_writable(self):
        if self._frozen:
            raise SynthesisError("witness store is frozen")
