"""Copy constraints and public input bindings.

Copy constraints are kept in a union-find so that equality is transitive:
recording (a, b) and (b, c) puts a, b and c in one class, and the checker
compares every class as a whole. A permutation argument in a real prover
works on the same classes, not on the recorded pairs.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from primitives.errors import ConfigurationError
from constraints.base import Cell, Column, ColumnType
from constraints.system import ConstraintSystem


@dataclass(frozen=True)
class InstanceBinding:
    """``cell`` must equal public input ``row`` of instance column ``column``."""
    cell: Cell
    column: Column
    row: int


class CopyConstraintTracker:
    """Equivalence classes of cells that must hold equal values."""

    def __init__(self, cs: ConstraintSystem):
        self._cs = cs
        self._parent: Dict[Cell, Cell] = {}
        self._rank: Dict[Cell, int] = {}
        self.pairs: List[Tuple[Cell, Cell]] = []
        self.bindings: List[InstanceBinding] = []

    # --- Recording ---

    def record(self, a: Cell, b: Cell) -> None:
        """Record that cells ``a`` and ``b`` hold the same value."""
        for cell in (a, b):
            if not self._cs.is_equality_enabled(cell.column):
                raise ConfigurationError(
                    f"{cell.column} is not equality-enabled; cannot copy-constrain {cell}"
                )
        self.pairs.append((a, b))
        self._union(a, b)

    def bind_instance(self, cell: Cell, column: Column, row: int) -> InstanceBinding:
        """Bind ``cell`` to public input ``row`` of instance column ``column``."""
        if column.kind is not ColumnType.INSTANCE:
            raise ConfigurationError(f"{column} is not an instance column")
        for col in (cell.column, column):
            if not self._cs.is_equality_enabled(col):
                raise ConfigurationError(f"{col} is not equality-enabled")
        binding = InstanceBinding(cell, column, row)
        self.bindings.append(binding)
        return binding

    # --- Queries ---

    def cells(self) -> List[Cell]:
        return sorted(self._parent, key=Cell.sort_key)

    def are_equal(self, a: Cell, b: Cell) -> bool:
        if a == b:
            return True
        if a not in self._parent or b not in self._parent:
            return False
        return self._find(a) == self._find(b)

    def equivalence_classes(self) -> List[List[Cell]]:
        """Every class of two or more cells, each sorted, ordered by first cell."""
        classes: Dict[Cell, List[Cell]] = {}
        for cell in self._parent:
            classes.setdefault(self._find(cell), []).append(cell)
        result = [sorted(members, key=Cell.sort_key) for members in classes.values()]
        result = [members for members in result if len(members) > 1]
        return sorted(result, key=lambda members: members[0].sort_key())

    # --- Union-find ---

    def _find(self, cell: Cell) -> Cell:
        root = cell
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while self._parent[cell] != root:
            self._parent[cell], cell = root, self._parent[cell]
        return root

    def _union(self, a: Cell, b: Cell) -> None:
        for cell in (a, b):
            if cell not in self._parent:
                self._parent[cell] = cell
                self._rank[cell] = 0
        ra, rb = self._find(a), self._find(b)
        if ra == rb:
            return
        if self._rank[ra] < self._rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1
