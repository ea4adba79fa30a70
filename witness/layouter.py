"""Region-based witness assignment.

Circuit code never sees absolute rows. It asks the layouter for a region,
assigns cells at offsets inside it, and gets back AssignedCell handles that
can be copied into later regions or exposed as public inputs.

Regions are placed one after another in call order, each sized to the
largest offset it touched. When a region closes, every selector enabled in
it is checked against the rotations of the gates it controls: a gate must
not read outside the region it is enabled in.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from primitives.errors import MissingWitness, RotationOutOfRegion, SynthesisError
from primitives.value import Value
from constraints.base import Cell, Column, ColumnType, Selector
from constraints.system import ConstraintSystem
from witness.copy import CopyConstraintTracker, InstanceBinding
from witness.store import WitnessStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RegionInfo:
    """Where a region ended up in the table."""
    name: str
    start: int
    height: int

    def contains(self, row: int) -> bool:
        return self.start <= row < self.start + self.height


class AssignedCell:
    """Handle to an assigned cell and the value written to it.

    The witness store owns the value; this is a read-only reference used to
    pass values and cells between regions.
    """

    __slots__ = ("cell", "value")

    def __init__(self, cell: Cell, value: Value):
        self.cell = cell
        self.value = value

    @property
    def column(self) -> Column:
        return self.cell.column

    @property
    def row(self) -> int:
        return self.cell.row

    def copy_advice(self, region: "Region", column: Column, offset: int,
                    name: Optional[str] = None) -> "AssignedCell":
        """Assign this cell's value at ``offset`` of ``region`` and constrain the two equal."""
        copied = region.assign_advice(column, offset, self.value, name=name)
        region.constrain_equal(self, copied)
        return copied

    def __repr__(self):
        return f"AssignedCell({self.cell}, {self.value!r})"


CellLike = Union[AssignedCell, Cell]


def _cell_of(x: CellLike) -> Cell:
    return x.cell if isinstance(x, AssignedCell) else x


class Region:
    """Assignment API for one region; offsets are relative to its first row."""

    def __init__(self, layouter: "Layouter", name: str, start: int):
        self._layouter = layouter
        self.name = name
        self.start = start
        self._height = 0
        self._enabled: List[Tuple[Selector, int]] = []

    @property
    def height(self) -> int:
        return self._height

    def assign_advice(self, column: Column, offset: int, value,
                      name: Optional[str] = None) -> AssignedCell:
        """Assign an advice cell.

        ``value`` may be a Value, an int or field element, None (unknown) or
        a zero-argument callable returning one of these. An unknown value
        raises MissingWitness: a witness cannot be left blank.
        """
        if column.kind is not ColumnType.ADVICE:
            raise SynthesisError(f"{column} is not an advice column")
        return self._assign(column, offset, value, name)

    def assign_fixed(self, column: Column, offset: int, value,
                     name: Optional[str] = None) -> AssignedCell:
        if column.kind is not ColumnType.FIXED:
            raise SynthesisError(f"{column} is not a fixed column")
        return self._assign(column, offset, value, name)

    def assign_advice_from_instance(self, instance: Column, row: int,
                                    advice: Column, offset: int,
                                    name: Optional[str] = None) -> AssignedCell:
        """Copy public input ``row`` of ``instance`` into an advice cell."""
        store = self._layouter.store
        source = Cell(instance, row)
        assigned = self.assign_advice(advice, offset, store.read(instance, row),
                                      name=name or f"{instance}@{row}")
        self._layouter.copies.record(source, assigned.cell)
        return assigned

    def enable_selector(self, selector: Selector, offset: int) -> None:
        self._layouter.store.enable_selector(selector, self._absolute(offset))
        self._enabled.append((selector, offset))

    def constrain_equal(self, a: CellLike, b: CellLike) -> None:
        self._layouter.copies.record(_cell_of(a), _cell_of(b))

    # --- Internals ---

    def _absolute(self, offset: int) -> int:
        if offset < 0:
            raise SynthesisError(f"negative offset {offset} in region '{self.name}'")
        self._height = max(self._height, offset + 1)
        return self.start + offset

    def _assign(self, column, offset, value, name) -> AssignedCell:
        if callable(value):
            value = value()
        value = Value.lift(value, self._layouter.store.field)
        if not value.is_known():
            raise MissingWitness(f"{name or column} at offset {offset} of region '{self.name}'")
        row = self._absolute(offset)
        cell = self._layouter.store.assign(column, row, value.unwrap())
        return AssignedCell(cell, value)

    def _check_rotations(self, cs: ConstraintSystem) -> None:
        for selector, offset in self._enabled:
            for gate in cs.gates_for(selector):
                for rotation in gate.rotations():
                    if not 0 <= offset + rotation < self._height:
                        raise RotationOutOfRegion(gate.name, self.name, offset,
                                                  rotation, self._height)


class _Floor:
    """Row cursor and placed regions, shared by a layouter and its namespaces."""

    def __init__(self):
        self.cursor = 0
        self.regions: List[RegionInfo] = []
        self.active: Optional[str] = None


class Layouter:
    """Places regions sequentially and records cross-region constraints.

    Args:
        cs: Frozen constraint system
        store: Witness store receiving assignments
        copies: Tracker receiving copy constraints and instance bindings
        namespace: Labels prefixed to region names (diagnostics only)
    """

    def __init__(self, cs: ConstraintSystem, store: WitnessStore,
                 copies: CopyConstraintTracker, namespace: Tuple[str, ...] = (),
                 _floor: Optional[_Floor] = None):
        self.cs = cs
        self.store = store
        self.copies = copies
        self._namespace = namespace
        self._floor = _floor if _floor is not None else _Floor()

    @property
    def regions(self) -> List[RegionInfo]:
        return list(self._floor.regions)

    @property
    def next_row(self) -> int:
        return self._floor.cursor

    def assign_region(self, name: str, body: Callable[[Region], T]) -> T:
        """Run ``body`` on a fresh region placed after all earlier ones."""
        full_name = "/".join(self._namespace + (name,))
        if self._floor.active is not None:
            raise SynthesisError(
                f"cannot open region '{full_name}' inside open region '{self._floor.active}'"
            )
        region = Region(self, full_name, self._floor.cursor)
        self._floor.active = full_name
        try:
            result = body(region)
        finally:
            self._floor.active = None
        region._check_rotations(self.cs)
        info = RegionInfo(full_name, region.start, region.height)
        self._floor.regions.append(info)
        self._floor.cursor += region.height
        logger.debug("region '%s' at rows %d..%d", full_name, info.start,
                     info.start + info.height - 1)
        return result

    def constrain_instance(self, cell: CellLike, instance: Column, row: int) -> InstanceBinding:
        """Bind ``cell`` to public input ``row`` of ``instance``."""
        return self.copies.bind_instance(_cell_of(cell), instance, row)

    def constrain_equal(self, a: CellLike, b: CellLike) -> None:
        self.copies.record(_cell_of(a), _cell_of(b))

    def namespace(self, label: str, body: Optional[Callable[["Layouter"], T]] = None):
        """Label nested regions; placement is unaffected.

        Without ``body`` the namespaced layouter is returned, with it the
        result of ``body(namespaced_layouter)``.
        """
        logger.debug("entering namespace '%s'", label)
        child = Layouter(self.cs, self.store, self.copies,
                         self._namespace + (label,), self._floor)
        if body is None:
            return child
        return body(child)

    def region_at(self, row: int) -> Optional[RegionInfo]:
        return region_at(self._floor.regions, row)


def region_at(regions: Sequence[RegionInfo], row: int) -> Optional[RegionInfo]:
    """The region containing absolute ``row``, if any."""
    for info in regions:
        if info.contains(row):
            return info
    return None
