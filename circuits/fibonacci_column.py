"""One-column Fibonacci circuit.

    selector |     col
    ---------+--------------
       s     | a0
       s     | a1
       s     | a2 = a0 + a1
      ...    | ...
       -     | a(n-2)
       -     | a(n-1)

A single region of ``rows`` rows. The gate reads rotations 0, +1 and +2, so
its selector is enabled on every row except the last two. The last cell is
exposed as public input 0.
"""

from dataclasses import dataclass
from typing import Optional

from primitives.errors import ConfigurationError
from primitives.field import FieldLike
from primitives.value import Value
from constraints.base import Column, Rotation, Selector
from constraints.system import ConstraintSystem
from protocol.circuit import Circuit
from witness.layouter import AssignedCell, Layouter


@dataclass(frozen=True)
class FibonacciColumnConfig:
    advice: Column
    instance: Column
    selector: Selector


class FibonacciColumnChip:
    def __init__(self, config: FibonacciColumnConfig):
        self.config = config

    @staticmethod
    def configure(cs: ConstraintSystem, advice: Column, instance: Column) -> FibonacciColumnConfig:
        selector = cs.selector()
        cs.enable_equality(advice)
        cs.enable_equality(instance)

        def add_gate(meta):
            s = meta.query_selector(selector)
            a = meta.query_advice(advice, Rotation.cur())
            b = meta.query_advice(advice, Rotation.next())
            c = meta.query_advice(advice, Rotation(2))
            return s * (a + b - c)

        cs.create_gate("add", selector, add_gate)
        return FibonacciColumnConfig(advice, instance, selector)

    def assign(self, layouter: Layouter, a: Value, b: Value, rows: int,
               enabled_rows: Optional[int] = None) -> AssignedCell:
        """Fill ``rows`` rows; returns the last cell.

        ``enabled_rows`` overrides how many leading rows get the selector
        (default ``rows - 2``).
        """
        col = self.config.advice
        selector = self.config.selector
        if enabled_rows is None:
            enabled_rows = rows - 2

        def body(region):
            for row in range(enabled_rows):
                selector.enable(region, row)
            prev = region.assign_advice(col, 0, a, name="a")
            last = region.assign_advice(col, 1, b, name="b")
            for row in range(2, rows):
                prev, last = last, region.assign_advice(col, row, prev.value + last.value,
                                                        name="advice")
            return last

        return layouter.assign_region("fibonacci region", body)

    def expose_public(self, layouter: Layouter, cell: AssignedCell, row: int) -> None:
        layouter.constrain_instance(cell, self.config.instance, row)


class FibonacciColumnCircuit(Circuit):
    """Fibonacci down a single advice column.

    Args:
        a, b: The first two terms, or None when laying out without a witness
        rows: Number of terms, at least 3
        enabled_rows: Rows carrying the selector; defaults to ``rows - 2``
    """

    def __init__(self, a: Optional[FieldLike] = None, b: Optional[FieldLike] = None,
                 rows: int = 10, enabled_rows: Optional[int] = None):
        if rows < 3:
            raise ConfigurationError(f"need at least 3 rows, got {rows}")
        self.a = a
        self.b = b
        self.rows = rows
        self.enabled_rows = enabled_rows

    def without_witnesses(self) -> "FibonacciColumnCircuit":
        return FibonacciColumnCircuit(None, None, self.rows, self.enabled_rows)

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> FibonacciColumnConfig:
        advice = cs.advice_column()
        instance = cs.instance_column()
        return FibonacciColumnChip.configure(cs, advice, instance)

    def synthesize(self, config: FibonacciColumnConfig, layouter: Layouter) -> None:
        chip = FibonacciColumnChip(config)
        a = Value.lift(self.a, layouter.store.field)
        b = Value.lift(self.b, layouter.store.field)
        last = chip.assign(layouter.namespace("fibonacci table"), a, b, self.rows,
                           self.enabled_rows)
        chip.expose_public(layouter.namespace("out"), last, 0)
