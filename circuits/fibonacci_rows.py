"""Three-column Fibonacci circuit.

    selector | col_a | col_b | col_c
    ---------+-------+-------+-------
       s     |  a0   |  b0   |  c0 = a0 + b0
       s     |  a1   |  b1   |  c1 = a1 + b1
      ...

Each row is its own region. The next row takes (b, c) of the previous row
as its (a, b). The link between rows can be made two ways:

* value reuse (default): the previous AssignedCell values are assigned
  again; nothing ties the new cells to the old ones;
* copy constraints: ``AssignedCell.copy_advice`` assigns the value and
  records a copy constraint, so the checker enforces the link.

The final c is exposed as public input 0.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from primitives.errors import ConfigurationError
from primitives.field import FieldLike
from primitives.value import Value
from constraints.base import Column, Rotation, Selector
from constraints.system import ConstraintSystem
from protocol.circuit import Circuit
from witness.layouter import AssignedCell, Layouter


@dataclass(frozen=True)
class FibonacciRowsConfig:
    advice: Tuple[Column, Column, Column]
    instance: Column
    selector: Selector


class FibonacciRowsChip:
    def __init__(self, config: FibonacciRowsConfig):
        self.config = config

    @staticmethod
    def configure(cs: ConstraintSystem, advice: Tuple[Column, Column, Column],
                  instance: Column) -> FibonacciRowsConfig:
        col_a, col_b, col_c = advice
        selector = cs.selector()

        # Copies between rows and into the instance column
        for column in (col_a, col_b, col_c, instance):
            cs.enable_equality(column)

        def add_gate(meta):
            s = meta.query_selector(selector)
            a = meta.query_advice(col_a, Rotation.cur())
            b = meta.query_advice(col_b, Rotation.cur())
            c = meta.query_advice(col_c, Rotation.cur())
            return s * (a + b - c)

        cs.create_gate("add", selector, add_gate)
        return FibonacciRowsConfig(advice, instance, selector)

    def assign_first_row(self, layouter: Layouter, a: Value,
                         b: Value) -> Tuple[AssignedCell, AssignedCell]:
        """Assign a, b and a + b; returns the (b, c) cells."""
        col_a, col_b, col_c = self.config.advice

        def body(region):
            self.config.selector.enable(region, 0)
            region.assign_advice(col_a, 0, a, name="a")
            b_cell = region.assign_advice(col_b, 0, b, name="b")
            c_cell = region.assign_advice(col_c, 0, a + b, name="c")
            return b_cell, c_cell

        return layouter.assign_region("row", body)

    def assign_row(self, layouter: Layouter, prev_b: AssignedCell, prev_c: AssignedCell,
                   use_copy_constraints: bool) -> Tuple[AssignedCell, AssignedCell]:
        """Assign (prev_b, prev_c, prev_b + prev_c); returns the new (b, c) cells."""
        col_a, col_b, col_c = self.config.advice

        def body(region):
            self.config.selector.enable(region, 0)
            if use_copy_constraints:
                prev_b.copy_advice(region, col_a, 0, name="a")
                b_cell = prev_c.copy_advice(region, col_b, 0, name="b")
            else:
                region.assign_advice(col_a, 0, prev_b.value, name="a")
                b_cell = region.assign_advice(col_b, 0, prev_c.value, name="b")
            c_cell = region.assign_advice(col_c, 0, prev_b.value + prev_c.value, name="c")
            return b_cell, c_cell

        return layouter.assign_region("row", body)

    def expose_public(self, layouter: Layouter, cell: AssignedCell, row: int) -> None:
        layouter.constrain_instance(cell, self.config.instance, row)


class FibonacciRowsCircuit(Circuit):
    """Fibonacci over three advice columns, one addition per row.

    Args:
        a, b: The first two terms, or None when laying out without a witness
        steps: Number of additions (rows)
        use_copy_constraints: Link rows with copy constraints instead of
            reusing values
    """

    def __init__(self, a: Optional[FieldLike] = None, b: Optional[FieldLike] = None,
                 steps: int = 8, use_copy_constraints: bool = False):
        if steps < 1:
            raise ConfigurationError(f"need at least 1 step, got {steps}")
        self.a = a
        self.b = b
        self.steps = steps
        self.use_copy_constraints = use_copy_constraints

    def without_witnesses(self) -> "FibonacciRowsCircuit":
        return FibonacciRowsCircuit(None, None, self.steps, self.use_copy_constraints)

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> FibonacciRowsConfig:
        advice = (cs.advice_column(), cs.advice_column(), cs.advice_column())
        instance = cs.instance_column()
        return FibonacciRowsChip.configure(cs, advice, instance)

    def synthesize(self, config: FibonacciRowsConfig, layouter: Layouter) -> None:
        chip = FibonacciRowsChip(config)
        a = Value.lift(self.a, layouter.store.field)
        b = Value.lift(self.b, layouter.store.field)

        prev_b, prev_c = chip.assign_first_row(layouter.namespace("first row"), a, b)
        for _ in range(self.steps - 1):
            prev_b, prev_c = chip.assign_row(layouter.namespace("next row"), prev_b, prev_c,
                                             self.use_copy_constraints)

        chip.expose_public(layouter.namespace("out"), prev_c, 0)
