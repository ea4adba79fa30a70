"""Satisfiability checking without cryptography.

The mock prover runs the same configure/synthesize sequence a real prover
would, then checks the resulting witness directly:

1. Gates - every polynomial of every gate, at every row where the gate's
   selector is enabled, must evaluate to zero. Queries outside the table or
   onto unassigned cells fail the row.
2. Copy constraints - every equivalence class must hold one value, with no
   unassigned members.
3. Public inputs - every bound cell must equal its public input.

All failures are collected; an empty list means the witness is accepted.
A witness accepted here is exactly one a real prover could turn into a
valid proof for the same circuit and public inputs.
"""

import logging
from typing import List, Optional, Sequence, Set

from primitives.errors import ConfigurationError, SynthesisError
from primitives.field import FF, FieldLike, is_zero, to_field
from primitives.value import Value
from constraints.base import Cell, Column, ColumnType, ConstraintContext, Selector
from constraints.system import ConstraintSystem
from witness.copy import CopyConstraintTracker
from witness.layouter import Layouter, RegionInfo, region_at
from witness.store import WitnessStore
from protocol.circuit import Circuit
from protocol.config import ProverConfig
from protocol.data import CircuitData
from protocol.failures import (
    CopyConstraintUnsatisfied,
    GateFailureReason,
    GateUnsatisfied,
    PublicInputMismatch,
    VerifyFailure,
)

logger = logging.getLogger(__name__)

Instance = Sequence[Sequence[FieldLike]]


class RowContext(ConstraintContext):
    """Evaluates an expression at one row of a witness store."""

    def __init__(self, store: WitnessStore, row: int):
        self._store = store
        self._row = row

    def constant(self, value) -> Value:
        return Value.known(value, self._store.field)

    def selector(self, selector: Selector) -> Value:
        return Value.known(int(self._store.is_selector_enabled(selector, self._row)),
                           self._store.field)

    def query(self, column: Column, rotation: int) -> Value:
        return self._store.read(column, self._row + rotation)


# --- Checks ---

def check(
    cs: ConstraintSystem,
    store: WitnessStore,
    copies: CopyConstraintTracker,
    instance: Instance,
    regions: Sequence[RegionInfo] = (),
) -> List[VerifyFailure]:
    """Check a frozen witness; returns every failure found (empty = accept)."""
    if not store.frozen:
        raise SynthesisError("witness store must be frozen before checking")
    failures: List[VerifyFailure] = []
    failures.extend(check_gates(cs, store, regions))
    failures.extend(check_copy_constraints(store, copies))
    failures.extend(check_public_inputs(store, copies, instance))
    return failures


def check_gates(cs: ConstraintSystem, store: WitnessStore,
                regions: Sequence[RegionInfo] = ()) -> List[GateUnsatisfied]:
    failures = []
    for gate in cs.gates:
        for row in store.enabled_rows(gate.selector):
            ctx = RowContext(store, row)
            region = region_at(regions, row)
            for index, poly in enumerate(gate.polynomials):
                reason = None
                if any(not 0 <= row + rotation < store.n for _, rotation in poly.queries()):
                    reason = GateFailureReason.OUT_OF_RANGE
                else:
                    result = poly.evaluate(ctx)
                    if not result.is_known():
                        reason = GateFailureReason.INCOMPLETE
                    elif not is_zero(result.unwrap()):
                        reason = GateFailureReason.NONZERO
                if reason is not None:
                    failures.append(GateUnsatisfied(
                        gate.name, index, row, reason,
                        region=region.name if region else None,
                        offset=row - region.start if region else None,
                    ))
    return failures


def check_copy_constraints(store: WitnessStore,
                           copies: CopyConstraintTracker) -> List[CopyConstraintUnsatisfied]:
    failures = []
    for members in copies.equivalence_classes():
        values = [store.read(cell.column, cell.row) for cell in members]
        unassigned = tuple(cell for cell, v in zip(members, values) if not v.is_known())
        distinct = {int(v.unwrap()) for v in values if v.is_known()}
        if unassigned or len(distinct) > 1:
            failures.append(CopyConstraintUnsatisfied(tuple(members), unassigned))
    return failures


def check_public_inputs(store: WitnessStore, copies: CopyConstraintTracker,
                        instance: Instance) -> List[PublicInputMismatch]:
    failures = []
    for binding in copies.bindings:
        column_index = binding.column.index
        vector = instance[column_index] if column_index < len(instance) else ()
        expected: Optional[int] = None
        if 0 <= binding.row < len(vector):
            expected = int(to_field(vector[binding.row], store.field))
        actual_value = store.read(binding.cell.column, binding.cell.row)
        actual = int(actual_value.unwrap()) if actual_value.is_known() else None
        if expected is None or actual is None or expected != actual:
            failures.append(PublicInputMismatch(
                binding.row, column=binding.column, cell=binding.cell,
                expected=expected, actual=actual,
            ))
    return failures


def referenced_cells(cs: ConstraintSystem, store: WitnessStore,
                     copies: CopyConstraintTracker) -> Set[Cell]:
    """Cells read by an enabled gate, a copy constraint or a public input binding."""
    cells = set(copies.cells())
    cells.update(binding.cell for binding in copies.bindings)
    for gate in cs.gates:
        queries = gate.queries()
        for row in store.enabled_rows(gate.selector):
            for column, rotation in queries:
                if 0 <= row + rotation < store.n:
                    cells.add(Cell(column, row + rotation))
    return cells


# --- Mock Prover ---

class MockProver:
    """Result of laying out one circuit instance, ready to be checked.

    Use ``MockProver.run`` rather than the constructor.
    """

    def __init__(self, config: ProverConfig, cs: ConstraintSystem, store: WitnessStore,
                 copies: CopyConstraintTracker, instance: List[List[FieldLike]],
                 regions: List[RegionInfo], dangling_cells: List[Cell]):
        self.config = config
        self.cs = cs
        self.store = store
        self.copies = copies
        self.instance = instance
        self.regions = regions
        self.dangling_cells = dangling_cells

    @classmethod
    def run(cls, k: int, circuit: Circuit, instance: Instance, field=FF) -> "MockProver":
        """Configure and synthesize ``circuit`` in a table of 2^k rows.

        Args:
            k: log2 of the number of rows
            circuit: Circuit instance carrying the witness inputs
            instance: One sequence of public inputs per instance column
            field: galois prime field class

        Raises:
            ConfigurationError: invalid k, bad declarations, or public inputs
                that do not match the instance columns
            SynthesisError: the witness could not be assigned
        """
        config = ProverConfig(k, field)
        cs = ConstraintSystem(field)
        circuit_config = type(circuit).configure(cs)
        cs.freeze()

        instance = [list(values) for values in instance]
        if len(instance) != cs.num_instance_columns:
            raise ConfigurationError(
                f"circuit has {cs.num_instance_columns} instance columns, "
                f"got {len(instance)} public input vectors"
            )
        store = WitnessStore(cs, config.n)
        for column, values in zip(cs.columns(ColumnType.INSTANCE), instance):
            store.load_instance(column, values)

        copies = CopyConstraintTracker(cs)
        layouter = Layouter(cs, store, copies)
        circuit.synthesize(circuit_config, layouter)

        dangling = store.freeze(referenced_cells(cs, store, copies))
        logger.debug("synthesized %d regions over %d of %d rows",
                     len(layouter.regions), layouter.next_row, config.n)
        return cls(config, cs, store, copies, instance, layouter.regions, dangling)

    def verify(self) -> List[VerifyFailure]:
        """Every failing constraint; an empty list means the witness is accepted."""
        failures = check(self.cs, self.store, self.copies, self.instance, self.regions)
        if failures:
            logger.info("witness rejected with %d failure(s)", len(failures))
        else:
            logger.info("witness accepted")
        return failures

    def is_satisfied(self) -> bool:
        return not self.verify()

    def assert_satisfied(self) -> None:
        failures = self.verify()
        if failures:
            lines = "\n".join(f"  {failure}" for failure in failures)
            raise AssertionError(f"circuit is not satisfied ({len(failures)} failures):\n{lines}")

    def to_circuit_data(self) -> CircuitData:
        """Tables and constraints of an accepted witness, for a proving backend."""
        if self.verify():
            raise SynthesisError("cannot hand off a witness that does not satisfy the circuit")
        return CircuitData.from_prover(self)
