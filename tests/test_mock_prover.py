"""Tests for the satisfiability checker and MockProver."""

import galois
import pytest

from constraints.base import Cell, ColumnType, Rotation
from primitives.errors import ConfigurationError, SynthesisError
from protocol.failures import (
    CopyConstraintUnsatisfied,
    GateFailureReason,
    GateUnsatisfied,
    PublicInputMismatch,
)
from protocol.mock_prover import MockProver, check
from tests.helpers import make_circuit


# --- Test circuit: one addition gate over three advice columns ---

def configure_add(cs):
    a, b, c = cs.advice_column(), cs.advice_column(), cs.advice_column()
    inst = cs.instance_column()
    s = cs.selector()
    for col in (a, b, c, inst):
        cs.enable_equality(col)
    cs.create_gate("add", s, lambda meta: meta.query_selector(s) * (
        meta.query_advice(a) + meta.query_advice(b) - meta.query_advice(c)))
    return a, b, c, inst, s


def add_rows(rows, public_row=None):
    """Synthesize one region per (a, b, c) triple; None leaves a cell blank."""

    def synthesize(config, layouter):
        a, b, c, inst, s = config
        last = None
        for values in rows:
            def body(region, values=values):
                s.enable(region, 0)
                cells = [region.assign_advice(col, 0, v)
                         for col, v in zip((a, b, c), values) if v is not None]
                return cells[-1]
            last = layouter.assign_region("add row", body)
        if public_row is not None:
            layouter.constrain_instance(last, inst, public_row)

    return make_circuit(configure_add, synthesize)


class TestGates:
    def test_accepts_valid_witness(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 2, 3), (2, 3, 5)]), [[]])
        assert prover.verify() == []
        assert prover.is_satisfied()
        prover.assert_satisfied()

    def test_nonzero_gate(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 2, 3), (2, 3, 6)]), [[]])
        assert prover.verify() == [
            GateUnsatisfied("add", 0, 1, GateFailureReason.NONZERO, region="add row", offset=0)
        ]

    def test_unassigned_cell_is_incomplete(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 2, None)]), [[]])
        failures = prover.verify()
        assert len(failures) == 1
        assert failures[0].reason is GateFailureReason.INCOMPLETE
        c = prover.cs.columns(ColumnType.ADVICE)[2]
        assert prover.dangling_cells == [Cell(c, 0)]

    def test_query_past_table_end_is_out_of_range(self, cs, table) -> None:
        a = cs.advice_column()
        s = cs.selector()
        cs.create_gate("next", s, lambda meta: meta.query_selector(s) * (
            meta.query_advice(a, Rotation.next()) - meta.query_advice(a)))
        store, copies, _ = table(cs, n=4)
        for row in range(4):
            store.assign(a, row, 1)
        store.enable_selector(s, 3)
        store.freeze()
        assert check(cs, store, copies, []) == [
            GateUnsatisfied("next", 0, 3, GateFailureReason.OUT_OF_RANGE)
        ]

    def test_each_polynomial_is_reported(self, cs, table) -> None:
        a = cs.advice_column()
        s = cs.selector()
        cs.create_gate("pair", s, lambda meta: [
            meta.query_selector(s) * (meta.query_advice(a) - 1),
            meta.query_selector(s) * (meta.query_advice(a) - 2),
        ])
        store, copies, _ = table(cs, n=4)
        store.assign(a, 0, 3)
        store.enable_selector(s, 0)
        store.freeze()
        assert [f.index for f in check(cs, store, copies, [])] == [0, 1]

    def test_disabled_rows_are_not_checked(self, cs, table) -> None:
        a = cs.advice_column()
        s = cs.selector()
        cs.create_gate("zero", s, lambda meta: meta.query_selector(s) * meta.query_advice(a))
        store, copies, _ = table(cs, n=4)
        store.assign(a, 0, 0)
        store.assign(a, 1, 5)
        store.enable_selector(s, 0)
        store.freeze()
        assert check(cs, store, copies, []) == []

    def test_check_requires_frozen_store(self, cs, table) -> None:
        cs.advice_column()
        store, copies, _ = table(cs)
        with pytest.raises(SynthesisError):
            check(cs, store, copies, [])


class TestCopyConstraints:
    def test_mismatched_copy(self) -> None:
        def synthesize(config, layouter):
            a, b, _, _, _ = config
            x = layouter.assign_region("x", lambda region: region.assign_advice(a, 0, 1))
            y = layouter.assign_region("y", lambda region: region.assign_advice(b, 0, 2))
            layouter.constrain_equal(x, y)

        prover = MockProver.run(3, make_circuit(configure_add, synthesize), [[]])
        a, b = prover.cs.columns(ColumnType.ADVICE)[:2]
        assert prover.verify() == [CopyConstraintUnsatisfied((Cell(a, 0), Cell(b, 1)))]

    def test_unassigned_member(self) -> None:
        def synthesize(config, layouter):
            a, b, _, _, _ = config
            x = layouter.assign_region("x", lambda region: region.assign_advice(a, 0, 1))
            layouter.constrain_equal(x, Cell(b, 5))

        prover = MockProver.run(3, make_circuit(configure_add, synthesize), [[]])
        (failure,) = prover.verify()
        assert isinstance(failure, CopyConstraintUnsatisfied)
        assert failure.unassigned == (failure.cells[1],)
        assert failure.cells[1].row == 5
        assert prover.dangling_cells == [failure.cells[1]]

    def test_transitive_class_with_equal_values(self) -> None:
        def synthesize(config, layouter):
            a, b, c, _, _ = config
            x = layouter.assign_region("x", lambda region: region.assign_advice(a, 0, 4))
            y = layouter.assign_region("y", lambda region: x.copy_advice(region, b, 0))
            layouter.assign_region("z", lambda region: y.copy_advice(region, c, 0))

        prover = MockProver.run(3, make_circuit(configure_add, synthesize), [[]])
        assert prover.verify() == []
        assert len(prover.copies.equivalence_classes()) == 1


class TestPublicInputs:
    def test_matching_public_input(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 2, 3)], public_row=0), [[3]])
        assert prover.verify() == []

    def test_mismatched_public_input(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 2, 3)], public_row=0), [[4]])
        (failure,) = prover.verify()
        assert isinstance(failure, PublicInputMismatch)
        assert failure.index == 0
        assert failure.expected == 4
        assert failure.actual == 3

    def test_index_outside_vector(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 2, 3)], public_row=2), [[3]])
        (failure,) = prover.verify()
        assert failure.index == 2
        assert failure.expected is None
        assert failure.actual == 3

    def test_public_inputs_are_reduced(self) -> None:
        order = MockProver.run(3, add_rows([(1, 2, 3)]), [[]]).cs.field.order
        prover = MockProver.run(3, add_rows([(1, 2, 3)], public_row=0), [[3 + order]])
        assert prover.verify() == []

    def test_instance_vector_count(self) -> None:
        with pytest.raises(ConfigurationError):
            MockProver.run(3, add_rows([(1, 2, 3)]), [])
        with pytest.raises(ConfigurationError):
            MockProver.run(3, add_rows([(1, 2, 3)]), [[], []])

    def test_too_many_public_inputs(self) -> None:
        with pytest.raises(ConfigurationError):
            MockProver.run(1, add_rows([(1, 2, 3)]), [[1, 2, 3]])


class TestMockProver:
    def test_all_failures_are_collected(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 1, 3), (1, 1, 5)], public_row=0), [[9]])
        failures = prover.verify()
        assert [type(f) for f in failures] == [GateUnsatisfied, GateUnsatisfied,
                                               PublicInputMismatch]
        assert [f.row for f in failures[:2]] == [0, 1]

    def test_verify_is_repeatable(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 1, 3)], public_row=0), [[9]])
        assert prover.verify() == prover.verify()

    def test_assert_satisfied_lists_failures(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 1, 3)]), [[]])
        with pytest.raises(AssertionError, match="gate 'add' constraint 0 unsatisfied at row 0"):
            prover.assert_satisfied()

    @pytest.mark.parametrize("k", [-1, 25, 2.0])
    def test_invalid_k(self, k) -> None:
        with pytest.raises(ConfigurationError):
            MockProver.run(k, add_rows([(1, 2, 3)]), [[]])

    def test_rows_exhausted(self) -> None:
        with pytest.raises(SynthesisError):
            MockProver.run(0, add_rows([(1, 2, 3), (2, 3, 5)]), [[]])

    def test_runs_are_independent(self) -> None:
        first = MockProver.run(3, add_rows([(1, 2, 3)]), [[]])
        second = MockProver.run(3, add_rows([(1, 2, 4)]), [[]])
        assert first.is_satisfied()
        assert not second.is_satisfied()
        assert first.cs is not second.cs

    def test_other_prime_field(self) -> None:
        GF101 = galois.GF(101)
        prover = MockProver.run(3, add_rows([(100, 2, 1)], public_row=0), [[1]], field=GF101)
        assert prover.store.field is GF101
        assert prover.verify() == []
        reduced = MockProver.run(3, add_rows([(100, 2, 102)]), [[]], field=GF101)
        assert reduced.verify() == []

    def test_to_circuit_data_rejects_bad_witness(self) -> None:
        prover = MockProver.run(3, add_rows([(1, 1, 3)]), [[]])
        with pytest.raises(SynthesisError):
            prover.to_circuit_data()
