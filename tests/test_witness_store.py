"""Tests for WitnessStore."""

import pytest

from constraints.base import Cell
from constraints.system import ConstraintSystem
from primitives.errors import (
    CellAlreadyAssigned,
    ConfigurationError,
    NotEnoughRowsAvailable,
    SynthesisError,
)
from primitives.field import FF
from primitives.value import Value
from witness.store import WitnessStore


@pytest.fixture
def shape():
    cs = ConstraintSystem()
    a = cs.advice_column()
    i = cs.instance_column()
    s = cs.selector()
    cs.freeze()
    return cs, a, i, s


def test_assign_and_read(shape) -> None:
    cs, a, _, _ = shape
    store = WitnessStore(cs, 8)
    cell = store.assign(a, 3, 42)
    assert cell == Cell(a, 3)
    assert store.read(a, 3) == Value.known(42)
    assert store.is_assigned(a, 3)
    assert not store.is_assigned(a, 2)


def test_unassigned_read_is_unknown(shape) -> None:
    cs, a, _, _ = shape
    store = WitnessStore(cs, 8)
    assert not store.read(a, 0).is_known()
    assert not store.read(a, -1).is_known()
    assert not store.read(a, 8).is_known()


def test_reassignment_fails(shape) -> None:
    cs, a, _, _ = shape
    store = WitnessStore(cs, 8)
    store.assign(a, 0, 1)
    with pytest.raises(CellAlreadyAssigned):
        store.assign(a, 0, 1)


def test_row_out_of_range(shape) -> None:
    cs, a, _, s = shape
    store = WitnessStore(cs, 4)
    with pytest.raises(NotEnoughRowsAvailable):
        store.assign(a, 4, 1)
    with pytest.raises(NotEnoughRowsAvailable):
        store.enable_selector(s, 4)


def test_selectors(shape) -> None:
    cs, _, _, s = shape
    store = WitnessStore(cs, 8)
    store.enable_selector(s, 1)
    store.enable_selector(s, 5)
    assert store.is_selector_enabled(s, 1)
    assert not store.is_selector_enabled(s, 2)
    assert store.enabled_rows(s) == [1, 5]


def test_load_instance_pads_with_zero(shape) -> None:
    cs, _, i, _ = shape
    store = WitnessStore(cs, 4)
    store.load_instance(i, [7, 8])
    assert store.read(i, 0) == Value.known(7)
    assert store.read(i, 1) == Value.known(8)
    assert store.read(i, 3) == Value.known(0)


def test_load_instance_too_many_values(shape) -> None:
    cs, _, i, _ = shape
    store = WitnessStore(cs, 2)
    with pytest.raises(ConfigurationError):
        store.load_instance(i, [1, 2, 3])


def test_load_instance_rejects_advice(shape) -> None:
    cs, a, _, _ = shape
    store = WitnessStore(cs, 2)
    with pytest.raises(ConfigurationError):
        store.load_instance(a, [1])


def test_freeze_reports_dangling_cells(shape) -> None:
    cs, a, _, _ = shape
    store = WitnessStore(cs, 8)
    store.assign(a, 0, 1)
    dangling = store.freeze([Cell(a, 2), Cell(a, 0), Cell(a, 1)])
    assert dangling == [Cell(a, 1), Cell(a, 2)]
    assert store.frozen


def test_frozen_store_is_read_only(shape) -> None:
    cs, a, _, s = shape
    store = WitnessStore(cs, 8)
    store.freeze()
    with pytest.raises(SynthesisError):
        store.assign(a, 0, 1)
    with pytest.raises(SynthesisError):
        store.enable_selector(s, 0)


def test_column_values(shape) -> None:
    cs, a, _, _ = shape
    store = WitnessStore(cs, 4)
    store.assign(a, 1, 5)
    values = store.column_values(a)
    assert len(values) == 4
    assert values[1] == FF(5)
    assert values[0] == FF(0)
    assert store.assigned_count() == 1
