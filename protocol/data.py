"""Plain data handed from the mock prover to a proving backend.

Architecture Overview:
    A circuit instance passes through two representations:

    1. WitnessStore + CopyConstraintTracker (witness/)
       - Cell-addressed, write-once storage built up region by region
       - Used by: the layouter during synthesis and the checker

    2. CircuitData (this module)
       - Whole columns as field arrays, gates as polynomial identities,
         copy constraints as equivalence classes
       - Used by: a polynomial-commitment prover (not part of this package)

    Only an accepted witness is converted (MockProver.to_circuit_data).

Usage:
    prover = MockProver.run(k, circuit, instance)
    data = prover.to_circuit_data()
    data.advice[col_a]       # field array of length n
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List

import numpy as np

from constraints.base import Cell, Column, ColumnType, Selector
from constraints.system import Gate
from witness.copy import InstanceBinding

if TYPE_CHECKING:
    from protocol.mock_prover import MockProver


@dataclass
class CircuitData:
    """Column tables and constraints of a satisfied circuit instance.

    Attributes:
        n: Number of rows (2^k)
        advice: Advice columns keyed by Column, each a field array of length n
        instance: Instance columns keyed by Column
        fixed: Fixed columns keyed by Column
        selectors: Selector bits keyed by Selector, each a bool array
        gates: Gates in declaration order
        copy_classes: Equivalence classes of copy-constrained cells
        bindings: Public input bindings
    """
    n: int
    advice: Dict[Column, np.ndarray] = field(default_factory=dict)
    instance: Dict[Column, np.ndarray] = field(default_factory=dict)
    fixed: Dict[Column, np.ndarray] = field(default_factory=dict)
    selectors: Dict[Selector, np.ndarray] = field(default_factory=dict)
    gates: List[Gate] = field(default_factory=list)
    copy_classes: List[List[Cell]] = field(default_factory=list)
    bindings: List[InstanceBinding] = field(default_factory=list)

    @classmethod
    def from_prover(cls, prover: "MockProver") -> "CircuitData":
        cs, store = prover.cs, prover.store
        tables = {
            kind: {col: store.column_values(col) for col in cs.columns(kind)}
            for kind in ColumnType
        }
        return cls(
            n=store.n,
            advice=tables[ColumnType.ADVICE],
            instance=tables[ColumnType.INSTANCE],
            fixed=tables[ColumnType.FIXED],
            selectors={s: store.selector_values(s) for s in cs.selectors()},
            gates=cs.gates,
            copy_classes=prover.copies.equivalence_classes(),
            bindings=list(prover.copies.bindings),
        )
