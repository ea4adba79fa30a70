"""Circuit shape declarations.

This package describes *what* a circuit constrains, independent of any
witness: typed columns, selectors, rotations, polynomial expressions over
column queries and the ConstraintSystem that collects them into gates.
"""

from .base import (
    Cell,
    Column,
    ColumnType,
    ConstraintContext,
    Rotation,
    Selector,
)
from .expression import (
    ColumnQuery,
    Constant,
    Expression,
    Negated,
    Product,
    Scaled,
    SelectorQuery,
    Sum,
)
from .system import ConstraintSystem, Gate, VirtualCells

__all__ = [
    "Cell",
    "Column",
    "ColumnType",
    "ConstraintContext",
    "Rotation",
    "Selector",
    "Expression",
    "Constant",
    "SelectorQuery",
    "ColumnQuery",
    "Negated",
    "Sum",
    "Product",
    "Scaled",
    "ConstraintSystem",
    "Gate",
    "VirtualCells",
]
