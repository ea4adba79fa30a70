"""Column, selector, rotation and cell identities.

These are plain value objects: a Column is identified by its kind and its
index within that kind, a Cell by its column and absolute row. They carry no
witness data; values live in the witness store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class ColumnType(Enum):
    """Kinds of columns in a PLONKish table.

    ADVICE columns hold the private witness, INSTANCE columns hold public
    inputs and FIXED columns hold constants that are part of the circuit
    shape.
    """
    ADVICE = "advice"
    INSTANCE = "instance"
    FIXED = "fixed"


@dataclass(frozen=True)
class Column:
    kind: ColumnType
    index: int

    def sort_key(self):
        return (self.kind.value, self.index)

    def __str__(self):
        return f"{self.kind.value}[{self.index}]"


@dataclass(frozen=True)
class Selector:
    """Per-row boolean that switches gates on.

    Selectors are created by the constraint system and enabled row by row
    during synthesis. They cannot take part in copy constraints.
    """
    index: int

    def enable(self, region, offset: int) -> None:
        """Turn this selector on at ``offset`` rows into ``region``."""
        region.enable_selector(self, offset)

    def __str__(self):
        return f"selector[{self.index}]"


@dataclass(frozen=True)
class Rotation:
    """Signed row offset relative to the row a gate is evaluated at."""
    offset: int = 0

    @classmethod
    def cur(cls) -> "Rotation":
        return cls(0)

    @classmethod
    def next(cls) -> "Rotation":
        return cls(1)

    @classmethod
    def prev(cls) -> "Rotation":
        return cls(-1)

    def __int__(self):
        return self.offset


@dataclass(frozen=True)
class Cell:
    """A (column, absolute row) address in the witness table."""
    column: Column
    row: int

    def sort_key(self):
        return (*self.column.sort_key(), self.row)

    def __str__(self):
        return f"{self.column}@{self.row}"


class ConstraintContext(ABC):
    """Uniform interface for evaluating gate polynomials.

    An Expression only knows its shape; a context supplies the numbers.
    The checker evaluates one row at a time with a context whose reads
    return Values, so an unassigned cell makes the result unknown.

    Example:
        class Ones(ConstraintContext):
            def constant(self, value): return Value.known(value)
            def selector(self, selector): return Value.known(1)
            def query(self, column, rotation): return Value.known(1)

        (a + b - c).evaluate(Ones())  # Value(1)
    """

    @abstractmethod
    def constant(self, value):
        """Lift a constant appearing in an expression."""
        pass

    @abstractmethod
    def selector(self, selector: Selector):
        """Value of ``selector`` at the current row (0 or 1)."""
        pass

    @abstractmethod
    def query(self, column: Column, rotation: int):
        """Value of ``column`` at the current row plus ``rotation``."""
        pass
