"""Polynomial expressions over column queries.

Gates are written with ordinary Python arithmetic on query handles:

    s = meta.query_selector(selector)
    a = meta.query_advice(col_a, Rotation.cur())
    b = meta.query_advice(col_a, Rotation.next())
    c = meta.query_advice(col_a, Rotation(2))
    s * (a + b - c)

which builds a small tree of the node types below. The tree is symbolic:
it is built once at configuration time and evaluated later, row by row,
against a ConstraintContext.

Leaves:
    Constant       a field constant (int or field element)
    SelectorQuery  a selector at the current row
    ColumnQuery    a column at the current row plus a rotation

Internal nodes:
    Negated, Sum, Product, Scaled
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Set, Tuple

import galois
import numpy as np

from constraints.base import Column, ConstraintContext, Selector


class Expression:
    """Base class for expression nodes; provides the arithmetic operators."""

    # Make numpy defer to the reflected operators below, so that
    # FF(3) * expr builds a Scaled node instead of an object array.
    __array_ufunc__ = None

    def __add__(self, other) -> Expression:
        return Sum(self, _coerce(other))

    def __radd__(self, other) -> Expression:
        return Sum(_coerce(other), self)

    def __sub__(self, other) -> Expression:
        return Sum(self, Negated(_coerce(other)))

    def __rsub__(self, other) -> Expression:
        return Sum(_coerce(other), Negated(self))

    def __mul__(self, other) -> Expression:
        if isinstance(other, (int, np.integer, galois.FieldArray)):
            return Scaled(self, other)
        return Product(self, _coerce(other))

    def __rmul__(self, other) -> Expression:
        if isinstance(other, (int, np.integer, galois.FieldArray)):
            return Scaled(self, other)
        return Product(_coerce(other), self)

    def __neg__(self) -> Expression:
        return Negated(self)

    # --- Traversal ---

    def evaluate(self, ctx: ConstraintContext):
        raise NotImplementedError

    def degree(self) -> int:
        raise NotImplementedError

    def queries(self) -> Set[Tuple[Column, int]]:
        """All (column, rotation) pairs read by this expression."""
        raise NotImplementedError

    def selectors(self) -> Set[Selector]:
        raise NotImplementedError


def _coerce(x) -> Expression:
    if isinstance(x, Expression):
        return x
    if isinstance(x, (int, np.integer, galois.FieldArray)):
        return Constant(x)
    raise TypeError(f"Cannot use {type(x).__name__} in an expression")


# ═══════════════════════════════════════════════════════════════════
# Leaf nodes
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, eq=False)
class Constant(Expression):
    value: object

    def evaluate(self, ctx):
        return ctx.constant(self.value)

    def degree(self):
        return 0

    def queries(self):
        return set()

    def selectors(self):
        return set()

    def __str__(self):
        return str(int(self.value)) if isinstance(self.value, galois.FieldArray) else str(self.value)


@dataclass(frozen=True, eq=False)
class SelectorQuery(Expression):
    selector: Selector

    def evaluate(self, ctx):
        return ctx.selector(self.selector)

    def degree(self):
        return 1

    def queries(self):
        return set()

    def selectors(self):
        return {self.selector}

    def __str__(self):
        return f"S{self.selector.index}"


@dataclass(frozen=True, eq=False)
class ColumnQuery(Expression):
    column: Column
    rotation: int

    def evaluate(self, ctx):
        return ctx.query(self.column, self.rotation)

    def degree(self):
        return 1

    def queries(self):
        return {(self.column, self.rotation)}

    def selectors(self):
        return set()

    def __str__(self):
        prefix = self.column.kind.value[0].upper()
        if self.rotation == 0:
            return f"{prefix}{self.column.index}"
        return f"{prefix}{self.column.index}[{self.rotation:+d}]"


# ═══════════════════════════════════════════════════════════════════
# Internal nodes
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, eq=False)
class Negated(Expression):
    inner: Expression

    def evaluate(self, ctx):
        return -self.inner.evaluate(ctx)

    def degree(self):
        return self.inner.degree()

    def queries(self):
        return self.inner.queries()

    def selectors(self):
        return self.inner.selectors()

    def __str__(self):
        return f"-{self.inner}"


@dataclass(frozen=True, eq=False)
class Sum(Expression):
    lhs: Expression
    rhs: Expression

    def evaluate(self, ctx):
        return self.lhs.evaluate(ctx) + self.rhs.evaluate(ctx)

    def degree(self):
        return max(self.lhs.degree(), self.rhs.degree())

    def queries(self):
        return self.lhs.queries() | self.rhs.queries()

    def selectors(self):
        return self.lhs.selectors() | self.rhs.selectors()

    def __str__(self):
        if isinstance(self.rhs, Negated):
            return f"({self.lhs} - {self.rhs.inner})"
        return f"({self.lhs} + {self.rhs})"


@dataclass(frozen=True, eq=False)
class Product(Expression):
    lhs: Expression
    rhs: Expression

    def evaluate(self, ctx):
        return self.lhs.evaluate(ctx) * self.rhs.evaluate(ctx)

    def degree(self):
        return self.lhs.degree() + self.rhs.degree()

    def queries(self):
        return self.lhs.queries() | self.rhs.queries()

    def selectors(self):
        return self.lhs.selectors() | self.rhs.selectors()

    def __str__(self):
        return f"{self.lhs} * {self.rhs}"


@dataclass(frozen=True, eq=False)
class Scaled(Expression):
    inner: Expression
    factor: object

    def evaluate(self, ctx):
        return self.inner.evaluate(ctx) * ctx.constant(self.factor)

    def degree(self):
        return self.inner.degree()

    def queries(self):
        return self.inner.queries()

    def selectors(self):
        return self.inner.selectors()

    def __str__(self):
        return f"{self.inner} * {_coerce(self.factor)}"
