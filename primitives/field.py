"""Goldilocks prime field GF(p).

Uses galois library for all field arithmetic. FF is the default field type;
any galois prime field class can stand in for it wherever a ``field``
argument is accepted.
"""

from typing import Union

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""

FieldLike = Union[int, galois.FieldArray]


# --- Conversions ---

def to_field(x: FieldLike, field=FF) -> galois.FieldArray:
    """Lift an int or field element into ``field``.

    Python ints are reduced modulo the field order, so negative constants
    such as -1 map to p - 1.
    """
    if isinstance(x, galois.FieldArray):
        if type(x) is field:
            return x
        return field(int(x) % field.order)
    if isinstance(x, (bool, np.bool_)):
        return field(int(x))
    if isinstance(x, (int, np.integer)):
        return field(int(x) % field.order)
    raise TypeError(f"Cannot convert {type(x).__name__} to a field element")


def is_zero(x: galois.FieldArray) -> bool:
    """True iff x is the additive identity."""
    return int(x) == 0


def field_repr(x: galois.FieldArray) -> str:
    """Short printable form of a field element.

    Values close to p are shown as negatives (p - 1 prints as -1).
    """
    v = int(x)
    order = type(x).order
    if order - v < 1 << 16:
        return f"-{order - v}"
    return str(v)
