"""Optional witness values.

A Value either holds a field element or is unknown. Unknown values appear
when a circuit is laid out without a witness (``without_witnesses``) and
propagate through arithmetic, so an expression over an unknown input
evaluates to an unknown result rather than to zero.
"""

from typing import Callable, Optional

from primitives.errors import MissingWitness
from primitives.field import FF, FieldLike, field_repr, to_field


class Value:
    """A field element that may not be known yet."""

    __slots__ = ("_inner",)

    def __init__(self, inner=None):
        self._inner = inner

    @classmethod
    def known(cls, x: FieldLike, field=FF) -> "Value":
        return cls(to_field(x, field))

    @classmethod
    def unknown(cls) -> "Value":
        return cls(None)

    @classmethod
    def lift(cls, x, field=FF) -> "Value":
        """Accept a Value, an int, a field element or None."""
        if isinstance(x, Value):
            return x
        if x is None:
            return cls.unknown()
        return cls.known(x, field)

    def is_known(self) -> bool:
        return self._inner is not None

    def unwrap(self, what: str = "value"):
        if self._inner is None:
            raise MissingWitness(what)
        return self._inner

    def inner(self) -> Optional[object]:
        return self._inner

    def map(self, fn: Callable) -> "Value":
        if self._inner is None:
            return self
        return Value(fn(self._inner))

    def and_then(self, fn: Callable[..., "Value"]) -> "Value":
        if self._inner is None:
            return self
        return fn(self._inner)

    def zip(self, other: "Value") -> "Value":
        """Pair two values; unknown if either side is."""
        if self._inner is None or other._inner is None:
            return Value.unknown()
        return Value((self._inner, other._inner))

    # --- Arithmetic ---

    def _binary(self, other, op) -> "Value":
        if not isinstance(other, Value):
            if self._inner is None:
                return self
            other = Value(to_field(other, type(self._inner)))
        if self._inner is None or other._inner is None:
            return Value.unknown()
        return Value(op(self._inner, other._inner))

    def __add__(self, other):
        return self._binary(other, lambda a, b: a + b)

    def __radd__(self, other):
        return self._binary(other, lambda a, b: b + a)

    def __sub__(self, other):
        return self._binary(other, lambda a, b: a - b)

    def __rsub__(self, other):
        return self._binary(other, lambda a, b: b - a)

    def __mul__(self, other):
        return self._binary(other, lambda a, b: a * b)

    def __rmul__(self, other):
        return self._binary(other, lambda a, b: b * a)

    def __neg__(self):
        return self.map(lambda a: -a)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        if self._inner is None or other._inner is None:
            return self._inner is None and other._inner is None
        return int(self._inner) == int(other._inner)

    __hash__ = None

    def __repr__(self):
        if self._inner is None:
            return "Value(unknown)"
        return f"Value({field_repr(self._inner)})"
