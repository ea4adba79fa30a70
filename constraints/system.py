"""Constraint system: columns, selectors, gates and equality-enabled columns.

A circuit's ``configure`` step receives a fresh ConstraintSystem and declares
everything it needs on it. Once configuration returns, the mock prover
freezes the system; any later declaration is a ConfigurationError.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Set, Tuple, Union

from primitives.errors import ConfigurationError
from primitives.field import FF
from constraints.base import Column, ColumnType, Rotation, Selector
from constraints.expression import ColumnQuery, Expression, SelectorQuery

logger = logging.getLogger(__name__)

RotationLike = Union[Rotation, int]


@dataclass(frozen=True)
class Gate:
    """A named set of polynomial constraints switched on by one selector.

    Each polynomial must evaluate to zero at every row where ``selector`` is
    enabled.
    """
    name: str
    selector: Selector
    polynomials: Tuple[Expression, ...]

    def queries(self) -> Set[Tuple[Column, int]]:
        result = set()
        for poly in self.polynomials:
            result |= poly.queries()
        return result

    def rotations(self) -> List[int]:
        return sorted({rotation for _, rotation in self.queries()})

    def degree(self) -> int:
        return max(poly.degree() for poly in self.polynomials)


class VirtualCells:
    """Query handles handed to a gate builder.

    Every query is checked against the declarations of the owning
    constraint system, so a gate cannot reference a column or selector that
    does not exist.
    """

    def __init__(self, cs: "ConstraintSystem"):
        self._cs = cs

    def query_selector(self, selector: Selector) -> Expression:
        self._cs._check_selector(selector)
        return SelectorQuery(selector)

    def query_any(self, column: Column, rotation: RotationLike = 0) -> Expression:
        self._cs._check_column(column)
        return ColumnQuery(column, int(rotation))

    def query_advice(self, column: Column, rotation: RotationLike = 0) -> Expression:
        return self._query_kind(column, rotation, ColumnType.ADVICE)

    def query_instance(self, column: Column, rotation: RotationLike = 0) -> Expression:
        return self._query_kind(column, rotation, ColumnType.INSTANCE)

    def query_fixed(self, column: Column, rotation: RotationLike = 0) -> Expression:
        return self._query_kind(column, rotation, ColumnType.FIXED)

    def _query_kind(self, column, rotation, kind):
        if column.kind is not kind:
            raise ConfigurationError(f"{column} is not a {kind.value} column")
        return self.query_any(column, rotation)


class ConstraintSystem:
    """Declarations that fix the shape of a circuit.

    Args:
        field: galois prime field class the circuit is defined over
    """

    def __init__(self, field=FF):
        self.field = field
        self._num_columns: Dict[ColumnType, int] = {kind: 0 for kind in ColumnType}
        self._num_selectors = 0
        self._equality: Set[Column] = set()
        self._gates: List[Gate] = []
        self._frozen = False

    # --- Declarations ---

    def declare_column(self, kind: ColumnType) -> Column:
        self._check_mutable()
        column = Column(kind, self._num_columns[kind])
        self._num_columns[kind] += 1
        return column

    def advice_column(self) -> Column:
        return self.declare_column(ColumnType.ADVICE)

    def instance_column(self) -> Column:
        return self.declare_column(ColumnType.INSTANCE)

    def fixed_column(self) -> Column:
        return self.declare_column(ColumnType.FIXED)

    def declare_selector(self) -> Selector:
        self._check_mutable()
        selector = Selector(self._num_selectors)
        self._num_selectors += 1
        return selector

    selector = declare_selector

    def enable_equality(self, column: Column) -> None:
        """Allow ``column`` to take part in copy constraints."""
        self._check_mutable()
        self._check_column(column)
        self._equality.add(column)

    def create_gate(
        self,
        name: str,
        selector: Selector,
        build: Callable[[VirtualCells], Union[Expression, Sequence[Expression]]],
    ) -> Gate:
        """Declare a gate.

        ``build`` is called once with a VirtualCells handle and returns one
        expression or a list of them. Nothing is evaluated here; the
        expressions are stored and evaluated by the checker.
        """
        self._check_mutable()
        self._check_selector(selector)
        polys = build(VirtualCells(self))
        if isinstance(polys, Expression):
            polys = [polys]
        if not isinstance(polys, (list, tuple)):
            raise ConfigurationError(
                f"gate '{name}' returned {type(polys).__name__}, expected expressions"
            )
        polys = tuple(polys)
        if not polys:
            raise ConfigurationError(f"gate '{name}' has no polynomials")
        for poly in polys:
            if not isinstance(poly, Expression):
                raise ConfigurationError(
                    f"gate '{name}' returned {type(poly).__name__}, expected an Expression"
                )
            foreign = poly.selectors() - {selector}
            if foreign:
                raise ConfigurationError(
                    f"gate '{name}' is controlled by {selector} but queries "
                    + ", ".join(str(s) for s in sorted(foreign, key=lambda s: s.index))
                )
        gate = Gate(name, selector, polys)
        self._gates.append(gate)
        logger.debug("gate '%s' on %s: degree %d, rotations %s",
                     name, selector, gate.degree(), gate.rotations())
        return gate

    def freeze(self) -> None:
        self._frozen = True

    # --- Introspection ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def gates(self) -> List[Gate]:
        return list(self._gates)

    @property
    def num_advice_columns(self) -> int:
        return self._num_columns[ColumnType.ADVICE]

    @property
    def num_instance_columns(self) -> int:
        return self._num_columns[ColumnType.INSTANCE]

    @property
    def num_fixed_columns(self) -> int:
        return self._num_columns[ColumnType.FIXED]

    @property
    def num_selectors(self) -> int:
        return self._num_selectors

    @property
    def equality_columns(self) -> List[Column]:
        return sorted(self._equality, key=Column.sort_key)

    def columns(self, kind: ColumnType) -> List[Column]:
        return [Column(kind, i) for i in range(self._num_columns[kind])]

    def selectors(self) -> List[Selector]:
        return [Selector(i) for i in range(self._num_selectors)]

    def is_equality_enabled(self, column: Column) -> bool:
        return column in self._equality

    def gates_for(self, selector: Selector) -> List[Gate]:
        return [g for g in self._gates if g.selector == selector]

    def degree(self) -> int:
        """Maximum degree over all gate polynomials (0 with no gates)."""
        return max((g.degree() for g in self._gates), default=0)

    def max_rotation_span(self) -> Tuple[int, int]:
        """Smallest and largest rotation queried by any gate."""
        rotations = [r for g in self._gates for r in g.rotations()]
        if not rotations:
            return (0, 0)
        return (min(rotations), max(rotations))

    # --- Checks ---

    def _check_mutable(self):
        if self._frozen:
            raise ConfigurationError("constraint system is frozen after configuration")

    def _check_column(self, column: Column):
        if not isinstance(column, Column):
            raise ConfigurationError(f"expected a Column, got {type(column).__name__}")
        if not 0 <= column.index < self._num_columns[column.kind]:
            raise ConfigurationError(f"{column} has not been declared")

    def _check_selector(self, selector: Selector):
        if not isinstance(selector, Selector):
            raise ConfigurationError(f"expected a Selector, got {type(selector).__name__}")
        if not 0 <= selector.index < self._num_selectors:
            raise ConfigurationError(f"{selector} has not been declared")
