"""Exception hierarchy shared by configuration, synthesis and checking.

Configuration errors come from a bad circuit shape and are raised while
declaring columns and gates. Synthesis errors abort witness assignment for
one circuit instance. A rejected witness is not an exception: the checker
returns a list of failures instead (see protocol.failures).
"""


class PlonkishError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(PlonkishError):
    """Invalid column, selector or gate declaration."""


class SynthesisError(PlonkishError):
    """Witness assignment failed for this circuit instance."""


class MissingWitness(SynthesisError):
    """A cell was assigned from a value the circuit could not compute."""

    def __init__(self, what: str = "value"):
        super().__init__(f"missing witness for {what}")
        self.what = what


class CellAlreadyAssigned(SynthesisError):
    """A cell was assigned twice."""

    def __init__(self, cell):
        super().__init__(f"cell {cell} is already assigned")
        self.cell = cell


class RotationOutOfRegion(SynthesisError):
    """A gate enabled in a region reads a row outside that region."""

    def __init__(self, gate: str, region: str, offset: int, rotation: int, height: int):
        super().__init__(
            f"gate '{gate}' enabled at offset {offset} of region '{region}' "
            f"queries rotation {rotation}, outside rows 0..{height - 1}"
        )
        self.gate = gate
        self.region = region
        self.offset = offset
        self.rotation = rotation
        self.height = height


class NotEnoughRowsAvailable(SynthesisError, ConfigurationError):
    """The circuit needs more rows than 2^k provides."""

    def __init__(self, row: int, n: int):
        super().__init__(f"row {row} is outside the {n} rows available")
        self.row = row
        self.n = n
