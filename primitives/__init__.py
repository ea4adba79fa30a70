"""Primitives - Field arithmetic, optional witness values and errors."""

from primitives.errors import (
    CellAlreadyAssigned,
    ConfigurationError,
    MissingWitness,
    NotEnoughRowsAvailable,
    PlonkishError,
    RotationOutOfRegion,
    SynthesisError,
)
from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    FieldLike,
    field_repr,
    is_zero,
    to_field,
)
from primitives.value import Value

__all__ = [
    # Errors
    "PlonkishError",
    "ConfigurationError",
    "SynthesisError",
    "MissingWitness",
    "CellAlreadyAssigned",
    "RotationOutOfRegion",
    "NotEnoughRowsAvailable",
    # Field
    "FF",
    "GOLDILOCKS_PRIME",
    "FieldLike",
    "field_repr",
    "is_zero",
    "to_field",
    # Witness values
    "Value",
]
