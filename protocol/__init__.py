"""Protocol - Circuit interface, mock prover and failure reporting."""

from primitives.errors import (
    CellAlreadyAssigned,
    ConfigurationError,
    MissingWitness,
    NotEnoughRowsAvailable,
    PlonkishError,
    RotationOutOfRegion,
    SynthesisError,
)
from protocol.circuit import Circuit
from protocol.config import ProverConfig
from protocol.data import CircuitData
from protocol.failures import (
    CopyConstraintUnsatisfied,
    GateFailureReason,
    GateUnsatisfied,
    PublicInputMismatch,
    VerifyFailure,
)
from protocol.mock_prover import MockProver, check

__all__ = [
    # Errors
    "PlonkishError",
    "ConfigurationError",
    "SynthesisError",
    "MissingWitness",
    "CellAlreadyAssigned",
    "RotationOutOfRegion",
    "NotEnoughRowsAvailable",
    # Circuits
    "Circuit",
    "ProverConfig",
    # Checking
    "MockProver",
    "check",
    "VerifyFailure",
    "GateUnsatisfied",
    "GateFailureReason",
    "CopyConstraintUnsatisfied",
    "PublicInputMismatch",
    # Backend handoff
    "CircuitData",
]
