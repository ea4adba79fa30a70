"""Mock prover configuration."""

from dataclasses import dataclass
from numbers import Integral

from primitives.errors import ConfigurationError
from primitives.field import FF


@dataclass
class ProverConfig:
    """Table size and field for one mock proving run.

    Attributes:
        k: log2 of the number of rows; the table has 2^k rows
        field: galois prime field class the circuit is evaluated over
        max_k: largest k accepted
    """
    k: int
    field: type = FF
    max_k: int = 24

    def __post_init__(self):
        if isinstance(self.k, bool) or not isinstance(self.k, Integral):
            raise ConfigurationError(f"k must be an int, got {type(self.k).__name__}")
        if not 0 <= self.k <= self.max_k:
            raise ConfigurationError(f"k={self.k} is outside 0..{self.max_k}")
        self.k = int(self.k)

    @property
    def n(self) -> int:
        return 1 << self.k
