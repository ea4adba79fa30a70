"""Example circuits.

Each circuit pairs a chip (configure + assignment helpers) with a Circuit
subclass that wires the chip to its columns. The registry maps short names
to circuit classes for tests and scripts that pick a circuit by name.
"""

from protocol.circuit import Circuit

from .fibonacci_column import FibonacciColumnChip, FibonacciColumnCircuit, FibonacciColumnConfig
from .fibonacci_rows import FibonacciRowsChip, FibonacciRowsCircuit, FibonacciRowsConfig

# Registry mapping circuit names to circuit classes
CIRCUIT_REGISTRY: dict[str, type[Circuit]] = {
    "fibonacci_rows": FibonacciRowsCircuit,
    "fibonacci_column": FibonacciColumnCircuit,
}


def get_circuit(name: str, *args, **kwargs) -> Circuit:
    """Instantiate a registered circuit.

    Args:
        name: Registry name (e.g., 'fibonacci_rows')
        *args, **kwargs: Passed to the circuit constructor

    Raises:
        KeyError: If no circuit is registered under ``name``
    """
    if name not in CIRCUIT_REGISTRY:
        raise KeyError(
            f"No circuit named '{name}'. "
            f"Available: {list(CIRCUIT_REGISTRY.keys())}"
        )
    return CIRCUIT_REGISTRY[name](*args, **kwargs)


__all__ = [
    "FibonacciRowsChip",
    "FibonacciRowsCircuit",
    "FibonacciRowsConfig",
    "FibonacciColumnChip",
    "FibonacciColumnCircuit",
    "FibonacciColumnConfig",
    "CIRCUIT_REGISTRY",
    "get_circuit",
]
