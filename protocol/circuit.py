"""Base class for circuit definitions."""

from abc import ABC, abstractmethod
from typing import Any

from constraints.system import ConstraintSystem
from witness.layouter import Layouter


class Circuit(ABC):
    """A circuit: a shape declared once and a witness assigned per instance.

    ``configure`` runs against a fresh ConstraintSystem and returns whatever
    configuration object ``synthesize`` needs (columns, selectors). It must
    not depend on witness data, since it also runs for blank circuits.
    ``synthesize`` assigns the witness through the layouter and raises
    SynthesisError if it cannot.
    """

    @classmethod
    @abstractmethod
    def configure(cls, cs: ConstraintSystem) -> Any:
        """Declare columns, selectors and gates; return the config."""
        pass

    @abstractmethod
    def synthesize(self, config: Any, layouter: Layouter) -> None:
        """Assign the witness for this instance."""
        pass

    @abstractmethod
    def without_witnesses(self) -> "Circuit":
        """Copy of this circuit with every witness input unknown."""
        pass
