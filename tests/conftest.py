"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the root, so parent is the root)
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from constraints.system import ConstraintSystem  # noqa: E402
from witness.copy import CopyConstraintTracker  # noqa: E402
from witness.layouter import Layouter  # noqa: E402
from witness.store import WitnessStore  # noqa: E402


@pytest.fixture
def cs() -> ConstraintSystem:
    return ConstraintSystem()


@pytest.fixture
def table():
    """Factory wiring a frozen constraint system to a fresh store, tracker and layouter."""

    def build(cs: ConstraintSystem, n: int = 16):
        cs.freeze()
        store = WitnessStore(cs, n)
        copies = CopyConstraintTracker(cs)
        return store, copies, Layouter(cs, store, copies)

    return build
