"""Witness assignment.

The layouter hands regions to circuit code, regions write into the witness
store, and copy constraints and public input bindings collect in the copy
tracker. All three belong to one circuit instance; nothing here is shared
between runs.
"""

from .copy import CopyConstraintTracker, InstanceBinding
from .layouter import AssignedCell, Layouter, Region, RegionInfo
from .store import WitnessStore

__all__ = [
    'AssignedCell',
    'CopyConstraintTracker',
    'InstanceBinding',
    'Layouter',
    'Region',
    'RegionInfo',
    'WitnessStore',
]
