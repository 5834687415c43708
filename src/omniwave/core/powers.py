"""
Power table — successive powers of the wave factor.

The evaluator scales positions up and down by these powers when it walks
the octaves of the fixed datasets.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Tuple

POWER_COUNT = 64


@dataclass(frozen=True, eq=False)
class PowerTable:
    """
    64 successive powers of a scale factor: power[k] = factor ** k.

    Entries are produced by repeated multiplication, so every entry that
    fits in a float64 is exact. The factor is not validated here; values
    below 2 give a degenerate (non-increasing) table.
    """
    scale_factor: int
    values: np.ndarray = field(repr=False)

    @classmethod
    def build(cls, scale_factor: int) -> 'PowerTable':
        values = np.empty(POWER_COUNT, dtype=np.float64)
        values[0] = 1.0
        for index in range(1, POWER_COUNT):
            values[index] = scale_factor * values[index - 1]
        values.flags.writeable = False
        return cls(scale_factor=scale_factor, values=values)

    def as_tuple(self) -> Tuple[float, ...]:
        """Entries as plain Python floats (used by the evaluation loop)."""
        return tuple(self.values.tolist())

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> float:
        return float(self.values[index])


def build_powers(scale_factor: int) -> PowerTable:
    """Build the power table for a scale factor."""
    return PowerTable.build(scale_factor)
