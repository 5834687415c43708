"""
Point evaluator — the interpolated, power-weighted summation.

A position is sampled across octaves of the wave factor:

  ascending:  sum(v(x / F^k) * F^k)  while x >= F^k
  descending: sum(v(x * F^k) / F^k)  while the sum keeps growing

where v() wraps its argument into the 384-entry dataset and interpolates
linearly between neighbours. The total is normalized by F^3.

No special float handling is done. A non-finite sample argument makes
math.remainder / int() raise ValueError, which callers see unchanged.
"""

import math
from typing import Sequence, Tuple

from omniwave.core.datasets import DATASET_SIZE, FixedDatasetTable
from omniwave.core.powers import PowerTable

# Descending-phase iteration bound
ITERATION_CEILING = 1000002

# Power used to normalize the final sum (F^3)
NORMALIZATION_POWER = 3


def sample_row(row: Sequence[int], y: float) -> float:
    """
    Wrap y into a 384-entry row and interpolate between neighbours.

    The index is the IEEE remainder of y by 384 (round-half-even quotient),
    truncated toward zero. Negative indices are mirrored with abs().
    """
    i = int(math.remainder(y, DATASET_SIZE))
    # Truncated modulo: the sign of (i + 1) is kept before abs()
    j = abs(i + 1) % DATASET_SIZE
    i = abs(i)
    z = y - math.floor(y)
    if z == 0.0:
        return float(row[i])
    return (row[j] - row[i]) * z + row[i]


class PointEvaluator:
    """
    Evaluates wave values for a fixed table and power table.

    Args:
        table: The four sampling datasets.
        powers: Power table of the wave factor.
        max_iterations: Upper bound on descending-phase iterations. The
            phase also ends when the power table runs out; either bound
            truncates silently.
    """

    def __init__(self, table: FixedDatasetTable, powers: PowerTable,
                 max_iterations: int = ITERATION_CEILING):
        self.table = table
        self.powers = powers
        self.max_iterations = max_iterations
        self._rows = table.rows
        self._powers = powers.as_tuple()

    def sample(self, y: float, dataset: int) -> float:
        """Interpolated lookup of one dataset at a wrapped position."""
        return sample_row(self._rows[dataset], y)

    def evaluate(self, position: float, dataset: int) -> float:
        """Wave value of one dataset at a position."""
        powers = self._powers
        count = len(powers)
        current_sum = 0.0

        if position != 0:
            index = 0
            while index < count and position >= powers[index]:
                current_sum += self.sample(position / powers[index], dataset) * powers[index]
                index += 1

            index = 0
            while True:
                index += 1
                if index > self.max_iterations or index >= count:
                    break
                last_sum = current_sum
                current_sum += self.sample(position * powers[index], dataset) / powers[index]
                if not (current_sum == 0 or current_sum > last_sum):
                    break

        return current_sum / powers[NORMALIZATION_POWER]

    def evaluate_all(self, position: float) -> Tuple[float, ...]:
        """Values of every dataset at a position, in dataset order."""
        return tuple(self.evaluate(position, dataset) for dataset in range(len(self._rows)))

    def __repr__(self) -> str:
        return (f"PointEvaluator(scale_factor={self.powers.scale_factor}, "
                f"max_iterations={self.max_iterations})")


def sample(y: float, dataset: int, table: FixedDatasetTable) -> float:
    """Interpolated lookup of one dataset of a table."""
    return sample_row(table.rows[dataset], y)


def evaluate(position: float, dataset: int, powers: PowerTable,
             table: FixedDatasetTable) -> float:
    """Stateless form of PointEvaluator.evaluate."""
    return PointEvaluator(table, powers).evaluate(position, dataset)
