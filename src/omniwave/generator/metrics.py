"""
Omniwave metrics — summary statistics of a generated wave.

Points are stacked into an (N, 5) array: column 0 is the position, columns
1-4 the dataset values in WaveType order.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Tuple

from omniwave.generator.types import WavePoint, WaveType


def to_array(points: Iterable[WavePoint]) -> np.ndarray:
    """Stack points into an (N, 5) float64 array."""
    rows = [point.as_tuple() for point in points]
    if not rows:
        return np.empty((0, 5), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


@dataclass
class WaveSummary:
    """
    Summary of a generated wave.

    Attributes:
        count: Number of points
        first_position: Position of the first point (days)
        last_position: Position of the last point (days)
        minimum: Per-dataset minimum value
        maximum: Per-dataset maximum value
        mean: Per-dataset mean value
    """
    count: int
    first_position: float
    last_position: float
    minimum: Tuple[float, ...]
    maximum: Tuple[float, ...]
    mean: Tuple[float, ...]

    def summary(self) -> str:
        """Return human-readable summary."""
        lines = [
            "WaveSummary:",
            f"  Points: {self.count}",
            f"  Positions: {self.first_position:.6f} -> {self.last_position:.6f} days",
        ]
        for wave_type in WaveType:
            i = wave_type.index
            lines.append(
                f"  {wave_type.name.title():<9} min={self.minimum[i]:.6g} "
                f"max={self.maximum[i]:.6g} mean={self.mean[i]:.6g}")
        return "\n".join(lines)


def summarize(points: Iterable[WavePoint]) -> WaveSummary:
    """Compute a WaveSummary; an empty wave gives NaN statistics."""
    data = to_array(points)
    count = len(data)

    if count == 0:
        nan = (float('nan'),) * len(WaveType)
        return WaveSummary(count=0, first_position=float('nan'),
                           last_position=float('nan'),
                           minimum=nan, maximum=nan, mean=nan)

    values = data[:, 1:]
    return WaveSummary(
        count=count,
        first_position=float(data[0, 0]),
        last_position=float(data[-1, 0]),
        minimum=tuple(float(v) for v in np.min(values, axis=0)),
        maximum=tuple(float(v) for v in np.max(values, axis=0)),
        mean=tuple(float(v) for v in np.mean(values, axis=0)),
    )
