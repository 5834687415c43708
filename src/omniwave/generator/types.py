"""
Omniwave generator types — points, run states and completion records.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

from omniwave.config import OUTPUT_PRECISION


class WaveType(IntEnum):
    """
    The datasets a wave is calculated with.

    The dataset index of a type is its value minus one.
    """
    KELLEY = 1
    WATKINS = 2
    SHELIAK = 3
    HUANG_TI = 4

    @property
    def index(self) -> int:
        return int(self) - 1


class SequencerState(Enum):
    """Lifecycle of a WaveSequencer run."""
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in (SequencerState.COMPLETED, SequencerState.FAILED,
                        SequencerState.CANCELLED)


@dataclass(frozen=True)
class WavePoint:
    """
    One calculated point of the wave.

    Attributes:
        position: Days before the zero point at which the point was computed.
        values: One value per dataset, in WaveType order.
    """
    position: float
    values: Tuple[float, float, float, float]

    def value(self, wave_type: WaveType) -> float:
        return self.values[WaveType(wave_type).index]

    @property
    def kelley(self) -> float:
        return self.values[0]

    @property
    def watkins(self) -> float:
        return self.values[1]

    @property
    def sheliak(self) -> float:
        return self.values[2]

    @property
    def huang_ti(self) -> float:
        return self.values[3]

    def as_tuple(self) -> Tuple[float, ...]:
        return (self.position,) + tuple(self.values)

    def format(self, precision: int = OUTPUT_PRECISION) -> str:
        """Comma-separated position and values with fixed decimals."""
        return ", ".join(f"{value:.{precision}f}" for value in self.as_tuple())

    def __repr__(self) -> str:
        return (f"WavePoint(position={self.position:.6f}, "
                f"values=({', '.join(f'{v:.6g}' for v in self.values)}))")


@dataclass(frozen=True)
class Completion:
    """
    Final signal of a run.

    Attributes:
        successful: True when the loop reached the zero point.
        error: The EvaluationFailure that stopped the run, if any.
        points: Number of points handed to the consumer.
    """
    successful: bool
    error: Optional[Exception] = None
    points: int = 0
