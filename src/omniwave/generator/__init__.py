"""
Omniwave generator — stepping the wave toward the zero point.

  - WaveSequencer: runs the loop (blocking, awaitable or lazy)
  - WavePoint / Completion: what consumers receive
  - Sinks: callback and collecting consumers
  - Metrics: summary statistics of a finished wave
"""

from omniwave.generator.types import (
    WaveType,
    WavePoint,
    Completion,
    SequencerState,
)
from omniwave.generator.sinks import WaveSink, CallbackSink, CollectingSink
from omniwave.generator.sequencer import WaveSequencer, CancellationToken
from omniwave.generator.metrics import WaveSummary, summarize, to_array

__all__ = [
    "WaveType",
    "WavePoint",
    "Completion",
    "SequencerState",
    "WaveSink",
    "CallbackSink",
    "CollectingSink",
    "WaveSequencer",
    "CancellationToken",
    "WaveSummary",
    "summarize",
    "to_array",
]
