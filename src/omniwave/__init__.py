"""
Omniwave — timewave calculation over four fixed datasets.

Omniwave walks backward from a number of days before a zero point and, at
every step, samples four fixed 384-value datasets across the octaves of a
wave factor. Each step yields one WavePoint carrying a value per dataset.

Key Properties:
- Deterministic: identical inputs give bit-identical points
- Bounded: every evaluated point terminates, converged or not
- Shared tables: datasets are parsed once and shared read-only
- Awaitable: the same loop runs blocking, lazily or in an executor

Example:
    >>> from omniwave import FixedDatasetTable, WaveSequencer, CollectingSink
    >>> table = FixedDatasetTable.from_directory("data")
    >>> sequencer = WaveSequencer(1.0, 0.0, 60, 64, table=table)
    >>> sink = CollectingSink()
    >>> completion = sequencer.run(sink)
    >>> len(sink.points)
    24

License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Errors
from .errors import (
    OmniwaveError,
    InitializationError,
    InvalidParameterError,
    EvaluationFailure,
    SequencerBusyError,
)

# Configuration
from .config import WaveProperties, load_properties

# Core tables and evaluation
from .core.powers import PowerTable
from .core.datasets import FixedDatasetTable, load_table
from .core.evaluator import PointEvaluator, evaluate

# Generation
from .generator.types import WaveType, WavePoint, Completion, SequencerState
from .generator.sinks import WaveSink, CallbackSink, CollectingSink
from .generator.sequencer import WaveSequencer, CancellationToken
from .generator.metrics import WaveSummary, summarize


# Command line - LAZY LOADING (pulls in argparse and dotenv)
def __getattr__(name):
    """Lazy load the command line entry point."""
    if name == "main":
        from .cli import main
        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Errors
    "OmniwaveError",
    "InitializationError",
    "InvalidParameterError",
    "EvaluationFailure",
    "SequencerBusyError",
    # Configuration
    "WaveProperties",
    "load_properties",
    # Core
    "PowerTable",
    "FixedDatasetTable",
    "load_table",
    "PointEvaluator",
    "evaluate",
    # Generation
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
    # CLI (lazy-loaded)
    "main",
]


def get_version() -> str:
    """Return the current Omniwave version."""
    return __version__
