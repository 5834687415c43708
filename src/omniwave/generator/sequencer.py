"""
Wave sequencer — drives the stepping loop.

Starting at days_before, each step evaluates all four datasets at the
current position, hands the point to the consumer, and moves one step
closer to zero. The loop ends when the position is no longer positive.

    sequencer = WaveSequencer(31, 0.01, 60, 64, table=table)
    completion = sequencer.run(sink)            # blocking
    completion = await sequencer.run_async(sink)  # in an executor
    for point in sequencer.points(): ...        # lazy

All three entry points share one stepping algorithm (_stream).
"""

import asyncio
import functools
import logging
import threading
from concurrent.futures import Executor
from typing import Iterator, List, Optional

from omniwave.config import minutes_to_days, validate_parameters, data_directory, WaveProperties
from omniwave.core.datasets import FixedDatasetTable, load_table
from omniwave.core.evaluator import ITERATION_CEILING, PointEvaluator
from omniwave.core.powers import PowerTable
from omniwave.errors import EvaluationFailure, InvalidParameterError, SequencerBusyError
from omniwave.generator.sinks import WaveSink
from omniwave.generator.types import Completion, SequencerState, WavePoint, WaveType

logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe flag checked by the sequencer once per step."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class WaveSequencer:
    """
    Generates the wave from days_before down to the zero point.

    Args:
        days_before: Starting position in days (> 0).
        days_after: Days past the zero point. Stored negated as `bailout`;
            generation stops at zero and never reads it.
        interval_minutes: Step between points, in minutes (> 0).
        wave_factor: Scale factor of the power table (2 - 10,000).
        wave_type: Dataset selector. All datasets are always computed; the
            selector is kept for consumers.
        table: Sampling datasets. Defaults to the cached table of the
            configured data directory.
        max_iterations: Descending-phase bound passed to the evaluator.

    Raises:
        InvalidParameterError: on out-of-range inputs, before any state is
            created.

    One run per instance at a time. A finished sequencer can be run again
    and produces the same points.
    """

    def __init__(self,
                 days_before: float,
                 days_after: float,
                 interval_minutes: float,
                 wave_factor: int,
                 wave_type: WaveType = WaveType.KELLEY,
                 table: Optional[FixedDatasetTable] = None,
                 max_iterations: int = ITERATION_CEILING):
        days_before, days_after, interval_minutes, wave_factor = validate_parameters(
            days_before, days_after, interval_minutes, wave_factor)
        try:
            wave_type = WaveType(wave_type)
        except ValueError:
            raise InvalidParameterError(f"Unknown wave type: {wave_type!r}") from None

        if table is None:
            table = load_table(data_directory())

        self.wave_type = wave_type
        self.singularity = days_before
        self.bailout = -days_after
        self.step = minutes_to_days(interval_minutes)
        self.wave_factor = wave_factor
        self.table = table
        self.powers = PowerTable.build(wave_factor)
        self.evaluator = PointEvaluator(table, self.powers, max_iterations)

        self._state = SequencerState.READY
        self._lock = threading.Lock()

    @classmethod
    def from_properties(cls, properties: WaveProperties, **kwargs) -> 'WaveSequencer':
        return cls(properties.days_before, properties.days_after,
                   properties.interval_minutes, properties.wave_factor, **kwargs)

    @property
    def state(self) -> SequencerState:
        return self._state

    def _enter(self) -> None:
        with self._lock:
            if self._state is SequencerState.RUNNING:
                raise SequencerBusyError("This wave is already being generated.")
            self._state = SequencerState.RUNNING
        logger.debug(f"Generating wave: singularity={self.singularity}, "
                     f"step={self.step}, wave_factor={self.wave_factor}")

    def _build_point(self, position: float) -> WavePoint:
        return WavePoint(position=position, values=self.evaluator.evaluate_all(position))

    def _stream(self, cancel: Optional[CancellationToken]) -> Iterator[WavePoint]:
        # Caller has already moved the state to RUNNING.
        index = 0
        try:
            while True:
                position = self.singularity - index * self.step
                if not position > 0:
                    break
                if cancel is not None and cancel.cancelled:
                    self._state = SequencerState.CANCELLED
                    logger.info(f"Wave generation cancelled after {index} points")
                    return
                try:
                    point = self._build_point(position)
                except Exception as exc:
                    self._state = SequencerState.FAILED
                    raise EvaluationFailure(
                        f"Wave evaluation failed at position {position!r}: {exc}",
                        position=position, cause=exc) from exc
                yield point
                index += 1
        except GeneratorExit:
            if self._state is SequencerState.RUNNING:
                self._state = SequencerState.CANCELLED
            raise
        self._state = SequencerState.COMPLETED
        logger.debug(f"Wave generated: {index} points")

    def points(self, cancel: Optional[CancellationToken] = None) -> Iterator[WavePoint]:
        """
        Lazy sequence of points.

        Raises (on first iteration):
            SequencerBusyError: if a run is already in progress.
        Raises (while iterating):
            EvaluationFailure: when a step fails.
        """
        self._enter()
        yield from self._stream(cancel)

    def run(self, sink: WaveSink, cancel: Optional[CancellationToken] = None) -> Completion:
        """
        Generate the whole wave, pushing points into a sink.

        Any error raised by a step or by sink.on_point ends the run; it is
        reported through sink.on_complete and the returned Completion rather
        than raised.
        """
        self._enter()
        stream = self._stream(cancel)
        emitted = 0
        try:
            for point in stream:
                sink.on_point(point)
                emitted += 1
        except Exception as exc:
            stream.close()
            self._state = SequencerState.FAILED
            if isinstance(exc, EvaluationFailure):
                failure = exc
            else:
                failure = EvaluationFailure(
                    f"Point handler failed after {emitted} points: {exc}", cause=exc)
                failure.__cause__ = exc
            logger.error(f"Wave generation failed: {failure}")
            completion = Completion(successful=False, error=failure, points=emitted)
        else:
            completion = Completion(
                successful=self._state is SequencerState.COMPLETED, points=emitted)

        sink.on_complete(completion)
        return completion

    async def run_async(self, sink: WaveSink,
                        cancel: Optional[CancellationToken] = None,
                        executor: Optional[Executor] = None) -> Completion:
        """
        Awaitable form of run().

        The loop runs in `executor` (the event loop's default executor when
        None), so the caller's loop stays free. Sink handlers are called
        from that executor's thread.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            executor, functools.partial(self.run, sink, cancel))

    def collect(self, cancel: Optional[CancellationToken] = None) -> List[WavePoint]:
        """All points as a list. Raises EvaluationFailure on failure."""
        return list(self.points(cancel))

    def __repr__(self) -> str:
        return (f"WaveSequencer(singularity={self.singularity}, step={self.step:.6f}, "
                f"wave_factor={self.wave_factor}, state={self._state.value})")
