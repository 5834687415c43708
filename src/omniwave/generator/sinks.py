"""
Point consumers for WaveSequencer.run.

A sink receives every point as it is produced and one completion signal at
the end. Handlers run synchronously on the generating thread, so a slow
handler slows the run.
"""

from typing import Callable, List, Optional, Protocol

from omniwave.generator.types import Completion, WavePoint


class WaveSink(Protocol):
    def on_point(self, point: WavePoint) -> None: ...

    def on_complete(self, completion: Completion) -> None: ...


class CallbackSink:
    """Adapts two optional callables to the WaveSink interface."""

    def __init__(self,
                 on_point: Optional[Callable[[WavePoint], None]] = None,
                 on_complete: Optional[Callable[[Completion], None]] = None):
        self._on_point = on_point
        self._on_complete = on_complete

    def on_point(self, point: WavePoint) -> None:
        if self._on_point is not None:
            self._on_point(point)

    def on_complete(self, completion: Completion) -> None:
        if self._on_complete is not None:
            self._on_complete(completion)


class CollectingSink:
    """Keeps every point and the completion signal."""

    def __init__(self):
        self.points: List[WavePoint] = []
        self.completion: Optional[Completion] = None

    def on_point(self, point: WavePoint) -> None:
        self.points.append(point)

    def on_complete(self, completion: Completion) -> None:
        self.completion = completion

    def __len__(self) -> int:
        return len(self.points)
