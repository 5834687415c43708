"""
Omniwave errors.

Every failure surfaced by the package derives from OmniwaveError so that
callers can catch the whole family in one clause.
"""

from typing import Optional


class OmniwaveError(Exception):
    """Base class for all Omniwave errors."""


class InitializationError(OmniwaveError, ValueError):
    """The fixed dataset table is malformed and cannot be used."""


class InvalidParameterError(OmniwaveError, ValueError):
    """A construction input is out of range or not a number."""


class SequencerBusyError(OmniwaveError, RuntimeError):
    """A second run was started on a sequencer that is already running."""


class EvaluationFailure(OmniwaveError):
    """
    A wave run was aborted by an unexpected error.

    Attributes:
        position: Position being evaluated when the error occurred, or None
            when the error came from the point consumer.
        cause: The original exception (also chained as __cause__).
    """

    def __init__(self, message: str, position: Optional[float] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.position = position
        self.cause = cause
