"""
Omniwave configuration.

Defaults for a wave run, validation of the four run parameters, and loading
of overrides from the environment (OMNIWAVE_* variables, optionally from a
.env file loaded by the command line front end).
"""

import math
import os
from dataclasses import dataclass
from numbers import Integral, Real
from pathlib import Path
from typing import Mapping, Optional

from omniwave.errors import InvalidParameterError

# Run defaults
DEFAULT_DAYS_BEFORE = 31.0
DEFAULT_DAYS_AFTER = 0.01
DEFAULT_INTERVAL_MINUTES = 60.0
DEFAULT_WAVE_FACTOR = 64

# Accepted wave factor range
MIN_WAVE_FACTOR = 2
MAX_WAVE_FACTOR = 10000

# Fractional digits used when a point is rendered as text
OUTPUT_PRECISION = 16

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24

DEFAULT_DATA_DIR = "./data"

ENV_DAYS_BEFORE = "OMNIWAVE_DAYS_BEFORE"
ENV_DAYS_AFTER = "OMNIWAVE_DAYS_AFTER"
ENV_INTERVAL = "OMNIWAVE_INTERVAL"
ENV_WAVE_FACTOR = "OMNIWAVE_WAVE_FACTOR"
ENV_DATA_DIR = "OMNIWAVE_DATA_DIR"
ENV_LOG_LEVEL = "OMNIWAVE_LOG_LEVEL"


def minutes_to_days(minutes: float) -> float:
    """Convert an interval in minutes to a fraction of a day."""
    return minutes / MINUTES_PER_HOUR / HOURS_PER_DAY


def _check_real(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameterError(f"The {name} must be a number, got {value!r}.")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"The {name} must be a finite number.")
    return value


def validate_parameters(days_before, days_after, interval_minutes, wave_factor):
    """
    Check the four run parameters.

    Returns:
        (days_before, days_after, interval_minutes, wave_factor) normalized
        to float, float, float, int.

    Raises:
        InvalidParameterError: on the first parameter that is out of range.
    """
    days_before = _check_real("singularity", days_before)
    days_after = _check_real("bailout", days_after)
    interval_minutes = _check_real("time interval", interval_minutes)

    if days_before <= 0:
        raise InvalidParameterError("The singularity must be a positive number.")
    if days_after < 0:
        raise InvalidParameterError("The bailout cannot be a negative number.")
    if interval_minutes <= 0:
        raise InvalidParameterError("The time interval must be a positive number.")

    if isinstance(wave_factor, bool) or not isinstance(wave_factor, Integral):
        raise InvalidParameterError(
            f"The wave factor must be an integer, got {wave_factor!r}.")
    wave_factor = int(wave_factor)
    if not MIN_WAVE_FACTOR <= wave_factor <= MAX_WAVE_FACTOR:
        raise InvalidParameterError(
            f"The wave factor must be an integer within "
            f"{MIN_WAVE_FACTOR} - {MAX_WAVE_FACTOR:,}.")

    return days_before, days_after, interval_minutes, wave_factor


@dataclass(frozen=True)
class WaveProperties:
    """
    The parameters of one wave run.

    Attributes:
        days_before: Days before the zero point at which the wave starts.
        days_after: Days after the zero point (kept for the bailout, unused
            by generation).
        interval_minutes: Step between points, in minutes.
        wave_factor: Scale factor of the power table (2 - 10,000).
    """
    days_before: float = DEFAULT_DAYS_BEFORE
    days_after: float = DEFAULT_DAYS_AFTER
    interval_minutes: float = DEFAULT_INTERVAL_MINUTES
    wave_factor: int = DEFAULT_WAVE_FACTOR

    def validate(self) -> 'WaveProperties':
        """Return a normalized copy, raising InvalidParameterError if invalid."""
        return WaveProperties(*validate_parameters(
            self.days_before, self.days_after,
            self.interval_minutes, self.wave_factor))

    @property
    def step(self) -> float:
        """Step size as a fraction of a day."""
        return minutes_to_days(self.interval_minutes)

    @property
    def bailout(self) -> float:
        return -self.days_after


def _env_value(environ: Mapping[str, str], key: str, convert, default):
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        raise InvalidParameterError(f"{key}={raw!r} is not a valid value.")


def load_properties(environ: Optional[Mapping[str, str]] = None) -> WaveProperties:
    """
    Build WaveProperties from OMNIWAVE_* environment variables.

    Unset variables fall back to the defaults. The result is validated.
    """
    env = os.environ if environ is None else environ
    props = WaveProperties(
        days_before=_env_value(env, ENV_DAYS_BEFORE, float, DEFAULT_DAYS_BEFORE),
        days_after=_env_value(env, ENV_DAYS_AFTER, float, DEFAULT_DAYS_AFTER),
        interval_minutes=_env_value(env, ENV_INTERVAL, float, DEFAULT_INTERVAL_MINUTES),
        wave_factor=_env_value(env, ENV_WAVE_FACTOR, int, DEFAULT_WAVE_FACTOR),
    )
    return props.validate()


def data_directory(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Directory holding the four dataset files (OMNIWAVE_DATA_DIR)."""
    env = os.environ if environ is None else environ
    return Path(env.get(ENV_DATA_DIR) or DEFAULT_DATA_DIR)
