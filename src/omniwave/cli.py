#!/usr/bin/env python3
"""
Command line entry point for Omniwave.

Usage:
    omniwave                                  # configured defaults
    omniwave 31 0.01 60 64                    # days before, days after,
                                              # interval (minutes), wave factor
    omniwave 7 0 30 64 --data-dir ./data --summary

Settings not given on the command line come from OMNIWAVE_* environment
variables, which may be placed in a .env file.
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from omniwave import __version__
from omniwave.config import (
    ENV_LOG_LEVEL,
    MAX_WAVE_FACTOR,
    MIN_WAVE_FACTOR,
    OUTPUT_PRECISION,
    WaveProperties,
    data_directory,
    load_properties,
)
from omniwave.core.datasets import load_table
from omniwave.errors import InitializationError, InvalidParameterError
from omniwave.generator.metrics import summarize
from omniwave.generator.sequencer import WaveSequencer
from omniwave.generator.types import Completion, WavePoint

logger = logging.getLogger(__name__)

USAGE_ARGUMENTS = "{daysUntilSingularity} {daysAfterSingularity} {timeInterval} {waveFactor}"


def _timestamp() -> str:
    now = datetime.now()
    return f"{now:%m/%d/%Y} - {now:%H:%M:%S}"


def print_output(message: str, marker: str = "-", stream=None) -> None:
    """Print one console line: [timestamp] [marker]: message."""
    stream = stream or sys.stdout
    print(f"[{_timestamp()}] [{marker}]: {message}", file=stream, flush=True)


class ConsoleSink:
    """Writes every point to the console, optionally keeping them for a summary."""

    def __init__(self, precision: int = OUTPUT_PRECISION, keep: bool = False):
        self.precision = precision
        self.points: Optional[List[WavePoint]] = [] if keep else None
        self.completion: Optional[Completion] = None

    def on_point(self, point: WavePoint) -> None:
        print_output(point.format(self.precision), "#")
        if self.points is not None:
            self.points.append(point)

    def on_complete(self, completion: Completion) -> None:
        self.completion = completion
        if completion.successful:
            print_output("Wave generated successfully!", "+")
        elif completion.error is not None:
            print_output(str(completion.error), "x")
        else:
            print_output("The wave could not be generated.", "x")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omniwave",
        description="Calculates a timewave to a given point.",
        usage=f"%(prog)s [-h] [options] [{USAGE_ARGUMENTS}]",
    )
    parser.add_argument(
        "values", nargs="*", metavar="VALUE",
        help="days before the zero point, days after it, interval in minutes, wave factor")
    parser.add_argument(
        "--data-dir", default=None,
        help="directory with kelley.txt, watkins.txt, sheliak.txt, huangti.txt "
             "(default: $OMNIWAVE_DATA_DIR or ./data)")
    parser.add_argument(
        "--precision", type=int, default=OUTPUT_PRECISION,
        help=f"fractional digits per value (default: {OUTPUT_PRECISION})")
    parser.add_argument(
        "--summary", action="store_true",
        help="print summary statistics after the wave")
    parser.add_argument(
        "--async", dest="use_async", action="store_true",
        help="run the generator through asyncio")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="enable debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_properties(values: Sequence[str]) -> WaveProperties:
    """
    Turn the positional arguments into WaveProperties.

    No values means configured defaults; otherwise all four are required.

    Raises:
        InvalidParameterError: with a message suitable for the user.
    """
    if not values:
        return load_properties()
    if len(values) < 4:
        raise InvalidParameterError(
            "All arguments are required in order for Omniwave to function properly.")
    if len(values) > 4:
        raise InvalidParameterError("Omniwave only accepts a total of 4 arguments.")

    names = ("singularity", "bailout", "time interval", "wave factor")
    parsed = []
    for name, raw in zip(names, values):
        try:
            parsed.append(int(raw) if name == "wave factor" else float(raw))
        except ValueError:
            raise InvalidParameterError(f"The {name} must be a number, got {raw!r}.") from None
        if parsed[-1] < 0:
            raise InvalidParameterError(f"The {name} cannot be a negative number.")

    if not MIN_WAVE_FACTOR <= parsed[3] <= MAX_WAVE_FACTOR:
        raise InvalidParameterError(
            f"The wave factor must be an integer within "
            f"{MIN_WAVE_FACTOR} - {MAX_WAVE_FACTOR:,}.")

    return WaveProperties(*parsed).validate()


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else os.getenv(ENV_LOG_LEVEL, "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line interface. Returns the process exit code."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        properties = parse_properties(args.values)
    except InvalidParameterError as e:
        print_output(str(e), "x", stream=sys.stderr)
        parser.print_usage(sys.stderr)
        return 2

    directory = args.data_dir or data_directory()
    try:
        table = load_table(directory)
    except InitializationError as e:
        print_output(f"Cannot load datasets: {e}", "x", stream=sys.stderr)
        return 1

    sequencer = WaveSequencer.from_properties(properties, table=table)
    sink = ConsoleSink(precision=args.precision, keep=args.summary)
    logger.debug(f"Running {sequencer!r}")

    try:
        if args.use_async:
            completion = asyncio.run(sequencer.run_async(sink))
        else:
            completion = sequencer.run(sink)
    except KeyboardInterrupt:
        print_output("Interrupted.", "!", stream=sys.stderr)
        return 130

    if args.summary and sink.points is not None:
        print(summarize(sink.points).summary())

    return 0 if completion.successful else 1


if __name__ == "__main__":
    sys.exit(main())
