"""
Fixed dataset table — the four 384-value sampling tables.

Each dataset arrives as a text blob of digits separated by anything that is
not a digit. The blobs are parsed once into a read-only 4 x 384 integer
table that every sequencer can share without locking.
"""

import logging
import re
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np

from omniwave.errors import InitializationError

logger = logging.getLogger(__name__)

DATASET_COUNT = 4
DATASET_SIZE = 384

# Entries must fit a signed 32-bit integer
MAX_ENTRY = 2 ** 31 - 1

# File names read by FixedDatasetTable.from_directory, in dataset order
DATASET_FILES = ("kelley.txt", "watkins.txt", "sheliak.txt", "huangti.txt")

_SEPARATOR = re.compile(r"\D+")

RawSource = Union[str, bytes]


def parse_dataset(source: RawSource, name: str = "dataset") -> Tuple[int, ...]:
    """
    Parse one digit-separated blob into its integers.

    Runs of non-digit characters separate tokens; empty tokens are dropped.

    Raises:
        InitializationError: if the blob is not text, a token does not
            parse, or a value exceeds the 32-bit integer range.
    """
    if isinstance(source, (bytes, bytearray)):
        try:
            source = bytes(source).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InitializationError(f"{name}: not valid UTF-8 text ({exc})") from exc
    if not isinstance(source, str):
        raise InitializationError(
            f"{name}: expected text or bytes, got {type(source).__name__}")

    values = []
    for token in _SEPARATOR.split(source):
        if not token:
            continue
        try:
            value = int(token)
        except ValueError as exc:
            raise InitializationError(f"{name}: cannot parse token {token!r}") from exc
        if value > MAX_ENTRY:
            raise InitializationError(f"{name}: value {token} is out of range")
        values.append(value)
    return tuple(values)


@dataclass(frozen=True, eq=False)
class FixedDatasetTable:
    """
    Four parallel sets of 384 integers.

    Attributes:
        values: (4, 384) int64 array, read-only.
        rows: The same entries as tuples of Python ints, used by the
            evaluator's inner loop.
    """
    values: np.ndarray = field(repr=False)
    rows: Tuple[Tuple[int, ...], ...] = field(repr=False)

    @classmethod
    def load(cls, sources: Sequence[RawSource]) -> 'FixedDatasetTable':
        """
        Build the table from four raw blobs.

        Raises:
            InitializationError: wrong number of blobs, or any blob that does
                not yield exactly 384 integers.
        """
        sources = list(sources)
        if len(sources) != DATASET_COUNT:
            raise InitializationError(
                f"Expected {DATASET_COUNT} datasets, got {len(sources)}")

        rows = []
        for index, source in enumerate(sources):
            name = f"dataset {index}"
            row = parse_dataset(source, name)
            if len(row) != DATASET_SIZE:
                raise InitializationError(
                    f"{name}: expected {DATASET_SIZE} entries, got {len(row)}")
            rows.append(row)

        values = np.array(rows, dtype=np.int64)
        values.flags.writeable = False
        return cls(values=values, rows=tuple(rows))

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> 'FixedDatasetTable':
        """Load the four blobs from the DATASET_FILES inside a directory."""
        directory = Path(directory)
        sources = []
        for filename in DATASET_FILES:
            path = directory / filename
            try:
                sources.append(path.read_bytes())
            except OSError as exc:
                raise InitializationError(f"Cannot read dataset file {path}: {exc}") from exc
        table = cls.load(sources)
        logger.info(f"Loaded {DATASET_COUNT} datasets from {directory}")
        return table

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    def value(self, dataset: int, index: int) -> int:
        return self.rows[dataset][index]

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"FixedDatasetTable(datasets={len(self.rows)}, size={DATASET_SIZE})"


_cache_lock = threading.Lock()


@lru_cache(maxsize=None)
def _load_cached(directory: str) -> FixedDatasetTable:
    return FixedDatasetTable.from_directory(directory)


def load_table(directory: Union[str, Path]) -> FixedDatasetTable:
    """
    Process-wide cached table for a data directory.

    The directory is read once; later calls return the same instance.
    Failed loads are not cached.
    """
    key = str(Path(directory).resolve())
    with _cache_lock:
        hits = _load_cached.cache_info().hits
        table = _load_cached(key)
        if _load_cached.cache_info().hits > hits:
            logger.debug(f"Dataset cache hit for {key}")
    return table


def clear_table_cache() -> None:
    """Forget every cached table."""
    with _cache_lock:
        _load_cached.cache_clear()
