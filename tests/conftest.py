"""Shared fixtures: small hand-made dataset tables."""

import pytest

from omniwave import FixedDatasetTable
from omniwave.core.datasets import DATASET_COUNT, DATASET_FILES, DATASET_SIZE, clear_table_cache


def make_blob(values, separator=", "):
    """Render integers the way dataset blobs are stored."""
    return separator.join(str(v) for v in values)


def ramp_rows():
    """Dataset d holds n * (d + 1) at index n."""
    return [[n * (d + 1) for n in range(DATASET_SIZE)] for d in range(DATASET_COUNT)]


def constant_rows(value):
    return [[value] * DATASET_SIZE for _ in range(DATASET_COUNT)]


@pytest.fixture(autouse=True)
def fresh_table_cache():
    clear_table_cache()
    yield
    clear_table_cache()


@pytest.fixture
def blob():
    return make_blob


@pytest.fixture
def ramp_table():
    return FixedDatasetTable.load([make_blob(row) for row in ramp_rows()])


@pytest.fixture
def zero_table():
    return FixedDatasetTable.load([make_blob(row) for row in constant_rows(0)])


@pytest.fixture
def constant_table():
    def build(value):
        return FixedDatasetTable.load([make_blob(row) for row in constant_rows(value)])
    return build


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding the ramp datasets under their standard file names."""
    for filename, row in zip(DATASET_FILES, ramp_rows()):
        (tmp_path / filename).write_text(make_blob(row, separator="\n"), encoding="utf-8")
    return tmp_path
