"""
Omniwave core — tables and the point evaluation algorithm.

  - PowerTable: 64 successive powers of the wave factor
  - FixedDatasetTable: the four 384-value sampling datasets
  - PointEvaluator: interpolated lookup and power-weighted summation
"""

from omniwave.core.powers import PowerTable, build_powers, POWER_COUNT
from omniwave.core.datasets import (
    FixedDatasetTable,
    parse_dataset,
    load_table,
    clear_table_cache,
    DATASET_COUNT,
    DATASET_SIZE,
    DATASET_FILES,
)
from omniwave.core.evaluator import (
    PointEvaluator,
    sample,
    sample_row,
    evaluate,
    ITERATION_CEILING,
)

__all__ = [
    "PowerTable",
    "build_powers",
    "POWER_COUNT",
    "FixedDatasetTable",
    "parse_dataset",
    "load_table",
    "clear_table_cache",
    "DATASET_COUNT",
    "DATASET_SIZE",
    "DATASET_FILES",
    "PointEvaluator",
    "sample",
    "sample_row",
    "evaluate",
    "ITERATION_CEILING",
]
