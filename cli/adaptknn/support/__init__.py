"""Synthetic data and timing helpers shared by CLI subcommands."""

from .benchmark_utils import (
    ClassificationRunResult,
    QueryBenchmarkResult,
    execute_classification_run,
    execute_query_benchmark,
)
from .synthetic import gaussian_points, labelled_dataset

__all__ = [
    "ClassificationRunResult",
    "QueryBenchmarkResult",
    "execute_classification_run",
    "execute_query_benchmark",
    "gaussian_points",
    "labelled_dataset",
]
