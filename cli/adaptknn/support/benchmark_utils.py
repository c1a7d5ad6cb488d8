from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.random import default_rng

from adaptknn.baseline import BaselineKNN
from adaptknn.classifier import Classifier
from adaptknn.core.dataset import Dataset
from adaptknn.core.tree import build_tree
from adaptknn.queries.knn import knn

from .synthetic import gaussian_points, labelled_dataset


@dataclass(frozen=True)
class QueryBenchmarkResult:
    elapsed_seconds: float
    queries: int
    k: int
    latency_ms: float
    queries_per_second: float
    build_seconds: float
    baseline_mismatches: int | None = None


@dataclass(frozen=True)
class ClassificationRunResult:
    mode: str
    predictions: np.ndarray
    accuracy: float
    final_weights: np.ndarray
    elapsed_seconds: float


def execute_query_benchmark(
    *,
    dimension: int,
    tree_points: int,
    queries: int,
    k: int,
    seed: int,
    weights: Sequence[float] | None = None,
    compare_baseline: bool = False,
) -> QueryBenchmarkResult:
    rng = default_rng(seed)
    dataset = Dataset.from_arrays(gaussian_points(rng, tree_points, dimension))
    query_points = gaussian_points(rng, queries, dimension)

    start = time.perf_counter()
    tree = build_tree(dataset)
    build_seconds = time.perf_counter() - start

    results = []
    start = time.perf_counter()
    for row in query_points:
        results.append(knn(tree, row, k, weights, return_distances=True))
    elapsed = time.perf_counter() - start

    mismatches = None
    if compare_baseline:
        baseline = BaselineKNN(dataset)
        mismatches = 0
        for row, (_, distances) in zip(query_points, results):
            _, expected = baseline.knn(row, k, weights)
            if not np.allclose(distances, expected, rtol=1e-9, atol=1e-12):
                mismatches += 1

    latency_ms = (elapsed / queries) * 1e3 if queries else 0.0
    qps = queries / elapsed if elapsed > 0 else float("inf")
    return QueryBenchmarkResult(
        elapsed_seconds=elapsed,
        queries=queries,
        k=k,
        latency_ms=latency_ms,
        queries_per_second=qps,
        build_seconds=build_seconds,
        baseline_mismatches=mismatches,
    )


def execute_classification_run(
    *,
    mode: str,
    dimension: int,
    train_points: int,
    test_points: int,
    k: int,
    seed: int,
    weights: Sequence[float] | None = None,
) -> ClassificationRunResult:
    rng = default_rng(seed)
    train = labelled_dataset(rng, train_points, dimension)
    test = labelled_dataset(rng, test_points, dimension)
    tree = build_tree(train)
    if mode == "adaptive":
        classifier = Classifier.adaptive(tree)
    else:
        classifier = Classifier.static(tree, weights)

    start = time.perf_counter()
    predictions = classifier.predict(test, k)
    elapsed = time.perf_counter() - start
    accuracy = float(np.mean(predictions == test.labels)) if test_points else 0.0
    return ClassificationRunResult(
        mode=mode,
        predictions=predictions,
        accuracy=accuracy,
        final_weights=np.asarray(classifier.current_weights()),
        elapsed_seconds=elapsed,
    )


__all__ = [
    "QueryBenchmarkResult",
    "ClassificationRunResult",
    "execute_query_benchmark",
    "execute_classification_run",
]
