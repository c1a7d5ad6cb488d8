from __future__ import annotations

from typing import Any

import numpy as np

from adaptknn.errors import DimensionMismatch


def as_vector(values: Any, *, dimension: int | None = None, what: str = "vector") -> np.ndarray:
    """Return ``values`` as a contiguous 1-D float64 array, checking its length."""

    vector = np.ascontiguousarray(values, dtype=np.float64).reshape(-1)
    if dimension is not None and vector.shape[0] != dimension:
        raise DimensionMismatch(dimension, int(vector.shape[0]), what=what)
    return vector


def squared_distance(a: Any, b: Any, weights: Any | None = None) -> float:
    """Sum of (optionally weighted) squared coordinate differences."""

    a_vec = as_vector(a)
    b_vec = as_vector(b, dimension=a_vec.shape[0])
    diff = a_vec - b_vec
    if weights is None:
        return float(np.sum(diff * diff))
    w_vec = as_vector(weights, dimension=a_vec.shape[0], what="weight vector")
    # (w * diff) * diff reduces to diff * diff exactly when w == 1.
    return float(np.sum(w_vec * diff * diff))


def distance(a: Any, b: Any, weights: Any | None = None) -> float:
    """Euclidean distance, or ``sqrt(sum(w_i * (a_i - b_i)^2))`` with weights."""

    return float(np.sqrt(squared_distance(a, b, weights)))


def euclidean_distance(a: Any, b: Any) -> float:
    return distance(a, b)


def weighted_euclidean_distance(a: Any, b: Any, weights: Any) -> float:
    return distance(a, b, weights)


__all__ = [
    "as_vector",
    "distance",
    "squared_distance",
    "euclidean_distance",
    "weighted_euclidean_distance",
]
