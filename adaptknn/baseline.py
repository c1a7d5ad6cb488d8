"""Dense brute-force reference for weighted k-NN, evaluated with jax.numpy."""

from __future__ import annotations

from typing import Any, Tuple

import jax.numpy as jnp
import numpy as np

from adaptknn import config as ak_config
from adaptknn.core.dataset import Dataset
from adaptknn.core.distance import as_vector
from adaptknn.queries.knn import validate_k


class BaselineKNN:
    """Scores every stored point per query; used as the exactness oracle for the tree."""

    def __init__(self, dataset: Dataset) -> None:
        runtime = ak_config.runtime_config()
        self._dtype = jnp.float64 if runtime.jax_enable_x64 else jnp.float32
        self.dataset = dataset
        self._points = jnp.asarray(dataset.features, dtype=self._dtype)

    def squared_distances(self, query: Any, weights: Any | None = None) -> np.ndarray:
        dimension = self.dataset.dimension
        query_arr = jnp.asarray(as_vector(query, dimension=dimension), dtype=self._dtype)
        if weights is None:
            weight_arr = jnp.ones((dimension,), dtype=self._dtype)
        else:
            weight_arr = jnp.asarray(
                as_vector(weights, dimension=dimension, what="weight vector"), dtype=self._dtype
            )
        diff = self._points - query_arr[None, :]
        return np.asarray(jnp.sum(weight_arr[None, :] * diff * diff, axis=-1))

    def knn(self, query: Any, k: int, weights: Any | None = None) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(indices, distances)`` of the ``k`` closest points, ascending."""

        k = validate_k(k)
        if self.dataset.is_empty():
            return np.empty(0, dtype=np.int64), np.empty(0, dtype=np.float64)
        keys = self.squared_distances(query, weights)
        order = np.argsort(keys, kind="stable")[:k]
        return order.astype(np.int64), np.sqrt(keys[order].astype(np.float64))


__all__ = ["BaselineKNN"]
