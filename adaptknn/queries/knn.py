from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np

from adaptknn import config as ak_config
from adaptknn.core.distance import as_vector
from adaptknn.core.tree import KDTree
from adaptknn.errors import InvalidK
from adaptknn.logging import get_logger

from ._knn_numba import knn_search

LOGGER = get_logger("queries.knn")


@dataclass(frozen=True)
class NeighborCandidate:
    distance: float
    index: int


def validate_k(k: int) -> int:
    if isinstance(k, bool) or int(k) != k or k <= 0:
        raise InvalidK(k)
    return int(k)


def _resolve_weights(tree: KDTree, weights: Any | None) -> np.ndarray:
    if weights is None:
        return np.ones(tree.dimension, dtype=np.float64)
    return as_vector(weights, dimension=tree.dimension, what="weight vector")


def knn(
    tree: KDTree,
    query: Any,
    k: int,
    weights: Any | None = None,
    *,
    return_distances: bool = False,
) -> Any:
    """Return the ``k`` samples nearest to ``query`` in ascending distance order.

    Fewer than ``k`` indices come back when the tree holds fewer points and an
    empty tree yields an empty result. With ``return_distances`` the result is
    ``(indices, distances)`` where distances are (weighted) Euclidean.
    """

    k = validate_k(k)
    # A tree over zero rows of undeclared width accepts any query.
    width = tree.dimension if (tree.dimension or not tree.is_empty()) else None
    query_vec = as_vector(query, dimension=width, what="query vector")
    weight_vec = _resolve_weights(tree, weights) if width is not None else None

    if tree.is_empty():
        indices = np.empty(0, dtype=np.int64)
        distances = np.empty(0, dtype=np.float64)
    else:
        runtime = ak_config.runtime_config()
        keys, indices = knn_search(
            tree.dataset.features,
            tree.point_index,
            tree.split_dim,
            tree.left,
            tree.right,
            tree.root,
            tree.height,
            query_vec,
            weight_vec,
            k,
            use_numba=runtime.enable_numba,
        )
        distances = np.sqrt(keys)

    LOGGER.debug("k-NN query k=%d returned %d neighbours", k, indices.shape[0])
    if return_distances:
        return indices, distances
    return indices


def find_k_nearest(tree: KDTree, query: Any, k: int, weights: Any | None = None) -> List[int]:
    """Sample indices of the ``k`` nearest points, closest first."""

    return [int(idx) for idx in knn(tree, query, k, weights)]


def nearest_candidates(
    tree: KDTree, query: Any, k: int, weights: Any | None = None
) -> Tuple[NeighborCandidate, ...]:
    indices, distances = knn(tree, query, k, weights, return_distances=True)
    return tuple(
        NeighborCandidate(distance=float(dist), index=int(idx))
        for idx, dist in zip(indices, distances)
    )


def query_batch(
    tree: KDTree, queries: Any, k: int, weights: Any | None = None
) -> List[np.ndarray]:
    """Run independent queries under one fixed weight vector."""

    batch = np.asarray(queries, dtype=np.float64)
    if batch.ndim == 1:
        batch = batch.reshape(1, -1)
    return [knn(tree, row, k, weights) for row in batch]


__all__ = [
    "NeighborCandidate",
    "knn",
    "find_k_nearest",
    "nearest_candidates",
    "query_batch",
]
