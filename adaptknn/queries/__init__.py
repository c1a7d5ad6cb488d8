"""Weighted k-nearest-neighbour queries over a built tree."""

from ._knn_numba import NUMBA_KNN_AVAILABLE
from .knn import NeighborCandidate, find_k_nearest, knn, nearest_candidates, query_batch

__all__ = [
    "NUMBA_KNN_AVAILABLE",
    "NeighborCandidate",
    "find_k_nearest",
    "knn",
    "nearest_candidates",
    "query_batch",
]
