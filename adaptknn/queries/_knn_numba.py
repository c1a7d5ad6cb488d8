from __future__ import annotations

import numpy as np

try:  # pragma: no cover - optional dependency
    from numba import njit  # type: ignore

    NUMBA_KNN_AVAILABLE = True
except Exception:  # pragma: no cover - when numba unavailable
    njit = None  # type: ignore
    NUMBA_KNN_AVAILABLE = False


def _knn_search_impl(
    points: np.ndarray,
    point_index: np.ndarray,
    split_dim: np.ndarray,
    left: np.ndarray,
    right: np.ndarray,
    root: int,
    query: np.ndarray,
    weights: np.ndarray,
    k: int,
    stack_nodes: np.ndarray,
    stack_bounds: np.ndarray,
    out_keys: np.ndarray,
    out_indices: np.ndarray,
) -> int:
    """Branch-and-bound k-NN over the node arena.

    ``out_keys`` holds weighted *squared* distances sorted ascending; the
    hyperplane gap pushed with every far child is ``w[d] * (q[d] - p[d])^2``,
    a lower bound on the squared distance of anything across the plane, so
    both sides of the pruning test share one scale. Far children sit on the
    stack below their near sibling and are re-checked against the bound only
    once the near subtree is exhausted. Returns the number of filled slots.
    """

    size = 0
    if root < 0:
        return size
    dimension = points.shape[1]
    stack_nodes[0] = root
    stack_bounds[0] = -1.0
    top = 1

    while top > 0:
        top -= 1
        node = stack_nodes[top]
        bound = stack_bounds[top]
        if size == k and bound >= out_keys[k - 1]:
            continue

        sample = point_index[node]
        key = 0.0
        for j in range(dimension):
            diff = query[j] - points[sample, j]
            key += weights[j] * diff * diff

        # Bounded insertion: shift worse entries right, drop the last when full.
        if size < k or key < out_keys[k - 1]:
            pos = size if size < k else k - 1
            while pos > 0 and out_keys[pos - 1] > key:
                out_keys[pos] = out_keys[pos - 1]
                out_indices[pos] = out_indices[pos - 1]
                pos -= 1
            out_keys[pos] = key
            out_indices[pos] = sample
            if size < k:
                size += 1

        dim = split_dim[node]
        gap = query[dim] - points[sample, dim]
        if gap < 0.0:
            near = left[node]
            far = right[node]
        else:
            near = right[node]
            far = left[node]

        if far >= 0:
            stack_nodes[top] = far
            stack_bounds[top] = weights[dim] * gap * gap
            top += 1
        if near >= 0:
            stack_nodes[top] = near
            stack_bounds[top] = -1.0
            top += 1

    return size


if NUMBA_KNN_AVAILABLE:
    _knn_search_numba = njit(cache=True)(_knn_search_impl)
else:  # pragma: no cover - executed when numba missing
    _knn_search_numba = None


def knn_search(
    points: np.ndarray,
    point_index: np.ndarray,
    split_dim: np.ndarray,
    left: np.ndarray,
    right: np.ndarray,
    root: int,
    height: int,
    query: np.ndarray,
    weights: np.ndarray,
    k: int,
    *,
    use_numba: bool = True,
) -> tuple[np.ndarray, np.ndarray]:
    """Run the search and return ``(squared_keys, sample_indices)`` for the filled slots."""

    # The result can never hold more entries than the tree has points.
    k = min(int(k), int(point_index.shape[0]))
    # One pending far sibling per level on the current path, plus the near child.
    capacity = 2 * max(int(height), 1) + 2
    stack_nodes = np.empty(capacity, dtype=np.int64)
    stack_bounds = np.empty(capacity, dtype=np.float64)
    out_keys = np.full(k, np.inf, dtype=np.float64)
    out_indices = np.full(k, -1, dtype=np.int64)

    kernel = _knn_search_numba if (use_numba and NUMBA_KNN_AVAILABLE) else _knn_search_impl
    size = kernel(
        points,
        point_index,
        split_dim,
        left,
        right,
        int(root),
        query,
        weights,
        int(k),
        stack_nodes,
        stack_bounds,
        out_keys,
        out_indices,
    )
    size = int(size)
    return out_keys[:size], out_indices[:size]


__all__ = ["NUMBA_KNN_AVAILABLE", "knn_search"]
