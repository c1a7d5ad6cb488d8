from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from adaptknn.core.dataset import Dataset
from adaptknn.logging import get_logger

LOGGER = get_logger("core.tree")

NO_CHILD = -1


@dataclass(frozen=True, eq=False)
class KDTree:
    """Median-split binary space-partitioning tree stored as a node arena.

    Node ``i`` refers to sample ``point_index[i]`` of ``dataset`` and splits on
    ``split_dim[i]``; ``left[i]``/``right[i]`` hold child node ids or
    ``NO_CHILD``. Nodes are laid out in pre-order, so ``root`` is 0 for any
    non-empty tree. The tree only borrows the dataset's feature array.
    """

    dataset: Dataset
    point_index: np.ndarray
    split_dim: np.ndarray
    left: np.ndarray
    right: np.ndarray
    root: int
    height: int

    @property
    def dimension(self) -> int:
        return self.dataset.dimension

    @property
    def num_points(self) -> int:
        return int(self.point_index.shape[0])

    def is_empty(self) -> bool:
        return self.root == NO_CHILD

    def subtree_size(self, node: int) -> int:
        if node == NO_CHILD:
            return 0
        count = 0
        pending = [node]
        while pending:
            current = pending.pop()
            count += 1
            for child in (int(self.left[current]), int(self.right[current])):
                if child != NO_CHILD:
                    pending.append(child)
        return count

    def validate(self) -> None:
        """Check the partition invariant at every node; raise ``ValueError`` on failure."""

        if self.is_empty():
            return
        features = self.dataset.features
        for node in range(self.num_points):
            dim = int(self.split_dim[node])
            pivot = features[self.point_index[node], dim]
            for child, side in ((int(self.left[node]), "left"), (int(self.right[node]), "right")):
                if child == NO_CHILD:
                    continue
                values = features[self._subtree_points(child), dim]
                if side == "left" and np.any(values > pivot):
                    raise ValueError(f"Node {node}: left subtree exceeds pivot on dim {dim}.")
                if side == "right" and np.any(values < pivot):
                    raise ValueError(f"Node {node}: right subtree below pivot on dim {dim}.")

    def _subtree_points(self, node: int) -> np.ndarray:
        collected = []
        pending = [node]
        while pending:
            current = pending.pop()
            collected.append(int(self.point_index[current]))
            for child in (int(self.left[current]), int(self.right[current])):
                if child != NO_CHILD:
                    pending.append(child)
        return np.asarray(collected, dtype=np.int64)


class _TreeBuilder:
    def __init__(self, dataset: Dataset) -> None:
        count = dataset.num_samples
        self._features = dataset.features
        self._dimension = dataset.dimension
        self.order = np.arange(count, dtype=np.int64)
        self.point_index = np.empty(count, dtype=np.int64)
        self.split_dim = np.empty(count, dtype=np.int64)
        self.left = np.full(count, NO_CHILD, dtype=np.int64)
        self.right = np.full(count, NO_CHILD, dtype=np.int64)
        self.height = 0
        self._next = 0

    def build(self, lo: int, hi: int, depth: int) -> int:
        if lo >= hi:
            return NO_CHILD
        self.height = max(self.height, depth + 1)
        dim = depth % self._dimension
        segment = self.order[lo:hi]
        mid = (hi - lo) // 2
        # Selection only: position `mid` ends up holding the median along `dim`.
        partition = np.argpartition(self._features[segment, dim], mid, kind="introselect")
        self.order[lo:hi] = segment[partition]

        node = self._next
        self._next += 1
        self.point_index[node] = self.order[lo + mid]
        self.split_dim[node] = dim
        self.left[node] = self.build(lo, lo + mid, depth + 1)
        self.right[node] = self.build(lo + mid + 1, hi, depth + 1)
        return node


def build_tree(dataset: Dataset) -> KDTree:
    """Build a median-partitioned tree over every sample in ``dataset``.

    An empty dataset yields an empty tree whose queries return no neighbours.
    """

    if dataset.num_samples and dataset.dimension == 0:
        raise ValueError("Cannot partition samples with zero features.")
    builder = _TreeBuilder(dataset)
    root = builder.build(0, dataset.num_samples, 0) if dataset.num_samples else NO_CHILD
    for array in (builder.point_index, builder.split_dim, builder.left, builder.right):
        array.setflags(write=False)
    tree = KDTree(
        dataset=dataset,
        point_index=builder.point_index,
        split_dim=builder.split_dim,
        left=builder.left,
        right=builder.right,
        root=root,
        height=builder.height,
    )
    LOGGER.debug(
        "Built tree over %d points (dimension=%d, height=%d)",
        dataset.num_samples,
        dataset.dimension,
        builder.height,
    )
    return tree


__all__ = ["NO_CHILD", "KDTree", "build_tree"]
