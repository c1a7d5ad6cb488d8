from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from adaptknn.core.dataset import Dataset
from adaptknn.core.distance import as_vector
from adaptknn.errors import DimensionMismatch, EmptyTrainingSet
from adaptknn.logging import get_logger

LOGGER = get_logger("weights.adaptive")

HELPFUL_THRESHOLD = 0.5
SUCCESS_SCALE = 2.0
WEIGHT_FLOOR = 0.5


def reinforcement_weight(successes: Any, uses: Any) -> Any:
    """``successes / uses * 2.0 + 0.5``; lies in ``[0.5, 2.5]`` once ``uses > 0``."""

    return (successes / uses) * SUCCESS_SCALE + WEIGHT_FLOOR


@dataclass(frozen=True)
class FeatureStat:
    successes: int = 0
    uses: int = 0

    @property
    def weight(self) -> float:
        if self.uses == 0:
            return 1.0
        return float(reinforcement_weight(float(self.successes), float(self.uses)))


class AdaptiveWeightTracker:
    """Per-feature success counters that re-derive the weight vector after each labelled query.

    A feature counts as *helpful* for a query when the mean absolute gap
    between the query and its neighbours along that feature is below 0.5 on
    the (already normalised) feature scale. The feature scores a success when
    its helpfulness agrees with whether the prediction was correct. Weights
    start at 1.0 and, once a feature has been used, equal
    ``reinforcement_weight(successes, uses)``.

    Updates are not thread-safe: callers apply them strictly in query order.
    """

    def __init__(self, n_features: int) -> None:
        if n_features <= 0:
            raise ValueError(f"n_features must be positive, got {n_features}.")
        self._successes = np.zeros(n_features, dtype=np.int64)
        self._uses = np.zeros(n_features, dtype=np.int64)
        self._weights = np.ones(n_features, dtype=np.float64)
        self._updates = 0

    @property
    def n_features(self) -> int:
        return int(self._weights.shape[0])

    @property
    def updates(self) -> int:
        return self._updates

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the most recently computed weight vector."""

        weights = self._weights.copy()
        weights.setflags(write=False)
        return weights

    def stats(self) -> Tuple[FeatureStat, ...]:
        return tuple(
            FeatureStat(successes=int(s), uses=int(u))
            for s, u in zip(self._successes, self._uses)
        )

    def helpful_features(
        self, query: Any, neighbor_indices: Sequence[int], dataset: Dataset
    ) -> np.ndarray:
        """Boolean mask of features whose mean neighbour gap is under the threshold."""

        query_vec = as_vector(query, dimension=self.n_features, what="query vector")
        if dataset.dimension != self.n_features:
            raise DimensionMismatch(self.n_features, dataset.dimension, what="dataset")
        indices = np.asarray(neighbor_indices, dtype=np.int64).reshape(-1)
        if indices.size == 0:
            raise EmptyTrainingSet("Cannot score features against an empty neighbour set.")
        gaps = np.abs(query_vec[None, :] - dataset.features[indices])
        avg_diff = gaps.mean(axis=0)
        return avg_diff < HELPFUL_THRESHOLD

    def update(
        self,
        query: Any,
        neighbor_indices: Sequence[int],
        dataset: Dataset,
        prediction_was_correct: bool,
    ) -> np.ndarray:
        """Fold one labelled outcome into the counters and return the new snapshot."""

        helpful = self.helpful_features(query, neighbor_indices, dataset)
        self._uses += 1
        self._successes += (helpful == bool(prediction_was_correct)).astype(np.int64)
        self._weights = reinforcement_weight(
            self._successes.astype(np.float64), self._uses.astype(np.float64)
        )
        self._updates += 1
        LOGGER.debug(
            "Tracker update %d (correct=%s): weights=%s",
            self._updates,
            bool(prediction_was_correct),
            np.array2string(self._weights, precision=3),
        )
        return self.snapshot()


def new_tracker(n_features: int) -> AdaptiveWeightTracker:
    return AdaptiveWeightTracker(n_features)


__all__ = [
    "HELPFUL_THRESHOLD",
    "FeatureStat",
    "AdaptiveWeightTracker",
    "new_tracker",
    "reinforcement_weight",
]
