from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

import numpy as np

from adaptknn.core.dataset import Dataset
from adaptknn.core.distance import as_vector
from adaptknn.errors import DimensionMismatch

from .adaptive import AdaptiveWeightTracker


class WeightProvider(ABC):
    """Source of the weight vector used for the next query."""

    is_adaptive: bool = False

    @property
    @abstractmethod
    def n_features(self) -> int:
        pass

    @abstractmethod
    def current(self) -> np.ndarray:
        pass

    def observe(
        self,
        query: Any,
        neighbor_indices: Sequence[int],
        dataset: Dataset,
        prediction_was_correct: bool,
    ) -> None:
        """Feed back a labelled outcome; static providers ignore it."""


class StaticWeights(WeightProvider):
    def __init__(self, weights: Any, *, n_features: int | None = None) -> None:
        vector = as_vector(weights, dimension=n_features, what="weight vector").copy()
        vector.setflags(write=False)
        self._weights = vector

    @classmethod
    def uniform(cls, n_features: int) -> "StaticWeights":
        return cls(np.ones(n_features, dtype=np.float64))

    @property
    def n_features(self) -> int:
        return int(self._weights.shape[0])

    def current(self) -> np.ndarray:
        return self._weights


class AdaptiveWeights(WeightProvider):
    is_adaptive = True

    def __init__(self, tracker: AdaptiveWeightTracker) -> None:
        self.tracker = tracker

    @property
    def n_features(self) -> int:
        return self.tracker.n_features

    def current(self) -> np.ndarray:
        return self.tracker.snapshot()

    def observe(
        self,
        query: Any,
        neighbor_indices: Sequence[int],
        dataset: Dataset,
        prediction_was_correct: bool,
    ) -> None:
        self.tracker.update(query, neighbor_indices, dataset, prediction_was_correct)


def as_weight_provider(source: Any, *, n_features: int) -> WeightProvider:
    """Coerce a provider, tracker, weight sequence or ``None`` (uniform) into a provider."""

    if isinstance(source, WeightProvider):
        provider = source
    elif isinstance(source, AdaptiveWeightTracker):
        provider = AdaptiveWeights(source)
    elif source is None:
        provider = StaticWeights.uniform(n_features)
    else:
        provider = StaticWeights(source, n_features=n_features)
    if provider.n_features != n_features:
        raise DimensionMismatch(n_features, provider.n_features, what="weight vector")
    return provider


__all__ = ["WeightProvider", "StaticWeights", "AdaptiveWeights", "as_weight_provider"]
