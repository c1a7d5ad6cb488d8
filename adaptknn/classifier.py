from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple

import numpy as np

from adaptknn.core.dataset import Dataset, Sample
from adaptknn.core.tree import KDTree
from adaptknn.errors import EmptyTrainingSet
from adaptknn.logging import get_logger
from adaptknn.queries.knn import knn
from adaptknn.weights import (
    AdaptiveWeights,
    AdaptiveWeightTracker,
    StaticWeights,
    WeightProvider,
    as_weight_provider,
)

LOGGER = get_logger("classifier")


class ClassifierMode(str, Enum):
    STATIC = "static"
    ADAPTIVE = "adaptive"


def majority_vote(neighbor_labels: Any) -> int:
    """Binary vote over 0/1 labels; a tie goes to the positive class.

    Predicts 1 iff ``2 * sum(labels) >= len(labels)``.
    """

    labels = np.asarray(neighbor_labels, dtype=np.int64).reshape(-1)
    if labels.size == 0:
        raise EmptyTrainingSet("Cannot vote without neighbours; the training set is empty.")
    return int(2 * int(labels.sum()) >= labels.size)


@dataclass(frozen=True)
class Prediction:
    label: int
    neighbors: np.ndarray


class Classifier:
    """Weighted k-NN voter over a built tree.

    In adaptive mode every query that carries a known label updates the
    tracker before the next query reads its weights, so samples are processed
    strictly in order. Static mode holds no mutable state.
    """

    def __init__(self, tree: KDTree, provider: WeightProvider) -> None:
        self.tree = tree
        self.provider = as_weight_provider(provider, n_features=tree.dimension)
        self.mode = ClassifierMode.ADAPTIVE if self.provider.is_adaptive else ClassifierMode.STATIC

    @classmethod
    def static(cls, tree: KDTree, weights: Any | None = None) -> "Classifier":
        if weights is None:
            return cls(tree, StaticWeights.uniform(tree.dimension))
        return cls(tree, StaticWeights(weights, n_features=tree.dimension))

    @classmethod
    def adaptive(cls, tree: KDTree, tracker: AdaptiveWeightTracker | None = None) -> "Classifier":
        if tracker is None and tree.dimension == 0:
            raise EmptyTrainingSet("Cannot track weights over an empty training set.")
        tracker = tracker or AdaptiveWeightTracker(tree.dimension)
        return cls(tree, AdaptiveWeights(tracker))

    @property
    def training_set(self) -> Dataset:
        return self.tree.dataset

    def current_weights(self) -> np.ndarray:
        return self.provider.current()

    def _vote(self, features: Any, k: int) -> Prediction:
        weights = self.provider.current()
        neighbors = knn(self.tree, features, k, weights)
        label = majority_vote(self.training_set.labels[neighbors])
        return Prediction(label=label, neighbors=neighbors)

    def classify_sample(self, sample: Sample, k: int) -> Prediction:
        prediction = self._vote(sample.features, k)
        if self.mode is ClassifierMode.ADAPTIVE and sample.is_labelled:
            self.provider.observe(
                sample.features,
                prediction.neighbors,
                self.training_set,
                prediction.label == sample.label,
            )
        return prediction

    def predict_with_neighbors(self, dataset: Dataset, k: int) -> Tuple[np.ndarray, List[np.ndarray]]:
        """Predict every sample in order, also returning each query's neighbour indices."""

        predictions = np.empty(dataset.num_samples, dtype=np.int64)
        all_neighbors: List[np.ndarray] = []
        for position, sample in enumerate(dataset):
            prediction = self.classify_sample(sample, k)
            predictions[position] = prediction.label
            all_neighbors.append(prediction.neighbors)
        LOGGER.debug(
            "Classified %d samples in %s mode (k=%d)", dataset.num_samples, self.mode.value, k
        )
        return predictions, all_neighbors

    def predict(self, dataset: Dataset, k: int) -> np.ndarray:
        predictions, _ = self.predict_with_neighbors(dataset, k)
        return predictions


def classify(tree: KDTree, weights: Any, features: Any, k: int) -> int:
    """Predict one label without feeding any outcome back.

    ``weights`` may be a provider, an ``AdaptiveWeightTracker`` (its current
    snapshot is used), a weight sequence, or ``None`` for uniform weights.
    """

    provider = as_weight_provider(weights, n_features=tree.dimension)
    neighbors = knn(tree, features, k, provider.current())
    return majority_vote(tree.dataset.labels[neighbors])


__all__ = ["ClassifierMode", "Classifier", "Prediction", "classify", "majority_vote"]
