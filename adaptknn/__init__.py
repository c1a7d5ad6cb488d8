"""adaptknn: weighted k-nearest-neighbour classification over a median-split tree.

Quick Start
-----------
>>> from adaptknn import Dataset, build_index, Classifier
>>>
>>> train = Dataset.from_arrays(features, labels)
>>> tree = build_index(train)
>>> neighbours = query(tree, features[0], k=5, weights=[1.0] * train.dimension)
>>>
>>> # Adaptive weights, updated after every labelled query
>>> clf = Classifier.adaptive(tree)
>>> predictions = clf.predict(test, k=5)
>>> clf.current_weights()

Classes
-------
Dataset : Read-only feature matrix plus integer labels (-1 = unknown).
KDTree : Median-partitioned tree built by ``build_index``.
AdaptiveWeightTracker : Per-feature success counters driving adaptive weights.
Classifier : Static or adaptive majority-vote classifier.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("adaptknn")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.1.0"

from .classifier import Classifier, ClassifierMode, Prediction, classify, majority_vote
from .core import UNKNOWN_LABEL, Dataset, KDTree, Sample, build_tree, distance, squared_distance
from .errors import AdaptKNNError, DimensionMismatch, EmptyTrainingSet, InvalidK
from .queries import NeighborCandidate, find_k_nearest, knn, query_batch
from .weights import (
    AdaptiveWeights,
    AdaptiveWeightTracker,
    FeatureStat,
    StaticWeights,
    WeightProvider,
    new_tracker,
)

build_index = build_tree
query = find_k_nearest

__all__ = [
    "__version__",
    "Dataset",
    "Sample",
    "UNKNOWN_LABEL",
    "KDTree",
    "build_index",
    "build_tree",
    "query",
    "knn",
    "find_k_nearest",
    "query_batch",
    "NeighborCandidate",
    "distance",
    "squared_distance",
    "WeightProvider",
    "StaticWeights",
    "AdaptiveWeights",
    "AdaptiveWeightTracker",
    "FeatureStat",
    "new_tracker",
    "Classifier",
    "ClassifierMode",
    "Prediction",
    "classify",
    "majority_vote",
    "AdaptKNNError",
    "DimensionMismatch",
    "EmptyTrainingSet",
    "InvalidK",
]
