"""Core data structures: the sample dataset, distance functions and the median-split tree."""

from .dataset import UNKNOWN_LABEL, Dataset, Sample
from .distance import distance, squared_distance
from .tree import NO_CHILD, KDTree, build_tree

__all__ = [
    "UNKNOWN_LABEL",
    "Dataset",
    "Sample",
    "distance",
    "squared_distance",
    "NO_CHILD",
    "KDTree",
    "build_tree",
]
