from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import numpy as np

from adaptknn.errors import DimensionMismatch

UNKNOWN_LABEL = -1


def _readonly_copy(values: Any, dtype: Any) -> np.ndarray:
    array = np.array(values, dtype=dtype, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class Sample:
    """One feature vector plus its label (``UNKNOWN_LABEL`` when unlabelled)."""

    features: np.ndarray
    label: int = UNKNOWN_LABEL

    @property
    def is_labelled(self) -> bool:
        return self.label != UNKNOWN_LABEL


@dataclass(frozen=True, eq=False)
class Dataset:
    """Fixed-size collection of samples sharing one dimensionality.

    Both arrays are frozen on construction. Trees and trackers built over a
    dataset keep a reference to it and read these arrays directly, so the
    dataset has to stay unchanged for as long as they are in use.
    """

    features: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        # Trees read these arrays in place; keep private read-only copies.
        object.__setattr__(self, "features", _readonly_copy(self.features, np.float64))
        object.__setattr__(self, "labels", _readonly_copy(self.labels, np.int64))
        if self.features.ndim != 2:
            raise ValueError("Dataset features must be a 2-D array of shape (n, D).")
        if self.labels.shape != (self.features.shape[0],):
            raise ValueError(
                f"Expected {self.features.shape[0]} labels, received shape {self.labels.shape}."
            )

    @classmethod
    def from_arrays(cls, features: Any, labels: Any | None = None) -> "Dataset":
        features_np = np.asarray(features, dtype=np.float64)
        if features_np.ndim == 1 and features_np.size == 0:
            features_np = features_np.reshape(0, 0)
        if labels is None:
            labels_np = np.full(features_np.shape[0], UNKNOWN_LABEL, dtype=np.int64)
        else:
            labels_np = np.asarray(labels, dtype=np.int64).reshape(-1)
        return cls(features=features_np, labels=labels_np)

    @classmethod
    def from_samples(cls, samples: Iterable[Sample], *, dimension: int | None = None) -> "Dataset":
        rows = list(samples)
        if not rows:
            return cls.empty(dimension or 0)
        width = len(rows[0].features) if dimension is None else dimension
        for sample in rows:
            if len(sample.features) != width:
                raise DimensionMismatch(width, len(sample.features), what="feature vector")
        features = np.asarray([sample.features for sample in rows], dtype=np.float64)
        labels = np.asarray([sample.label for sample in rows], dtype=np.int64)
        return cls.from_arrays(features, labels)

    @classmethod
    def empty(cls, dimension: int) -> "Dataset":
        return cls.from_arrays(np.empty((0, dimension), dtype=np.float64))

    @property
    def dimension(self) -> int:
        return int(self.features.shape[1])

    @property
    def num_samples(self) -> int:
        return int(self.features.shape[0])

    def is_empty(self) -> bool:
        return self.num_samples == 0

    def is_labelled(self) -> bool:
        return bool(np.all(self.labels != UNKNOWN_LABEL))

    def __len__(self) -> int:
        return self.num_samples

    def __getitem__(self, index: int) -> Sample:
        return Sample(features=self.features[index], label=int(self.labels[index]))

    def __iter__(self) -> Iterator[Sample]:
        for index in range(self.num_samples):
            yield self[index]


__all__ = ["UNKNOWN_LABEL", "Sample", "Dataset"]
