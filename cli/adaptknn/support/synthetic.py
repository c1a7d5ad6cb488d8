from __future__ import annotations

import numpy as np
from numpy.random import Generator

from adaptknn.core.dataset import Dataset


def gaussian_points(
    rng: Generator,
    count: int,
    dimension: int,
    *,
    dtype=np.float64,
) -> np.ndarray:
    return rng.standard_normal(size=(count, dimension)).astype(dtype, copy=False)


def labelled_dataset(
    rng: Generator,
    count: int,
    dimension: int,
    *,
    informative: int = 2,
    noise: float = 0.1,
) -> Dataset:
    """Points in ``[0, 1]^D`` labelled by a noisy threshold on the first few features.

    The remaining features carry no signal, which gives adaptive weighting
    something to separate.
    """

    points = rng.uniform(0.0, 1.0, size=(count, dimension))
    informative = max(1, min(informative, dimension))
    score = points[:, :informative].mean(axis=1) + rng.normal(0.0, noise, size=count)
    labels = (score >= 0.5).astype(np.int64)
    return Dataset.from_arrays(points, labels)


__all__ = ["gaussian_points", "labelled_dataset"]
