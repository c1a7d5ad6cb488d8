"""Feature names and hand-tuned static weights for the Titanic survival features."""

from __future__ import annotations

from typing import Sequence

import numpy as np

TITANIC_FEATURES = ("Pclass", "Sex", "Age", "SibSp", "Parch", "Fare", "Embarked")

DEFAULT_TITANIC_WEIGHTS = (
    2.0,  # Pclass
    3.0,  # Sex
    1.5,  # Age
    1.0,  # SibSp
    1.0,  # Parch
    1.2,  # Fare
    0.5,  # Embarked
)


def default_titanic_weights() -> np.ndarray:
    return np.asarray(DEFAULT_TITANIC_WEIGHTS, dtype=np.float64)


def feature_name(index: int, names: Sequence[str] = TITANIC_FEATURES) -> str:
    if 0 <= index < len(names):
        return names[index]
    return "Unknown"


def describe_weights(weights: Sequence[float], names: Sequence[str] = TITANIC_FEATURES) -> str:
    lines = [
        f"{feature_name(idx, names)}: {float(value):.2f}" for idx, value in enumerate(weights)
    ]
    return "\n".join(lines)


__all__ = [
    "TITANIC_FEATURES",
    "DEFAULT_TITANIC_WEIGHTS",
    "default_titanic_weights",
    "feature_name",
    "describe_weights",
]
