"""Static and adaptive per-feature weight sources."""

from .adaptive import (
    HELPFUL_THRESHOLD,
    AdaptiveWeightTracker,
    FeatureStat,
    new_tracker,
    reinforcement_weight,
)
from .presets import (
    DEFAULT_TITANIC_WEIGHTS,
    TITANIC_FEATURES,
    default_titanic_weights,
    describe_weights,
    feature_name,
)
from .provider import AdaptiveWeights, StaticWeights, WeightProvider, as_weight_provider

__all__ = [
    "HELPFUL_THRESHOLD",
    "AdaptiveWeightTracker",
    "FeatureStat",
    "new_tracker",
    "reinforcement_weight",
    "DEFAULT_TITANIC_WEIGHTS",
    "TITANIC_FEATURES",
    "default_titanic_weights",
    "describe_weights",
    "feature_name",
    "AdaptiveWeights",
    "StaticWeights",
    "WeightProvider",
    "as_weight_provider",
]
