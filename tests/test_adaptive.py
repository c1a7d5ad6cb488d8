import numpy as np
import pytest

from adaptknn.core.dataset import Dataset
from adaptknn.errors import DimensionMismatch, EmptyTrainingSet
from adaptknn.weights import AdaptiveWeightTracker, FeatureStat, new_tracker, reinforcement_weight


def test_fresh_tracker_uses_unit_weights():
    tracker = new_tracker(3)
    np.testing.assert_array_equal(tracker.snapshot(), [1.0, 1.0, 1.0])
    assert tracker.stats() == (FeatureStat(0, 0),) * 3
    assert tracker.updates == 0


def test_snapshot_is_a_read_only_copy():
    tracker = AdaptiveWeightTracker(2)
    snapshot = tracker.snapshot()
    with pytest.raises(ValueError):
        snapshot[0] = 5.0
    dataset = Dataset.from_arrays([[0.0, 0.0]], [1])
    tracker.update([0.0, 0.0], [0], dataset, True)
    np.testing.assert_array_equal(snapshot, [1.0, 1.0])


def test_three_successes_in_four_uses_give_weight_two():
    assert reinforcement_weight(3.0, 4.0) == 2.0
    assert FeatureStat(successes=3, uses=4).weight == 2.0

    dataset = Dataset.from_arrays([[0.0]], [1])
    tracker = AdaptiveWeightTracker(1)
    for correct in (True, True, True, False):
        tracker.update([0.0], [0], dataset, correct)

    assert tracker.stats() == (FeatureStat(successes=3, uses=4),)
    assert tracker.snapshot()[0] == 2.0


def test_helpfulness_threshold_is_strict():
    dataset = Dataset.from_arrays([[0.0], [1.0]], [1, 0])
    tracker = AdaptiveWeightTracker(1)
    # Mean gap (0.25 + 0.75) / 2 == 0.5 is not below the threshold.
    assert tracker.helpful_features([0.25], [0, 1], dataset).tolist() == [False]
    assert tracker.helpful_features([0.75], [0], dataset).tolist() == [False]
    assert tracker.helpful_features([0.1], [0], dataset).tolist() == [True]


def test_unhelpful_feature_scores_on_wrong_prediction():
    dataset = Dataset.from_arrays([[0.0, 0.0]], [1])
    tracker = AdaptiveWeightTracker(2)
    weights = tracker.update([0.0, 3.0], [0], dataset, False)
    # Feature 0 is helpful but the prediction was wrong; feature 1 agrees.
    np.testing.assert_array_equal(weights, [0.5, 2.5])


def test_different_helpfulness_yields_different_snapshots():
    dataset = Dataset.from_arrays([[0.0, 0.0], [1.0, 1.0]], [1, 0])
    tracker = AdaptiveWeightTracker(2)

    first = tracker.update([0.0, 0.0], [0], dataset, True)
    second = tracker.update([0.0, 5.0], [0], dataset, True)

    np.testing.assert_array_equal(first, [2.5, 2.5])
    np.testing.assert_array_equal(second, [2.5, 1.5])
    assert not np.array_equal(first, second)


def test_update_sequence_is_bit_for_bit_reproducible():
    rng = np.random.default_rng(21)
    dataset = Dataset.from_arrays(rng.uniform(size=(30, 4)), rng.integers(0, 2, size=30))
    steps = [
        (rng.uniform(size=4), rng.choice(30, size=5, replace=False), bool(rng.integers(0, 2)))
        for _ in range(25)
    ]

    histories = []
    for _ in range(2):
        tracker = AdaptiveWeightTracker(4)
        histories.append([tracker.update(q, n, dataset, c) for q, n, c in steps])

    for left, right in zip(*histories):
        assert left.tobytes() == right.tobytes()
    assert np.all(histories[0][-1] >= 0.5)
    assert np.all(histories[0][-1] <= 2.5)


def test_update_rejects_bad_inputs():
    dataset = Dataset.from_arrays([[0.0, 0.0]], [1])
    tracker = AdaptiveWeightTracker(2)
    with pytest.raises(EmptyTrainingSet):
        tracker.update([0.0, 0.0], [], dataset, True)
    with pytest.raises(DimensionMismatch):
        tracker.update([0.0], [0], dataset, True)
    with pytest.raises(DimensionMismatch):
        AdaptiveWeightTracker(3).update([0.0, 0.0, 0.0], [0], dataset, True)
    assert tracker.updates == 0


def test_tracker_requires_features():
    with pytest.raises(ValueError):
        AdaptiveWeightTracker(0)
