import numpy as np
import pytest

jax = pytest.importorskip("jax")

from adaptknn.baseline import BaselineKNN
from adaptknn.core.dataset import Dataset
from adaptknn.core.tree import build_tree
from adaptknn.queries import knn
from tests.utils import gaussian_dataset


def test_baseline_matches_tree_distances():
    rng = np.random.default_rng(9)
    dataset = gaussian_dataset(rng, 150, 3)
    tree = build_tree(dataset)
    baseline = BaselineKNN(dataset)
    for _ in range(20):
        query = rng.standard_normal(3)
        weights = rng.uniform(0.5, 2.5, size=3)
        _, tree_distances = knn(tree, query, 6, weights, return_distances=True)
        _, base_distances = baseline.knn(query, 6, weights)
        np.testing.assert_allclose(tree_distances, base_distances, rtol=1e-9, atol=1e-12)


def test_baseline_on_empty_dataset():
    indices, distances = BaselineKNN(Dataset.empty(2)).knn([0.0, 0.0], 3)
    assert indices.shape == (0,)
    assert distances.shape == (0,)


def test_baseline_orders_scenario_points():
    dataset = Dataset.from_arrays([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [10.0, 10.0]], [1, 0, 1, 0])
    indices, distances = BaselineKNN(dataset).knn([0.0, 0.0], 10)
    assert indices.tolist() == [0, 1, 2, 3]
    np.testing.assert_allclose(distances[:3], [0.0, 1.0, 1.0])
