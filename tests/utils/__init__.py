"""Shared test utilities for adaptknn."""

from .datasets import (
    brute_force_distances,
    gaussian_dataset,
    gaussian_points,
)

__all__ = ["gaussian_points", "gaussian_dataset", "brute_force_distances"]
