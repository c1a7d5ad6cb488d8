"""Contract violations raised by the index, the weight tracker and the classifier."""

from __future__ import annotations


class AdaptKNNError(ValueError):
    pass


class DimensionMismatch(AdaptKNNError):
    """Two vectors combined in one operation have different lengths."""

    def __init__(self, expected: int, received: int, *, what: str = "vector") -> None:
        super().__init__(f"Expected {what} of length {expected}, received {received}.")
        self.expected = expected
        self.received = received


class EmptyTrainingSet(AdaptKNNError):
    """A vote was requested but no training neighbours exist."""


class InvalidK(AdaptKNNError):
    def __init__(self, k: int) -> None:
        super().__init__(f"k must be a positive integer, got {k}.")
        self.k = k


__all__ = ["AdaptKNNError", "DimensionMismatch", "EmptyTrainingSet", "InvalidK"]
