"""
Error types raised while evaluating reconstruction losses.
"""


class ReconLossError(Exception):
    """Base class for all reconloss errors."""


class DimensionMismatch(ReconLossError, ValueError):
    """Prediction and target do not hold the same number of elements."""

    def __init__(self, prediction_size: int, target_size: int):
        self.prediction_size = prediction_size
        self.target_size = target_size
        super().__init__(
            f"Prediction has {prediction_size} elements but target has {target_size}"
        )


class InvalidDistributionParameters(ReconLossError, ValueError):
    """A distribution was given parameters or observations outside its domain."""


class NumericInstabilityWarning(RuntimeWarning):
    """A log-likelihood evaluated to a non-finite value."""
