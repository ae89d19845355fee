"""
Normal distribution with a fixed standard deviation, parametrized by its mean.
"""

import numpy as np

from .base import Distribution
from ..errors import InvalidDistributionParameters

_HALF_LOG_2PI = 0.5 * np.log(2.0 * np.pi)


class NormalDistribution(Distribution):
    """
    Element-wise Gaussian whose mean is the prediction.

    The negative log-likelihood under this distribution is a scaled squared
    error plus a constant, which makes it the usual choice for real-valued
    reconstructions.
    """

    def __init__(self, stddev: float = 1.0):
        super().__init__()
        if not (np.isfinite(stddev) and stddev > 0.0):
            raise InvalidDistributionParameters(
                f"Standard deviation must be positive and finite, got {stddev}"
            )
        self.stddev = float(stddev)

    def fit(self, prediction: np.ndarray) -> "NormalDistribution":
        prediction = np.asarray(prediction, dtype=np.float64)
        if not np.all(np.isfinite(prediction)):
            raise InvalidDistributionParameters("Normal mean must be finite")
        self._param = prediction
        return self

    def mean(self) -> np.ndarray:
        return self.param

    def log_probability(self, target: np.ndarray) -> np.ndarray:
        z = (np.asarray(target, dtype=np.float64) - self.param) / self.stddev
        return -0.5 * z**2 - np.log(self.stddev) - _HALF_LOG_2PI

    def log_probability_backward(self, target: np.ndarray) -> np.ndarray:
        return (np.asarray(target, dtype=np.float64) - self.param) / self.stddev**2

    def __repr__(self):
        return f"NormalDistribution(stddev={self.stddev})"
