"""
Bernoulli distribution parametrized by logits or probabilities.

Used as the default likelihood for binary (or [0, 1]-valued) reconstructions,
e.g. binarized or grey-level images decoded by a VAE.
"""

import numpy as np
from scipy.special import expit, log_expit

from .base import Distribution
from ..errors import InvalidDistributionParameters


class BernoulliDistribution(Distribution):
    """
    Element-wise Bernoulli distribution.

    With ``apply_logistic=True`` the prediction holds logits and the success
    probability is ``sigmoid(prediction)``. Otherwise the prediction holds the
    probabilities directly and must lie in [0, 1].
    """

    def __init__(self, apply_logistic: bool = True, eps: float = 1e-10):
        """
        Initialize the Bernoulli distribution.

        Args:
            apply_logistic: Treat the prediction as logits.
            eps: Offset added inside logarithms and divisions when the
                prediction holds probabilities.
        """
        super().__init__()
        self.apply_logistic = apply_logistic
        self.eps = eps
        self._probability = None

    def fit(self, prediction: np.ndarray) -> "BernoulliDistribution":
        prediction = np.asarray(prediction, dtype=np.float64)
        if not np.all(np.isfinite(prediction)):
            raise InvalidDistributionParameters(
                "Bernoulli parameters must be finite"
            )
        if self.apply_logistic:
            probability = expit(prediction)
        else:
            if np.any(prediction < 0.0) or np.any(prediction > 1.0):
                raise InvalidDistributionParameters(
                    "Bernoulli probabilities must lie in [0, 1]"
                )
            probability = prediction
        self._param = prediction
        self._probability = probability
        return self

    @property
    def probability(self) -> np.ndarray:
        """Success probability of each element."""
        self._check_fitted()
        return self._probability

    def mean(self) -> np.ndarray:
        return self.probability

    def log_probability(self, target: np.ndarray) -> np.ndarray:
        self._check_fitted()
        target = self._check_target(target)
        if self.apply_logistic:
            # log(sigmoid(x)) and log(1 - sigmoid(x)) = log(sigmoid(-x))
            x = self._param
            return target * log_expit(x) + (1.0 - target) * log_expit(-x)
        p = self._probability
        return target * np.log(p + self.eps) + (1.0 - target) * np.log(1.0 - p + self.eps)

    def log_probability_backward(self, target: np.ndarray) -> np.ndarray:
        self._check_fitted()
        target = self._check_target(target)
        p = self._probability
        if self.apply_logistic:
            return target - p
        return target / (p + self.eps) - (1.0 - target) / (1.0 - p + self.eps)

    def reset(self):
        super().reset()
        self._probability = None

    def _check_target(self, target: np.ndarray) -> np.ndarray:
        target = np.asarray(target, dtype=np.float64)
        if np.any(target < 0.0) or np.any(target > 1.0):
            raise InvalidDistributionParameters(
                "Bernoulli observations must lie in [0, 1]"
            )
        return target

    def __repr__(self):
        return (
            f"BernoulliDistribution(apply_logistic={self.apply_logistic}, "
            f"eps={self.eps})"
        )
