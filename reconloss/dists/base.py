"""
Capability interface for distributions parametrized by a prediction.

A distribution is refit from the current prediction before each use and then
answers two questions about an observed target: its per-element
log-probability and the derivative of that log-probability with respect to
the prediction. Any object providing ``fit``, ``log_probability``,
``log_probability_backward`` and ``reset`` can be plugged into
``ReconstructionLoss``.
"""

import numpy as np
from typing import Optional


class Distribution:
    """
    Base class for prediction-parametrized distributions.
    """

    def __init__(self):
        self._param: Optional[np.ndarray] = None

    @property
    def is_fitted(self) -> bool:
        return self._param is not None

    @property
    def param(self) -> np.ndarray:
        """Raw parameters from the last ``fit`` call."""
        self._check_fitted()
        return self._param

    def fit(self, prediction: np.ndarray) -> "Distribution":
        """
        Re-parametrize the distribution from a prediction.

        Args:
            prediction: Dense array holding the distribution parameters.

        Returns:
            self
        """
        raise NotImplementedError

    def log_probability(self, target: np.ndarray) -> np.ndarray:
        """
        Per-element log-probability of the target.

        Args:
            target: Observations with the prediction's shape.

        Returns:
            Array of log P(target | params), same shape as target.
        """
        raise NotImplementedError

    def log_probability_backward(self, target: np.ndarray) -> np.ndarray:
        """
        Derivative of the per-element log-probability w.r.t. the prediction.

        Args:
            target: Observations with the prediction's shape.

        Returns:
            Array with the prediction's shape.
        """
        raise NotImplementedError

    def reset(self):
        """Forget the current parametrization."""
        self._param = None

    def _check_fitted(self):
        if self._param is None:
            raise RuntimeError(
                f"{self.__class__.__name__} has not been fit to a prediction yet"
            )

    def __repr__(self):
        return f"{self.__class__.__name__}(fitted={self.is_fitted})"
