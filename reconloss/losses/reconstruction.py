"""
Reconstruction loss

Negative log-likelihood of an observed target under a distribution whose
parameters are predicted by a network, together with its gradient with
respect to the prediction:

    loss = -sum_i log P(t_i | theta(prediction))          (sum reduction)
    loss = -sum_i log P(t_i | theta(prediction)) / N      (mean reduction)

The distribution is refit from the prediction on every call, so the loss
composes with any object implementing the ``Distribution`` interface.
"""

import logging
import warnings
import numpy as np
from typing import Any, Dict, Mapping, Optional, Union

from ..dists import BernoulliDistribution, Distribution, get_distribution
from ..errors import NumericInstabilityWarning
from ..utils.arrays import as_dense, check_sizes
from ..utils.config import load_config, save_config

logger = logging.getLogger(__name__)

STATE_VERSION = 1


def _parse_reduction(value: Union[bool, str]) -> bool:
    """Map a config value ("sum", "mean" or a bool) to the reduction flag."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("sum", "mean"):
        return value.lower() == "sum"
    raise ValueError(f"Unknown reduction: {value!r}. Choose from ['sum', 'mean']")


class ReconstructionLoss:
    """
    Reconstruction loss for probabilistic decoders.

    Measures the negative log-probability of the target under the
    distribution parametrized by the prediction. ``forward`` returns the
    scalar loss and ``backward`` its gradient w.r.t. the prediction.

    The reduction flag is read at call time by both ``forward`` and
    ``backward``. Callers pairing the two must not change it in between,
    otherwise the gradient will not match the reported loss.

    Instances hold mutable state (the fitted distribution and the gradient
    buffer) and are not safe to share between threads.
    """

    def __init__(self, reduction: bool = True, distribution: Optional[Distribution] = None):
        """
        Initialize the reconstruction loss.

        Args:
            reduction: If True, 'sum' reduction is used and the per-element
                negative log-probabilities are summed. If False, 'mean'
                reduction is used and the sum is divided by the number of
                elements in the target.
            distribution: Distribution parametrized by the prediction.
                Defaults to a Bernoulli distribution over logits.
        """
        self.reduction = reduction
        self.distribution = distribution if distribution is not None else BernoulliDistribution()
        self._output: Optional[np.ndarray] = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ReconstructionLoss":
        """
        Build a loss from the ``loss`` section of a configuration.

        Args:
            config: Mapping with optional keys ``reduction`` ("sum", "mean"
                or bool), ``distribution`` (registry name) and
                ``distribution_kwargs``.

        Returns:
            Configured ReconstructionLoss
        """
        reduction = _parse_reduction(config.get("reduction", True))
        dist = get_distribution(
            config.get("distribution", "bernoulli"),
            **(config.get("distribution_kwargs") or {}),
        )
        return cls(reduction=reduction, distribution=dist)

    @property
    def reduction(self) -> bool:
        """True for 'sum' reduction, False for 'mean'."""
        return self._reduction

    @reduction.setter
    def reduction(self, value: bool):
        if not isinstance(value, (bool, np.bool_)):
            raise TypeError(
                f"reduction must be a bool (True='sum', False='mean'), got {type(value).__name__}"
            )
        self._reduction = bool(value)

    @property
    def output_parameter(self) -> Optional[np.ndarray]:
        """
        Gradient buffer written by the last ``backward`` call.

        The array is returned by reference. It is overwritten in place by the
        next ``backward`` call whenever the prediction shape is unchanged, so
        copy it if it must outlive that call.
        """
        return self._output

    @output_parameter.setter
    def output_parameter(self, value):
        self._output = None if value is None else np.asarray(value, dtype=np.float64)

    def forward(self, prediction, target) -> float:
        """
        Compute the reconstruction loss.

        Args:
            prediction: Distribution parameters (array of any rank or a
                scipy.sparse matrix).
            target: Observations with the same number of elements.

        Returns:
            Scalar negative log-likelihood under the configured reduction.

        Raises:
            DimensionMismatch: If prediction and target sizes differ.
        """
        prediction = as_dense(prediction)
        target = check_sizes(prediction, as_dense(target))

        self.distribution.fit(prediction)
        total = np.sum(self.distribution.log_probability(target))
        loss = -total if self._reduction else -total / self._num_elements(target)

        if not np.isfinite(loss):
            warnings.warn(
                f"Reconstruction loss is not finite ({loss}); check the distribution parameters",
                NumericInstabilityWarning,
                stacklevel=2,
            )
        logger.debug("forward: %d elements, loss=%.6g", target.size, loss)
        return float(loss)

    __call__ = forward

    def backward(self, prediction, target, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Compute the gradient of the loss w.r.t. the prediction.

        Args:
            prediction: Distribution parameters used in ``forward``.
            target: Observations used in ``forward``.
            out: Optional array with the prediction's shape that also
                receives the gradient.

        Returns:
            The gradient buffer (``output_parameter``), shaped like the
            prediction.

        Raises:
            DimensionMismatch: If prediction and target sizes differ.
        """
        prediction = as_dense(prediction)
        target = check_sizes(prediction, as_dense(target))
        if out is not None and (
            not isinstance(out, np.ndarray) or out.shape != prediction.shape
        ):
            raise ValueError(
                f"out must be an ndarray of shape {prediction.shape}, got {np.shape(out)}"
            )

        self.distribution.fit(prediction)
        grad = -np.asarray(self.distribution.log_probability_backward(target), dtype=np.float64)
        grad = grad.reshape(prediction.shape)
        if not self._reduction:
            grad /= self._num_elements(target)

        if self._output is not None and self._output.shape == prediction.shape:
            self._output[...] = grad
        else:
            self._output = grad
        if out is not None:
            np.copyto(out, self._output)

        logger.debug("backward: gradient shape %s", self._output.shape)
        return self._output

    @staticmethod
    def _num_elements(target: np.ndarray) -> int:
        return max(1, target.size)

    def state_dict(self) -> Dict[str, Any]:
        """
        Persistent state of the loss.

        Only the reduction flag is saved; the distribution parameters are
        recomputed from the next prediction.
        """
        return {"version": STATE_VERSION, "reduction": self._reduction}

    def load_state_dict(self, state: Mapping[str, Any]):
        """
        Restore state produced by ``state_dict``.

        Args:
            state: Mapping with ``version`` and ``reduction`` keys.
        """
        version = state.get("version", STATE_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            raise ValueError(f"State version must be an integer, got {version!r}")
        if version > STATE_VERSION:
            raise ValueError(
                f"Unsupported state version {version} (latest supported is {STATE_VERSION})"
            )
        self.reduction = state["reduction"]
        self.distribution.reset()
        self._output = None

    def save(self, path: str):
        """Write the loss state to a YAML file."""
        save_config(self.state_dict(), path)

    @classmethod
    def load(cls, path: str, distribution: Optional[Distribution] = None) -> "ReconstructionLoss":
        """
        Create a loss from a YAML file written by ``save``.

        Args:
            path: File to read.
            distribution: Distribution to attach (defaults to Bernoulli).
        """
        loss = cls(distribution=distribution)
        loss.load_state_dict(load_config(path))
        return loss

    def __repr__(self):
        mode = "sum" if self._reduction else "mean"
        return f"ReconstructionLoss(reduction='{mode}', distribution={self.distribution!r})"


def reconstruction_loss(
    prediction,
    target,
    distribution: Optional[Distribution] = None,
    reduction: bool = True,
) -> float:
    """
    Compute the reconstruction loss in one call.

    Args:
        prediction: Distribution parameters.
        target: Observations with the same number of elements.
        distribution: Distribution to use (defaults to Bernoulli over logits).
        reduction: True for 'sum', False for 'mean'.

    Returns:
        Scalar loss.
    """
    return ReconstructionLoss(reduction, distribution).forward(prediction, target)


def reconstruction_loss_grad(
    prediction,
    target,
    distribution: Optional[Distribution] = None,
    reduction: bool = True,
) -> np.ndarray:
    """
    Compute the gradient of the reconstruction loss in one call.

    Returns:
        Gradient with the prediction's shape.
    """
    return ReconstructionLoss(reduction, distribution).backward(prediction, target)
