# Reconstruction loss for probabilistic decoders
#
#   - ReconstructionLoss: negative log-likelihood of the target under a
#     prediction-parametrized distribution, with its gradient
#   - Distributions: Bernoulli (logits or probabilities), Normal (fixed stddev)

from .errors import (
    ReconLossError,
    DimensionMismatch,
    InvalidDistributionParameters,
    NumericInstabilityWarning,
)
from .dists import (
    Distribution,
    BernoulliDistribution,
    NormalDistribution,
    get_distribution,
)
from .losses import ReconstructionLoss, reconstruction_loss, reconstruction_loss_grad

__version__ = "0.1.0"

__all__ = [
    "ReconLossError",
    "DimensionMismatch",
    "InvalidDistributionParameters",
    "NumericInstabilityWarning",
    "Distribution",
    "BernoulliDistribution",
    "NormalDistribution",
    "get_distribution",
    "ReconstructionLoss",
    "reconstruction_loss",
    "reconstruction_loss_grad",
]
