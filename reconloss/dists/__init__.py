# Distributions that can be parametrized by a network prediction
#
#   - Bernoulli: logits or probabilities, for binary / [0, 1] data
#   - Normal: mean with fixed standard deviation, for real-valued data

from .base import Distribution
from .bernoulli import BernoulliDistribution
from .normal import NormalDistribution

DISTRIBUTIONS = {
    "bernoulli": BernoulliDistribution,
    "normal": NormalDistribution,
}


def get_distribution(name: str, **kwargs) -> Distribution:
    """
    Instantiate a distribution by name.

    Args:
        name: Key in DISTRIBUTIONS (case-insensitive).
        **kwargs: Forwarded to the distribution constructor.

    Returns:
        New distribution instance.
    """
    key = name.lower()
    if key not in DISTRIBUTIONS:
        raise ValueError(
            f"Unknown distribution: {name}. Choose from {list(DISTRIBUTIONS.keys())}"
        )
    return DISTRIBUTIONS[key](**kwargs)


__all__ = [
    "Distribution",
    "BernoulliDistribution",
    "NormalDistribution",
    "DISTRIBUTIONS",
    "get_distribution",
]
