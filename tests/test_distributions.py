"""
Unit tests for the prediction-parametrized distributions.
"""

import numpy as np
import pytest
from scipy.stats import bernoulli, norm

from reconloss.dists import (
    BernoulliDistribution,
    Distribution,
    NormalDistribution,
    get_distribution,
)
from reconloss.errors import InvalidDistributionParameters


class TestDistributionInterface:
    """Tests for the base class."""

    def test_abstract_methods(self):
        dist = Distribution()
        with pytest.raises(NotImplementedError):
            dist.fit(np.zeros(2))
        with pytest.raises(NotImplementedError):
            dist.log_probability(np.zeros(2))
        with pytest.raises(NotImplementedError):
            dist.log_probability_backward(np.zeros(2))

    def test_use_before_fit(self):
        """Querying an unfitted distribution is an error."""
        with pytest.raises(RuntimeError):
            BernoulliDistribution().log_probability(np.zeros(2))
        with pytest.raises(RuntimeError):
            NormalDistribution().log_probability_backward(np.zeros(2))

    def test_reset(self):
        dist = BernoulliDistribution().fit(np.zeros(3))
        assert dist.is_fitted
        dist.reset()
        assert not dist.is_fitted
        with pytest.raises(RuntimeError):
            dist.probability


class TestBernoulli:
    """Tests for BernoulliDistribution."""

    def test_logits_match_scipy(self):
        """Log-probabilities agree with scipy.stats.bernoulli."""
        logits = np.array([-3.0, -0.5, 0.0, 0.7, 4.0])
        target = np.array([0.0, 1.0, 1.0, 0.0, 1.0])
        dist = BernoulliDistribution().fit(logits)
        p = 1.0 / (1.0 + np.exp(-logits))
        np.testing.assert_allclose(dist.log_probability(target), bernoulli.logpmf(target, p))

    def test_probability_property(self):
        dist = BernoulliDistribution().fit(np.array([0.0, np.log(3.0)]))
        np.testing.assert_allclose(dist.probability, [0.5, 0.75])
        np.testing.assert_allclose(dist.mean(), [0.5, 0.75])

    def test_logit_gradient(self):
        """d log P / d logit = t - sigmoid(x)."""
        dist = BernoulliDistribution().fit(np.array([0.0, 0.0]))
        np.testing.assert_allclose(dist.log_probability_backward(np.array([1.0, 0.0])), [0.5, -0.5])

    def test_probabilities_as_parameters(self):
        dist = BernoulliDistribution(apply_logistic=False).fit(np.array([0.25, 0.5]))
        target = np.array([1.0, 0.0])
        np.testing.assert_allclose(dist.log_probability(target), np.log([0.25, 0.5]))
        np.testing.assert_allclose(dist.log_probability_backward(target), [4.0, -2.0])

    def test_degenerate_probabilities_are_clamped(self):
        """Probabilities of exactly 0 or 1 give finite values thanks to eps."""
        dist = BernoulliDistribution(apply_logistic=False, eps=1e-10).fit(np.array([0.0, 1.0]))
        target = np.array([1.0, 0.0])
        assert np.all(np.isfinite(dist.log_probability(target)))
        assert np.all(np.isfinite(dist.log_probability_backward(target)))

    def test_continuous_targets(self):
        """Grey-level targets in [0, 1] are accepted."""
        dist = BernoulliDistribution().fit(np.zeros(3))
        np.testing.assert_allclose(dist.log_probability(np.array([0.2, 0.5, 0.9])), np.log(0.5))

    def test_probability_out_of_range(self):
        with pytest.raises(InvalidDistributionParameters):
            BernoulliDistribution(apply_logistic=False).fit(np.array([-0.1, 0.5]))

    def test_non_finite_parameters(self):
        with pytest.raises(InvalidDistributionParameters):
            BernoulliDistribution().fit(np.array([np.nan, 0.0]))

    def test_target_out_of_range(self):
        dist = BernoulliDistribution().fit(np.zeros(2))
        with pytest.raises(InvalidDistributionParameters):
            dist.log_probability(np.array([2.0, 0.0]))
        with pytest.raises(InvalidDistributionParameters):
            dist.log_probability_backward(np.array([-1.0, 0.0]))


class TestNormal:
    """Tests for NormalDistribution."""

    def test_matches_scipy(self):
        mean = np.array([[0.0, 1.0], [-2.0, 0.5]])
        target = np.array([[0.3, 1.0], [-1.0, 2.0]])
        dist = NormalDistribution(stddev=0.7).fit(mean)
        np.testing.assert_allclose(dist.log_probability(target), norm.logpdf(target, mean, 0.7))

    def test_gradient(self):
        dist = NormalDistribution(stddev=2.0).fit(np.array([1.0, -1.0]))
        np.testing.assert_allclose(dist.log_probability_backward(np.array([3.0, -1.0])), [0.5, 0.0])

    def test_invalid_stddev(self):
        with pytest.raises(InvalidDistributionParameters):
            NormalDistribution(stddev=0.0)

    @pytest.mark.parametrize("stddev", [np.inf, np.nan, -1.0])
    def test_non_finite_or_negative_stddev(self, stddev):
        with pytest.raises(InvalidDistributionParameters):
            NormalDistribution(stddev=stddev)

    def test_non_finite_mean(self):
        with pytest.raises(InvalidDistributionParameters):
            NormalDistribution().fit(np.array([np.inf]))


class TestRegistry:
    """Tests for get_distribution."""

    def test_lookup(self):
        assert isinstance(get_distribution("Bernoulli"), BernoulliDistribution)
        dist = get_distribution("normal", stddev=3.0)
        assert isinstance(dist, NormalDistribution)
        assert dist.stddev == 3.0

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown distribution"):
            get_distribution("poisson")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
