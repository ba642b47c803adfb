"""
Unit tests for Black-Scholes pricing model.
"""

import math

import pytest

from bsm_decision_engine.core.types import OptionType
from bsm_decision_engine.models.black_scholes import BlackScholesModel, norm_cdf


@pytest.mark.unit
class TestNormCdf:
    """Tests for the standard normal CDF."""

    def test_symmetry(self):
        """Test Phi(0) = 0.5 and Phi(-x) = 1 - Phi(x)."""
        assert norm_cdf(0.0) == pytest.approx(0.5)
        assert norm_cdf(-1.3) == pytest.approx(1 - norm_cdf(1.3))

    def test_known_values(self):
        """Test against tabulated values."""
        assert norm_cdf(1.0) == pytest.approx(0.841344746, abs=1e-9)
        assert norm_cdf(-1.959963985) == pytest.approx(0.025, abs=1e-9)


@pytest.mark.unit
class TestBlackScholesModel:
    """Tests for Black-Scholes pricing model."""

    def test_atm_call_price(self):
        """Test ATM call against the textbook value."""
        price = BlackScholesModel.call(S=100.0, K=100.0, T=1.0, r=0.05, sigma=0.2)
        assert price == pytest.approx(10.4506, abs=1e-4)

    def test_atm_put_price(self):
        """Test ATM put against the textbook value."""
        price = BlackScholesModel.put(S=100.0, K=100.0, T=1.0, r=0.05, sigma=0.2)
        assert price == pytest.approx(5.5735, abs=1e-4)

    def test_itm_call_price(self):
        """Test in-the-money call is worth at least intrinsic value."""
        price = BlackScholesModel.call(S=110.0, K=100.0, T=1.0, r=0.05, sigma=0.2)
        assert price >= 10.0

    def test_otm_put_price(self):
        """Test out-of-the-money put has only time value."""
        price = BlackScholesModel.put(S=110.0, K=100.0, T=1.0, r=0.05, sigma=0.2)
        assert 0 < price < 10.0

    @pytest.mark.parametrize("S,K", [(110.0, 100.0), (90.0, 100.0), (100.0, 100.0)])
    def test_zero_time_to_expiry(self, S, K):
        """Test expired options equal intrinsic value."""
        assert BlackScholesModel.call(S, K, 0.0, 0.05, 0.2) == max(S - K, 0.0)
        assert BlackScholesModel.put(S, K, 0.0, 0.05, 0.2) == max(K - S, 0.0)

    def test_negative_time_uses_intrinsic(self):
        """Test negative T routes to intrinsic value."""
        assert BlackScholesModel.call(120.0, 100.0, -0.5, 0.05, 0.2) == 20.0
        assert BlackScholesModel.put(80.0, 100.0, -0.5, 0.05, 0.2) == 20.0

    def test_zero_volatility_uses_intrinsic(self):
        """Test non-positive sigma routes to intrinsic value."""
        assert BlackScholesModel.call(105.0, 100.0, 1.0, 0.05, 0.0) == 5.0
        assert BlackScholesModel.put(105.0, 100.0, 1.0, 0.05, 0.0) == 0.0
        assert BlackScholesModel.put(95.0, 100.0, 1.0, 0.05, -0.1) == 5.0

    def test_near_expiry_converges_to_intrinsic(self):
        """Test T -> 0 approaches intrinsic value."""
        price = BlackScholesModel.call(S=110.0, K=100.0, T=1e-8, r=0.05, sigma=0.2)
        assert price == pytest.approx(10.0, abs=1e-6)

    def test_prices_non_negative(self):
        """Test deep OTM values are clamped at zero."""
        assert BlackScholesModel.call(50.0, 200.0, 0.01, 0.0, 0.1) >= 0.0
        assert BlackScholesModel.put(200.0, 50.0, 0.01, 0.0, 0.1) >= 0.0

    def test_put_call_parity(self):
        """Test put-call parity relationship."""
        S, K, T, r, sigma = 100.0, 95.0, 0.5, 0.03, 0.25

        call_price = BlackScholesModel.call(S, K, T, r, sigma)
        put_price = BlackScholesModel.put(S, K, T, r, sigma)

        # Put-Call Parity: C - P = S - K*e^(-rT)
        assert call_price - put_price == pytest.approx(S - K * math.exp(-r * T), abs=1e-9)

    def test_price_dispatch(self):
        """Test price() routes on option type."""
        args = (100.0, 105.0, 30 / 365, 0.02, 0.3)

        assert BlackScholesModel.price(*args, OptionType.CALL) == BlackScholesModel.call(*args)
        assert BlackScholesModel.price(*args, OptionType.PUT) == BlackScholesModel.put(*args)
