"""
Black-Scholes option pricing model.

Implements the classic Black-Scholes-Merton formula for European options.
"""

import math

from scipy.special import erf

from bsm_decision_engine.core.types import OptionType
from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)

_SQRT_2 = math.sqrt(2.0)


def norm_cdf(x: float) -> float:
    """Standard normal CDF via the error function."""
    return float(0.5 * (1.0 + erf(x / _SQRT_2)))


class BlackScholesModel:
    """
    Black-Scholes option pricing model.

    Calculates theoretical prices for European calls and puts. Expired
    contracts and non-positive volatility are priced at intrinsic value.
    """

    @staticmethod
    def _d1(
        S: float,
        K: float,
        T: float,
        r: float,
        sigma: float,
    ) -> float:
        """
        Calculate d1 parameter.

        Args:
            S: Spot price
            K: Strike price
            T: Time to expiration (years)
            r: Risk-free rate
            sigma: Volatility

        Returns:
            d1 value
        """
        return (math.log(S / K) + (r + 0.5 * sigma * sigma) * T) / (sigma * math.sqrt(T))

    @staticmethod
    def _d2(d1: float, sigma: float, T: float) -> float:
        """d2 = d1 - sigma * sqrt(T)."""
        return d1 - sigma * math.sqrt(T)

    @staticmethod
    def intrinsic(S: float, K: float, option_type: OptionType) -> float:
        """Exercise value of the option at spot ``S``."""
        if option_type == OptionType.CALL:
            return max(S - K, 0.0)
        return max(K - S, 0.0)

    @classmethod
    def call(cls, S: float, K: float, T: float, r: float, sigma: float) -> float:
        """
        Price a European call.

        Args:
            S: Spot price of underlying
            K: Strike price
            T: Time to expiration (years)
            r: Risk-free rate
            sigma: Volatility (annualized)

        Returns:
            Call value, floored at zero

        Example:
            >>> price = BlackScholesModel.call(
            ...     S=100.0, K=105.0, T=30 / 365, r=0.02, sigma=0.25
            ... )
        """
        if T <= 0 or sigma <= 0:
            return cls.intrinsic(S, K, OptionType.CALL)

        d1 = cls._d1(S, K, T, r, sigma)
        d2 = cls._d2(d1, sigma, T)

        price = S * norm_cdf(d1) - K * math.exp(-r * T) * norm_cdf(d2)
        return max(price, 0.0)

    @classmethod
    def put(cls, S: float, K: float, T: float, r: float, sigma: float) -> float:
        """
        Price a European put.

        Args:
            S: Spot price of underlying
            K: Strike price
            T: Time to expiration (years)
            r: Risk-free rate
            sigma: Volatility (annualized)

        Returns:
            Put value, floored at zero
        """
        if T <= 0 or sigma <= 0:
            return cls.intrinsic(S, K, OptionType.PUT)

        d1 = cls._d1(S, K, T, r, sigma)
        d2 = cls._d2(d1, sigma, T)

        price = K * math.exp(-r * T) * norm_cdf(-d2) - S * norm_cdf(-d1)
        return max(price, 0.0)

    @classmethod
    def price(
        cls,
        S: float,
        K: float,
        T: float,
        r: float,
        sigma: float,
        option_type: OptionType,
    ) -> float:
        """
        Calculate Black-Scholes option price.

        Args:
            S: Spot price of underlying
            K: Strike price
            T: Time to expiration (years)
            r: Risk-free rate
            sigma: Volatility (annualized)
            option_type: CALL or PUT

        Returns:
            Theoretical option price
        """
        if option_type == OptionType.CALL:
            return cls.call(S, K, T, r, sigma)
        return cls.put(S, K, T, r, sigma)
