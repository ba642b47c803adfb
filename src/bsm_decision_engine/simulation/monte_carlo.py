"""
Monte Carlo price path simulation under geometric Brownian motion.

Generates terminal prices for a fixed horizon from a single stateful
random generator. The generator advances on every call and is never
reseeded between bars, so consecutive simulations draw fresh shocks.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)

TIME_STEP = 1.0 / 252.0  # Daily step in years
PROFIT_BAND = 1.05
LOSS_BAND = 0.95


@dataclass(frozen=True)
class SimulationSummary:
    """Outcome statistics of a batch of simulated terminal prices."""

    n_paths: int
    mean_price: float
    profit_probability: float  # Share of paths ending above +5%
    loss_probability: float  # Share of paths ending below -5%
    expected_return: float  # (mean - spot) / spot


class PathSimulator:
    """
    GBM terminal price simulator.

    Each path applies ``days`` discrete steps of
    ``log_return = (drift - sigma^2 / 2) * dt + sigma * sqrt(dt) * Z``.
    Shocks are drawn path by path, day by day, from one generator.

    Usage:
        simulator = PathSimulator.from_seed(42)
        terminal = simulator.simulate(100.0, drift=0.1, sigma=0.2, days=21, n_paths=1000)
        summary = PathSimulator.summarize(terminal, current_price=100.0)
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        """
        Args:
            rng: Random generator to draw shocks from. If None, one is
                seeded from OS entropy.
        """
        self._rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_seed(cls, seed: Optional[int]) -> "PathSimulator":
        """Create a simulator with a freshly seeded generator."""
        return cls(np.random.default_rng(seed))

    @property
    def rng(self) -> np.random.Generator:
        """The generator owned by this simulator."""
        return self._rng

    def simulate(
        self,
        S0: float,
        drift: float,
        sigma: float,
        days: int,
        n_paths: int,
    ) -> np.ndarray:
        """
        Simulate terminal prices.

        Args:
            S0: Starting price
            drift: Annualized drift
            sigma: Annualized volatility
            days: Number of daily steps per path
            n_paths: Number of independent paths

        Returns:
            Array of ``n_paths`` terminal prices
        """
        prices = np.full(n_paths, S0, dtype=float)
        if days <= 0 or n_paths <= 0:
            return prices

        # Row-major fill keeps the per-path sequential draw order
        shocks = self._rng.standard_normal((n_paths, days))

        drift_term = (drift - 0.5 * sigma * sigma) * TIME_STEP
        diffusion = sigma * np.sqrt(TIME_STEP)

        for day in range(days):
            prices *= np.exp(drift_term + diffusion * shocks[:, day])

        return prices

    @staticmethod
    def summarize(terminal: np.ndarray, current_price: float) -> SimulationSummary:
        """
        Compute outcome statistics relative to the current price.

        Args:
            terminal: Simulated terminal prices
            current_price: Spot price at simulation start

        Returns:
            SimulationSummary for the batch
        """
        n_paths = len(terminal)
        if n_paths == 0:
            return SimulationSummary(0, current_price, 0.0, 0.0, 0.0)

        mean_price = float(np.mean(terminal))
        profit = int(np.count_nonzero(terminal > current_price * PROFIT_BAND))
        loss = int(np.count_nonzero(terminal < current_price * LOSS_BAND))

        return SimulationSummary(
            n_paths=n_paths,
            mean_price=mean_price,
            profit_probability=profit / n_paths,
            loss_probability=loss / n_paths,
            expected_return=(mean_price - current_price) / current_price,
        )

    def spawn_independent(self, n: int) -> list["PathSimulator"]:
        """
        Create ``n`` simulators on statistically independent child streams.

        Children are derived from this generator's seed sequence, so
        parallel workers stay reproducible for a seeded parent.

        Args:
            n: Number of child simulators

        Returns:
            List of independent PathSimulator instances
        """
        return [PathSimulator(child) for child in self._rng.spawn(n)]
