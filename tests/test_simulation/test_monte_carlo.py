"""
Tests for the GBM path simulator.
"""

import numpy as np
import pytest

from bsm_decision_engine.simulation.monte_carlo import (
    PathSimulator,
    SimulationSummary,
    TIME_STEP,
)


@pytest.mark.unit
class TestPathSimulator:
    """Tests for PathSimulator.simulate."""

    def test_returns_one_price_per_path(self, simulator):
        """Test output length equals number of paths."""
        terminal = simulator.simulate(100.0, 0.05, 0.2, 21, 250)

        assert terminal.shape == (250,)
        assert np.all(terminal > 0)

    def test_zero_drift_zero_vol_is_constant(self, simulator):
        """Test no stochastic movement without drift or volatility."""
        terminal = simulator.simulate(123.45, 0.0, 0.0, 21, 100)

        assert len(terminal) == 100
        assert np.all(terminal == 123.45)

    def test_zero_vol_deterministic_growth(self, simulator):
        """Test pure drift compounds deterministically."""
        terminal = simulator.simulate(100.0, 0.5, 0.0, 21, 10)

        expected = 100.0 * np.exp(0.5 * 21 * TIME_STEP)
        np.testing.assert_allclose(terminal, expected, rtol=1e-12)

    def test_zero_days_returns_spot(self, simulator):
        """Test a zero horizon leaves prices at spot."""
        assert np.all(simulator.simulate(50.0, 0.1, 0.3, 0, 5) == 50.0)

    def test_same_seed_same_paths(self):
        """Test seeded simulators are reproducible."""
        a = PathSimulator.from_seed(11).simulate(100.0, 0.1, 0.25, 21, 500)
        b = PathSimulator.from_seed(11).simulate(100.0, 0.1, 0.25, 21, 500)

        np.testing.assert_array_equal(a, b)

    def test_state_advances_between_calls(self, simulator):
        """Test consecutive calls draw fresh shocks."""
        first = simulator.simulate(100.0, 0.0, 0.2, 21, 100)
        second = simulator.simulate(100.0, 0.0, 0.2, 21, 100)

        assert not np.array_equal(first, second)

    def test_matches_sequential_loop(self):
        """Test vectorized draws follow path-major, day-minor order."""
        days, n_paths, drift, sigma = 5, 4, 0.1, 0.3
        terminal = PathSimulator.from_seed(5).simulate(100.0, drift, sigma, days, n_paths)

        rng = np.random.default_rng(5)
        shocks = rng.standard_normal((n_paths, days))
        expected = []
        for path in range(n_paths):
            price = 100.0
            for day in range(days):
                log_return = (drift - 0.5 * sigma**2) * TIME_STEP + sigma * np.sqrt(
                    TIME_STEP
                ) * shocks[path, day]
                price *= np.exp(log_return)
            expected.append(price)

        np.testing.assert_allclose(terminal, expected, rtol=1e-12)

    @pytest.mark.slow
    def test_terminal_mean_matches_gbm(self):
        """Test E[S_T] = S0 * exp(mu * T) within sampling error."""
        simulator = PathSimulator.from_seed(123)
        terminal = simulator.simulate(100.0, 0.2, 0.3, 21, 50_000)

        expected = 100.0 * np.exp(0.2 * 21 / 252)
        assert terminal.mean() == pytest.approx(expected, rel=0.005)

    def test_injected_generator_is_used(self):
        """Test the simulator draws from the injected generator."""
        rng = np.random.default_rng(99)
        simulator = PathSimulator(rng)

        assert simulator.rng is rng
        before = rng.bit_generator.state["state"]["state"]
        simulator.simulate(100.0, 0.0, 0.2, 3, 2)
        assert rng.bit_generator.state["state"]["state"] != before

    def test_spawn_independent(self):
        """Test child simulators are reproducible and distinct."""
        children_a = PathSimulator.from_seed(8).spawn_independent(3)
        children_b = PathSimulator.from_seed(8).spawn_independent(3)

        draws_a = [c.simulate(100.0, 0.0, 0.2, 21, 50) for c in children_a]
        draws_b = [c.simulate(100.0, 0.0, 0.2, 21, 50) for c in children_b]

        for a, b in zip(draws_a, draws_b):
            np.testing.assert_array_equal(a, b)
        assert not np.array_equal(draws_a[0], draws_a[1])


@pytest.mark.unit
class TestSummarize:
    """Tests for outcome statistics."""

    def test_bands_and_expected_return(self):
        """Test +/-5% bands are strict and expected return is relative."""
        terminal = np.array([110.0, 105.0, 100.0, 95.0, 90.0])
        summary = PathSimulator.summarize(terminal, current_price=100.0)

        assert isinstance(summary, SimulationSummary)
        assert summary.n_paths == 5
        assert summary.mean_price == pytest.approx(100.0)
        assert summary.profit_probability == pytest.approx(0.2)
        assert summary.loss_probability == pytest.approx(0.2)
        assert summary.expected_return == pytest.approx(0.0)

    def test_all_up(self):
        """Test all paths above the band."""
        summary = PathSimulator.summarize(np.full(10, 120.0), current_price=100.0)

        assert summary.profit_probability == 1.0
        assert summary.loss_probability == 0.0
        assert summary.expected_return == pytest.approx(0.2)

    def test_empty(self):
        """Test empty batch yields neutral statistics."""
        summary = PathSimulator.summarize(np.array([]), current_price=100.0)

        assert summary.n_paths == 0
        assert summary.expected_return == 0.0
