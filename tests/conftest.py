"""
Shared pytest fixtures for the test suite.

Provides reusable price series, configurations and seeded engines.
"""

from pathlib import Path

import numpy as np
import pytest

from bsm_decision_engine.core.config import Config, EngineConfig, LoggingConfig
from bsm_decision_engine.core.types import Bar
from bsm_decision_engine.engine import DecisionEngine
from bsm_decision_engine.simulation.monte_carlo import PathSimulator


@pytest.fixture
def engine_config() -> EngineConfig:
    """Default parameters with a fixed simulator seed."""
    return EngineConfig(random_seed=42)


@pytest.fixture
def engine(engine_config: EngineConfig) -> DecisionEngine:
    """Seeded engine with default parameters."""
    return DecisionEngine(engine_config)


@pytest.fixture
def simulator() -> PathSimulator:
    """Seeded path simulator."""
    return PathSimulator.from_seed(42)


@pytest.fixture
def harness_prices() -> list[float]:
    """The 20-bar series used by the standalone harness."""
    return [
        100.0, 101.5, 99.8, 102.3, 103.1, 101.9, 104.2, 105.8, 103.4, 106.1,
        107.3, 105.9, 108.2, 109.5, 107.8, 110.1, 108.7, 111.3, 109.9, 112.5,
    ]


@pytest.fixture
def noisy_prices() -> list[float]:
    """100 SPY-like closes: 1.5% daily volatility starting at 400."""
    rng = np.random.default_rng(2024)
    daily = 1.0 + rng.normal(0.0005, 0.015, 99)
    return list(400.0 * np.concatenate([[1.0], np.cumprod(daily)]))


@pytest.fixture
def declining_prices() -> list[float]:
    """60 closes falling 1% per bar."""
    return [100.0 * 0.99**i for i in range(60)]


@pytest.fixture
def sample_bar() -> Bar:
    """Sample OHLCV bar."""
    return Bar(open=450.0, high=452.0, low=449.0, close=451.5, volume=1_000_000, bar_index=1)


@pytest.fixture
def default_config() -> Config:
    """Default aggregate configuration for testing."""
    return Config(
        engine=EngineConfig(monte_carlo_simulations=500, random_seed=7),
        logging=LoggingConfig(
            level="WARNING",  # Reduce noise in tests
            format="json",
            console_output=False,
        ),
    )


@pytest.fixture
def temp_config_file(tmp_path: Path, default_config: Config) -> Path:
    """Create temporary config file for testing."""
    config_path = tmp_path / "test_config.yaml"
    default_config.to_yaml(config_path)
    return config_path


# Markers for test categorization
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
