"""Stochastic price path simulation."""

from bsm_decision_engine.simulation.monte_carlo import (
    PathSimulator,
    SimulationSummary,
    TIME_STEP,
)

__all__ = [
    "PathSimulator",
    "SimulationSummary",
    "TIME_STEP",
]
