#!/usr/bin/env python3
"""
Replay a close series through the decision engine.

Feeds either a CSV column of closes or a synthetic SPY-like path bar by bar,
prints a signal summary, and writes the per-bar decision log to CSV.

Usage:
    python scripts/run_replay.py --bars 250 --seed 7
    python scripts/run_replay.py --csv data/spy.csv --column Close --output reports/replay.csv
    python scripts/run_replay.py --bars 100 --seed 7 --sweep-rates 0.01 0.02 0.03 0.05
"""

import argparse
import sys
from pathlib import Path

import pandas as pd

from bsm_decision_engine.analysis.replay import (
    replay_bars,
    summarize_replay,
    sweep_parameter,
    synthetic_prices,
)
from bsm_decision_engine.core.config import load_config
from bsm_decision_engine.core.exceptions import ConfigurationError
from bsm_decision_engine.engine import DecisionEngine
from bsm_decision_engine.utils.logging import get_contextual_logger, setup_logging


def load_closes(args: argparse.Namespace) -> pd.Series:
    """Load closes from CSV or synthesize them."""
    if args.csv:
        frame = pd.read_csv(args.csv)
        if args.column not in frame.columns:
            raise SystemExit(f"Column '{args.column}' not found in {args.csv}")
        return frame[args.column].dropna().astype(float).reset_index(drop=True)

    return synthetic_prices(n_bars=args.bars, seed=args.seed)


def main():
    parser = argparse.ArgumentParser(description='Decision engine replay')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='YAML config file (defaults to config/default.yaml if present)',
    )
    parser.add_argument(
        '--csv',
        type=str,
        default=None,
        help='CSV file with a close column (synthetic data if omitted)',
    )
    parser.add_argument(
        '--column',
        type=str,
        default='close',
        help='Close column name in the CSV',
    )
    parser.add_argument(
        '--bars',
        type=int,
        default=100,
        help='Number of synthetic bars',
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for synthetic data and the path simulator',
    )
    parser.add_argument(
        '--simulations',
        type=int,
        default=None,
        help='Override Monte Carlo paths per bar',
    )
    parser.add_argument(
        '--sweep-rates',
        type=float,
        nargs='+',
        default=None,
        help='Risk-free rates to compare on the same closes',
    )
    parser.add_argument(
        '--output',
        type=str,
        default='reports/replay.csv',
        help='Path for the per-bar decision log',
    )
    args = parser.parse_args()

    try:
        config = load_config(Path(args.config) if args.config else None)
        overrides = {}
        if args.seed is not None:
            overrides['random_seed'] = args.seed
        if args.simulations is not None:
            overrides['monte_carlo_simulations'] = args.simulations
        engine_config = config.engine.with_updates(**overrides)
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging)

    closes = load_closes(args)
    logger = get_contextual_logger("run_replay", source=args.csv or "synthetic")
    logger.info(f"Replaying {len(closes)} bars")

    print("=" * 60)
    print("DECISION ENGINE REPLAY")
    print("=" * 60)
    print(f"Bars: {len(closes)}")
    print(f"Price range: {closes.min():.2f} - {closes.max():.2f}")
    print(f"Simulations per bar: {engine_config.monte_carlo_simulations:,}")

    frame = replay_bars(DecisionEngine(engine_config), closes)
    summary = summarize_replay(frame)

    print("\nSignal Summary:")
    print(f"  Evaluated bars:     {summary['evaluated_bars']}")
    print(f"  Buy signals:        {summary['buy']}")
    print(f"  Sell signals:       {summary['sell']}")
    print(f"  Hold signals:       {summary['hold']}")
    print(f"  Average confidence: {summary['mean_confidence']:.3f}")

    evaluated = frame[frame['confidence'] > 0]
    if len(evaluated):
        print("\nEvery 10th evaluated bar:")
        print(
            evaluated.iloc[::10][
                ['bar_index', 'close', 'action', 'buy_signal', 'sell_signal', 'confidence']
            ].to_string(index=False, float_format=lambda x: f"{x:.3f}")
        )

    if args.sweep_rates:
        print("\nRisk-Free Rate Sensitivity:")
        sweep = sweep_parameter(closes, 'risk_free_rate', args.sweep_rates, engine_config)
        print(sweep[['risk_free_rate', 'buy', 'sell', 'hold', 'mean_confidence']].to_string(index=False))

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output, index=False)
    print(f"\nDecision log saved to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
