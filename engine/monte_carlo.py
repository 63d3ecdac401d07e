"""
Monte Carlo runner — resimulates one vehicle's growth under random annual returns.

Per trial, per year: draw one annual return (distributions.sampler), then
compound monthly at return / 12 and add the monthly contribution. All trials
are stepped together as numpy arrays.

Outcome statistics use the sorted trial balances with
index = floor(p / 100 * n_trials), so worst <= p10 <= p25 <= median <= p75 <= p90 <= best.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from core.utils import currency_round, currency_round_array
from distributions.sampler import ReturnParams, ReturnSampler, SampledReturns, SeedLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonteCarloSummary:
    mean: float
    median: float
    percentile10: float
    percentile25: float
    percentile75: float
    percentile90: float
    worst_case: float
    best_case: float
    success_rate: float  # fraction of trials ending with a non-negative balance
    n_trials: int
    outcomes: Tuple[float, ...]  # sorted ascending

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {"Metric": "Mean", "Value": self.mean},
            {"Metric": "Worst Case", "Value": self.worst_case},
            {"Metric": "P10", "Value": self.percentile10},
            {"Metric": "P25", "Value": self.percentile25},
            {"Metric": "Median", "Value": self.median},
            {"Metric": "P75", "Value": self.percentile75},
            {"Metric": "P90", "Value": self.percentile90},
            {"Metric": "Best Case", "Value": self.best_case},
            {"Metric": "Success Rate", "Value": self.success_rate},
        ]
        return pd.DataFrame(rows)


def _percentile_index(p: float, n: int) -> int:
    return min(int(math.floor(p / 100.0 * n)), n - 1)


def summarize_outcomes(outcomes: np.ndarray) -> MonteCarloSummary:
    """Aggregate final balances into the distribution summary."""
    ordered = np.sort(np.asarray(outcomes, dtype=float))
    n = len(ordered)
    if n == 0:
        return MonteCarloSummary(
            mean=0.0, median=0.0, percentile10=0.0, percentile25=0.0,
            percentile75=0.0, percentile90=0.0, worst_case=0.0, best_case=0.0,
            success_rate=0.0, n_trials=0, outcomes=(),
        )

    def pct(p: float) -> float:
        return float(ordered[_percentile_index(p, n)])

    return MonteCarloSummary(
        mean=currency_round(float(np.mean(ordered))),
        median=pct(50),
        percentile10=pct(10),
        percentile25=pct(25),
        percentile75=pct(75),
        percentile90=pct(90),
        worst_case=float(ordered[0]),
        best_case=float(ordered[-1]),
        success_rate=float(np.mean(ordered >= 0)),
        n_trials=n,
        outcomes=tuple(float(v) for v in ordered),
    )


def simulate_paths(
    initial_balance: float,
    monthly_contribution: float,
    sampled: SampledReturns,
) -> np.ndarray:
    """
    Year-end balances for every trial, shape (n_trials, n_years).
    Unrounded; callers round what they report.
    """
    balance = np.full(sampled.n_trials, float(initial_balance))
    year_end = np.zeros((sampled.n_trials, sampled.n_years), dtype=float)
    for y in range(sampled.n_years):
        monthly_rate = sampled.returns[:, y] / 12.0
        for _ in range(12):
            balance = balance * (1.0 + monthly_rate) + monthly_contribution
        year_end[:, y] = balance
    return year_end


def balance_bands(
    year_end: np.ndarray,
    *,
    percentiles: Tuple[float, ...] = (0.10, 0.50, 0.90),
) -> pd.DataFrame:
    """Per-year percentile bands of trial balances (for fan charts)."""
    rows = []
    for y in range(year_end.shape[1]):
        col = year_end[:, y]
        row = {"year": y + 1, "mean": float(np.mean(col))}
        for p in percentiles:
            row[f"p{int(p * 100):02d}"] = float(np.percentile(col, p * 100))
        rows.append(row)
    return pd.DataFrame(rows)


def _sample_returns(
    expected_return: float,
    volatility: float,
    years: int,
    simulations: int,
    seed: SeedLike,
    return_bounds: Tuple[float, float],
) -> SampledReturns:
    low, high = return_bounds
    params = ReturnParams(
        expected_return=expected_return,
        volatility=volatility,
        min_return=low,
        max_return=high,
    )
    return ReturnSampler(params, n_trials=simulations, seed=seed).sample(years)


def run_monte_carlo(
    initial_balance: float,
    monthly_contribution: float,
    expected_return: float,
    volatility: float,
    years: int,
    simulations: int = 1000,
    *,
    seed: SeedLike = None,
    return_bounds: Tuple[float, float] = (-0.5, 0.5),
) -> MonteCarloSummary:
    """
    Run the return-uncertainty simulation for one vehicle.

    Parameters
    ----------
    initial_balance, monthly_contribution : float
        Same meaning as for the deterministic vehicle simulator.
    expected_return : float
        Center of the annual return draw (decimal).
    volatility : float
        Half-width of the uniform shock: return = expected + U(-1, 1) * volatility.
    years : int
        Horizon; 0 leaves every trial at the initial balance.
    simulations : int
        Trial count, at least 1.
    seed : int, numpy Generator, or None
        None draws fresh entropy, so results are not reproducible.
    """
    sampled = _sample_returns(expected_return, volatility, years, simulations, seed, return_bounds)
    logger.debug(
        "monte carlo: %d trials x %d years, expected=%.4f volatility=%.4f",
        sampled.n_trials, sampled.n_years, expected_return, volatility,
    )

    if sampled.n_years == 0:
        final = np.full(sampled.n_trials, float(initial_balance))
    else:
        final = simulate_paths(initial_balance, monthly_contribution, sampled)[:, -1]

    return summarize_outcomes(currency_round_array(final))


def run_monte_carlo_bands(
    initial_balance: float,
    monthly_contribution: float,
    expected_return: float,
    volatility: float,
    years: int,
    simulations: int = 1000,
    *,
    seed: SeedLike = None,
    percentiles: Tuple[float, ...] = (0.10, 0.50, 0.90),
    return_bounds: Tuple[float, float] = (-0.5, 0.5),
) -> pd.DataFrame:
    """For the same seed, the draws of run_monte_carlo reported as per-year balance bands."""
    sampled = _sample_returns(expected_return, volatility, years, simulations, seed, return_bounds)
    year_end = simulate_paths(initial_balance, monthly_contribution, sampled)
    return balance_bands(year_end, percentiles=percentiles)
