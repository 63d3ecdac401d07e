"""
Return sampler — generates an (n_trials × n_years) table of annual returns.

Each row is one plausible market path for the savings horizon:
  Trial 1: 9.1%, 2.4%, 11.8%, ...   (good run)
  Trial 2: -3.0%, 4.2%, 0.7%, ...   (bad start)

Method:
  1. Draw U(-1, 1) shocks from a per-sampler numpy Generator
  2. return = expected_return + shock * volatility
  3. Clip to [min_return, max_return]

Pass a seed (or a Generator) for reproducible runs. Every sampler owns its
generator, so samplers used in parallel do not interleave draws.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import pandas as pd


SeedLike = Union[None, int, np.random.Generator]


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """A fresh Generator for an int/None seed; an existing Generator is used as-is."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


@dataclass(frozen=True)
class ReturnParams:
    """Distribution of one vehicle's annual return."""
    expected_return: float = 0.07
    volatility: float = 0.12
    min_return: float = -0.5
    max_return: float = 0.5

    def summary(self) -> pd.DataFrame:
        return pd.DataFrame([
            {"Variable": "Annual Return", "Mean": self.expected_return, "Volatility": self.volatility,
             "Min": self.min_return, "Max": self.max_return},
        ])


@dataclass
class SampledReturns:
    """Annual returns, shape (n_trials, n_years)."""
    returns: np.ndarray

    @property
    def n_trials(self) -> int:
        return self.returns.shape[0]

    @property
    def n_years(self) -> int:
        return self.returns.shape[1]

    def get_trial(self, trial_idx: int) -> np.ndarray:
        return self.returns[trial_idx].copy()

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame(
            self.returns,
            columns=[f"year_{y + 1}" for y in range(self.n_years)],
        )
        df.insert(0, "trial_id", np.arange(self.n_trials))
        return df

    def summary(self) -> pd.DataFrame:
        """Percentile summary of the sampled annual returns per year."""
        pcts = [0.05, 0.25, 0.50, 0.75, 0.95]
        rows = []
        for y in range(self.n_years):
            col = self.returns[:, y]
            row = {"Year": y + 1, "Mean": np.mean(col), "Std": np.std(col)}
            for p in pcts:
                row[f"P{int(p*100):02d}"] = np.percentile(col, p * 100)
            rows.append(row)
        return pd.DataFrame(rows)


class ReturnSampler:
    """
    Generates N paths of annual returns from ReturnParams.

    Usage:
        sampler = ReturnSampler(ReturnParams(0.07, 0.12), n_trials=1000, seed=42)
        paths = sampler.sample(n_years=10)
        # paths.returns -> (1000, 10) array
    """

    def __init__(
        self,
        params: ReturnParams,
        n_trials: int = 1000,
        seed: SeedLike = None,
    ):
        self.params = params
        self.n_trials = max(int(n_trials), 1)
        self.rng = make_rng(seed)

    def sample(self, n_years: int) -> SampledReturns:
        p = self.params
        years = max(int(n_years), 0)
        shocks = self.rng.uniform(-1.0, 1.0, size=(self.n_trials, years))
        returns = np.clip(p.expected_return + shocks * p.volatility, p.min_return, p.max_return)
        return SampledReturns(returns=returns)
