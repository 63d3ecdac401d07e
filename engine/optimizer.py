"""
Contribution optimizer — what-if monthly plans for the tax-advantaged vehicle.

  current:     the profile's monthly contribution
  recommended: current + round(shortfall / months)
  aggressive:  current + round(shortfall * factor / months)

Each plan is resimulated so its coverage reflects compounding, not just the
linear share of the shortfall.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pandas as pd

from core.config import DEFAULT_CONFIG, TAX_ADVANTAGED, EngineConfig
from core.utils import currency_round

from .gap import coverage_pct
from .vehicles import simulate_spec


@dataclass(frozen=True)
class ContributionScenario:
    name: str
    monthly_contribution: float
    final_balance: float
    coverage: float


@dataclass(frozen=True)
class ContributionPlan:
    scenarios: Tuple[ContributionScenario, ...]

    def get(self, name: str) -> ContributionScenario:
        for scenario in self.scenarios:
            if scenario.name == name:
                return scenario
        raise KeyError(f"No contribution scenario '{name}'.")

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "scenario": s.name,
                    "monthly_contribution": s.monthly_contribution,
                    "final_balance": s.final_balance,
                    "coverage_pct": s.coverage,
                }
                for s in self.scenarios
            ],
            columns=["scenario", "monthly_contribution", "final_balance", "coverage_pct"],
        )


def optimize_contributions(
    initial_balance: float,
    monthly_contribution: float,
    risk_return: float,
    years: int,
    savings_goal: float,
    shortfall: float,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ContributionPlan:
    """
    Build the current / recommended / aggressive plans.

    Parameters
    ----------
    shortfall : float
        The tax-advantaged vehicle's shortfall against savings_goal.
    years : int
        Horizon; the shortfall is spread over max(years, 1) * 12 months.
    """
    spec = next(s for s in config.vehicle_specs() if s.name == TAX_ADVANTAGED)
    months = max(int(years), 1) * 12
    plans = (
        ("current", monthly_contribution),
        ("recommended", monthly_contribution + currency_round(shortfall / months)),
        (
            "aggressive",
            monthly_contribution
            + currency_round(shortfall * config.aggressive_shortfall_factor / months),
        ),
    )

    scenarios = []
    for name, monthly in plans:
        result = simulate_spec(spec, initial_balance, monthly, risk_return, years)
        scenarios.append(
            ContributionScenario(
                name=name,
                monthly_contribution=monthly,
                final_balance=result.final_balance,
                coverage=coverage_pct(result.final_balance, savings_goal),
            )
        )
    return ContributionPlan(scenarios=tuple(scenarios))
