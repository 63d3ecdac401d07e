"""
Savings vehicle simulator — one compounding recurrence for every vehicle.

  monthly vehicles: balance = balance * (1 + r/12) + monthly, 12 steps per period
  capped vehicle:   balance = balance * (1 + r) + min(annual, cap), 1 step per period

Per-period values are rounded to currency units for reporting; the running
balance keeps full precision. Totals are rounded once at the end and
total_growth is derived from the rounded totals, so
final_balance == total_contributions + total_growth holds exactly.

Negative contributions or returns are not rejected; balances can fall below 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd

from core.config import DEFAULT_CONFIG, EngineConfig, VehicleSpec
from core.utils import currency_round


@dataclass(frozen=True)
class PeriodProjection:
    period: int
    balance: float
    contributions: float
    growth: float
    tax_benefit: float = 0.0


@dataclass(frozen=True)
class VehicleResult:
    name: str
    final_balance: float
    total_contributions: float
    total_growth: float
    total_tax_benefit: float
    effective_return: float
    periods: Tuple[PeriodProjection, ...]
    contribution_limit: Optional[float] = None

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "period": p.period,
                    "balance": p.balance,
                    "contributions": p.contributions,
                    "growth": p.growth,
                    "tax_benefit": p.tax_benefit,
                }
                for p in self.periods
            ],
            columns=["period", "balance", "contributions", "growth", "tax_benefit"],
        )


def simulate_vehicle(
    initial_balance: float,
    contribution: float,
    annual_return: float,
    years: int,
    *,
    periods_per_year: int = 12,
    annual_cap: Optional[float] = None,
    tax_benefit_rate: float = 0.0,
    name: str = "vehicle",
) -> VehicleResult:
    """
    Simulate one vehicle over `years` periods.

    Parameters
    ----------
    initial_balance : float
        Starting balance; counted as a contribution.
    contribution : float
        Monthly amount. For annual compounding (periods_per_year=1) the
        requested annual amount is contribution * 12, limited by annual_cap.
    annual_return : float
        Annual rate as a decimal; each step uses annual_return / periods_per_year.
    years : int
        Horizon. 0 yields no periods and the initial balance unchanged.
    periods_per_year : int
        12 (monthly compounding) or 1 (annual compounding).
    annual_cap : float, optional
        Ceiling on a period's total contribution.
    tax_benefit_rate : float
        Modeled benefit per unit contributed in a period; 0 for non-advantaged vehicles.
    """
    steps = max(int(periods_per_year), 1)
    step_rate = annual_return / steps
    requested = contribution * 12
    period_contribution = requested if annual_cap is None else min(requested, annual_cap)
    step_contribution = period_contribution / steps

    balance = float(initial_balance)
    total_contributions = float(initial_balance)
    total_tax_benefit = 0.0
    periods: List[PeriodProjection] = []

    for period in range(1, max(int(years), 0) + 1):
        start = balance
        for _ in range(steps):
            balance = balance * (1.0 + step_rate) + step_contribution
        total_contributions += period_contribution
        tax_benefit = period_contribution * tax_benefit_rate
        total_tax_benefit += tax_benefit

        periods.append(
            PeriodProjection(
                period=period,
                balance=currency_round(balance),
                contributions=currency_round(period_contribution),
                growth=currency_round(balance - start - period_contribution),
                tax_benefit=currency_round(tax_benefit),
            )
        )

    final_balance = currency_round(balance)
    contributions_rounded = currency_round(total_contributions)
    total_growth = final_balance - contributions_rounded
    effective_return = (
        total_growth / contributions_rounded * 100.0 if contributions_rounded != 0 else 0.0
    )

    return VehicleResult(
        name=name,
        final_balance=final_balance,
        total_contributions=contributions_rounded,
        total_growth=total_growth,
        total_tax_benefit=currency_round(total_tax_benefit),
        effective_return=effective_return,
        periods=tuple(periods),
        contribution_limit=annual_cap,
    )


def simulate_spec(
    spec: VehicleSpec,
    initial_balance: float,
    monthly_contribution: float,
    risk_return: float,
    years: int,
) -> VehicleResult:
    """Run simulate_vehicle with the parameters a VehicleSpec declares."""
    annual_return = risk_return if spec.annual_return is None else spec.annual_return
    return simulate_vehicle(
        initial_balance,
        monthly_contribution,
        annual_return,
        years,
        periods_per_year=spec.periods_per_year,
        annual_cap=spec.annual_cap,
        tax_benefit_rate=spec.tax_benefit_rate,
        name=spec.name,
    )


def simulate_tax_advantaged(
    initial_balance: float,
    monthly_contribution: float,
    annual_return: float,
    years: int,
    *,
    tax_benefit_rate: float = DEFAULT_CONFIG.tax_benefit_rate,
) -> VehicleResult:
    return simulate_vehicle(
        initial_balance, monthly_contribution, annual_return, years,
        tax_benefit_rate=tax_benefit_rate, name="tax_advantaged",
    )


def simulate_taxable(
    initial_balance: float,
    monthly_contribution: float,
    years: int,
    *,
    annual_return: float = DEFAULT_CONFIG.taxable_return,
) -> VehicleResult:
    return simulate_vehicle(
        initial_balance, monthly_contribution, annual_return, years, name="taxable",
    )


def simulate_capped(
    initial_balance: float,
    monthly_contribution: float,
    annual_return: float,
    years: int,
    *,
    annual_cap: float = DEFAULT_CONFIG.capped_annual_limit,
) -> VehicleResult:
    return simulate_vehicle(
        initial_balance, monthly_contribution, annual_return, years,
        periods_per_year=1, annual_cap=annual_cap, name="capped",
    )


def simulate_all_vehicles(
    initial_balance: float,
    monthly_contribution: float,
    risk_return: float,
    years: int,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Dict[str, VehicleResult]:
    """Simulate every configured vehicle under identical inputs."""
    return {
        spec.name: simulate_spec(spec, initial_balance, monthly_contribution, risk_return, years)
        for spec in config.vehicle_specs()
    }
