"""
Tuition projection — inflate today's annual cost to the start year and expand
it into a multi-period cost schedule.

Rounding is applied to each schedule entry, and the total is the sum of the
rounded entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

from core.config import DEFAULT_CONFIG, EngineConfig
from core.utils import currency_round


@dataclass(frozen=True)
class CostEntry:
    period: int
    cost: float


@dataclass(frozen=True)
class CostSchedule:
    entries: Tuple[CostEntry, ...]
    total_cost: float

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"period": e.period, "cost": e.cost} for e in self.entries],
            columns=["period", "cost"],
        )


@dataclass(frozen=True)
class TuitionProjection:
    """Today's cost, the inflated cost at start, and the schedule built from it."""
    current_annual_cost: float
    future_annual_cost: float
    inflation_rate_pct: float
    schedule: CostSchedule

    @property
    def total_cost(self) -> float:
        return self.schedule.total_cost


def project_future_cost(base_cost: float, inflation_rate: float, years: int) -> float:
    """base_cost * (1 + inflation_rate) ** years. Negative rates deflate."""
    return base_cost * (1.0 + inflation_rate) ** years


def resolve_base_cost(
    school_type: str,
    preferred_region: Optional[str] = None,
    home_region: Optional[str] = None,
    custom_cost: Optional[float] = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """
    Annual cost today for a school type.

    A non-negative custom cost always wins. Public schools use the out-of-region
    baseline when a preferred region is named, is not the "any" wildcard, and
    differs from the home region. An unknown home region counts as different.
    Unknown types fall back to public in-region.
    """
    if custom_cost is not None and custom_cost >= 0:
        return float(custom_cost)

    costs = config.baseline_costs
    public = costs["public"]
    kind = (school_type or "").strip().lower()

    if kind == "public":
        preferred = (preferred_region or "").strip().lower()
        home = (home_region or "").strip().lower()
        out_of_region = bool(preferred) and preferred != config.any_region and preferred != home
        return costs["public-out"] if out_of_region else public
    if kind == "mixed":
        return (public + costs["private"]) / 2
    if kind in costs and kind != "public-out":
        return costs[kind]
    return public


def build_cost_schedule(
    annual_cost: float,
    inflation_rate: float,
    *,
    periods: int = 4,
) -> CostSchedule:
    """Period k costs annual_cost * (1 + inflation_rate) ** (k - 1), rounded per period."""
    entries = tuple(
        CostEntry(period=k, cost=currency_round(annual_cost * (1.0 + inflation_rate) ** (k - 1)))
        for k in range(1, periods + 1)
    )
    return CostSchedule(entries=entries, total_cost=sum(e.cost for e in entries))


def project_tuition(
    base_cost: float,
    inflation_rate: float,
    years: int,
    *,
    periods: int = 4,
) -> TuitionProjection:
    future = project_future_cost(base_cost, inflation_rate, years)
    return TuitionProjection(
        current_annual_cost=base_cost,
        future_annual_cost=currency_round(future),
        inflation_rate_pct=inflation_rate * 100.0,
        schedule=build_cost_schedule(future, inflation_rate, periods=periods),
    )
