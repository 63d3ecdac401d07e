"""
Engine configuration — rate tables, baseline costs, need-analysis allowances,
advisor thresholds.

Everything here is data. The engine receives one EngineConfig at construction;
tests build alternates with dataclasses.replace().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Optional, Tuple


RiskTier = Literal["conservative", "moderate", "aggressive"]

TAX_ADVANTAGED = "tax_advantaged"
TAXABLE = "taxable"
CAPPED = "capped"

VEHICLE_NAMES: Tuple[str, ...] = (TAX_ADVANTAGED, TAXABLE, CAPPED)


def _freeze_tables(obj, *names: str) -> None:
    """Replace dict-valued fields of a frozen dataclass with read-only views."""
    for name in names:
        object.__setattr__(obj, name, MappingProxyType(dict(getattr(obj, name))))


def _investment_returns() -> Dict[str, float]:
    return {
        "conservative": 0.05,
        "moderate": 0.07,
        "aggressive": 0.09,
    }


def _return_volatility() -> Dict[str, float]:
    # used only by the Monte Carlo risk view
    return {
        "conservative": 0.08,
        "moderate": 0.12,
        "aggressive": 0.18,
    }


def _baseline_costs() -> Dict[str, float]:
    return {
        "public": 250000.0,
        "public-out": 450000.0,
        "private": 550000.0,
        "community": 40000.0,
        "trade": 150000.0,
    }


def _income_brackets() -> Dict[str, float]:
    return {
        "under-30k": 25000.0,
        "30k-50k": 40000.0,
        "50k-75k": 62500.0,
        "75k-100k": 87500.0,
        "100k-150k": 125000.0,
        "150k-200k": 175000.0,
        "200k-250k": 225000.0,
        "over-250k": 300000.0,
    }


@dataclass(frozen=True)
class VehicleSpec:
    """How one savings vehicle grows."""
    name: str
    label: str
    periods_per_year: int = 12          # 12 = monthly compounding, 1 = annual
    annual_return: Optional[float] = None  # None -> use the profile's risk-tier return
    tax_benefit_rate: float = 0.0
    annual_cap: Optional[float] = None


@dataclass(frozen=True)
class NeedAnalysisParams:
    """Simplified expected-family-contribution allowances and rates."""
    income_brackets: Mapping[str, float] = field(default_factory=_income_brackets)
    default_income: float = 87500.0

    standard_allowance_married: float = 25900.0
    standard_allowance_other: float = 12950.0
    state_local_tax_rate: float = 0.05
    employment_allowance_rate: float = 0.35
    employment_allowance_cap: float = 4000.0

    # two-bracket progressive schedule on available income
    income_threshold: float = 31300.0
    lower_income_rate: float = 0.22
    upper_income_rate: float = 0.47

    # asset protection allowance
    reference_guardian_age: int = 45
    protection_base_married: float = 30000.0
    protection_step_married: float = 600.0
    protection_base_other: float = 15000.0
    protection_step_other: float = 400.0
    asset_rate: float = 0.12

    per_dependent_offset: float = 2000.0

    reference_college_cost: float = 30000.0
    grant_threshold: float = 6500.0
    grant_cap: float = 6500.0

    # academic tiers that qualify for merit awards
    merit_tiers: Tuple[str, ...] = ("excellent", "good")

    def __post_init__(self):
        _freeze_tables(self, "income_brackets")


@dataclass(frozen=True)
class AdvisorThresholds:
    """Trigger levels for the recommendation rules."""
    min_shortfall: float = 1000.0
    risk_upgrade_min_horizon: int = 10
    liquidity_months: int = 6
    liquidity_max_pct: float = 20.0
    aid_contribution_threshold: float = 15000.0
    aid_asset_threshold: float = 3000.0
    aid_increase_rate: float = 0.15
    capped_vehicle_max_age: int = 10
    external_contribution_min_horizon: int = 5

    # trajectory confidence tiers (coverage %)
    confidence_high: float = 80.0
    confidence_medium: float = 60.0
    # trajectory narrative bands (coverage %)
    on_track_coverage: float = 90.0
    progressing_coverage: float = 70.0


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for one ScenarioEngine."""

    investment_returns: Mapping[str, float] = field(default_factory=_investment_returns)
    return_volatility: Mapping[str, float] = field(default_factory=_return_volatility)
    default_risk_tier: str = "moderate"

    baseline_costs: Mapping[str, float] = field(default_factory=_baseline_costs)
    default_school_type: str = "public"
    any_region: str = "any"

    tax_benefit_rate: float = 0.05
    taxable_return: float = 0.02
    capped_annual_limit: float = 2000.0

    # contribution optimizer: the aggressive plan closes this multiple of the shortfall
    aggressive_shortfall_factor: float = 1.2

    start_age: int = 18
    schedule_periods: int = 4

    monte_carlo_trials: int = 1000
    monte_carlo_return_bounds: Tuple[float, float] = (-0.5, 0.5)

    need_analysis: NeedAnalysisParams = field(default_factory=NeedAnalysisParams)
    advisor: AdvisorThresholds = field(default_factory=AdvisorThresholds)

    def __post_init__(self):
        _freeze_tables(self, "investment_returns", "return_volatility", "baseline_costs")

    def risk_return(self, risk_tier: str) -> float:
        """Annual return for a risk tier; unknown tiers use the default tier."""
        if risk_tier in self.investment_returns:
            return self.investment_returns[risk_tier]
        return self.investment_returns[self.default_risk_tier]

    def risk_volatility(self, risk_tier: str) -> float:
        if risk_tier in self.return_volatility:
            return self.return_volatility[risk_tier]
        return self.return_volatility[self.default_risk_tier]

    def vehicle_specs(self) -> Tuple[VehicleSpec, ...]:
        """The three vehicles every scenario simulates, in report order."""
        return (
            VehicleSpec(
                name=TAX_ADVANTAGED,
                label="Tax-advantaged education plan",
                periods_per_year=12,
                tax_benefit_rate=self.tax_benefit_rate,
            ),
            VehicleSpec(
                name=TAXABLE,
                label="Taxable savings",
                periods_per_year=12,
                annual_return=self.taxable_return,
            ),
            VehicleSpec(
                name=CAPPED,
                label="Contribution-capped plan",
                periods_per_year=1,
                annual_cap=self.capped_annual_limit,
            ),
        )


DEFAULT_CONFIG = EngineConfig()
