"""
Scenario runner — composes the calculators into one call: profile in, ScenarioResult out.

  profile -> horizon -> tuition projection -> vehicles x 3 -> need analysis
          -> gap analysis -> aid outlook -> contribution plans -> recommendations

Deterministic: the same profile and as_of date give equal results. Monte Carlo
is not on this path; run_monte_carlo() is a separate entry point for the
risk view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional

import pandas as pd
from dateutil.relativedelta import relativedelta

from advisor.generator import generate_recommendations
from advisor.recommendations import RecommendationSet
from advisor.rules import AdvisorContext
from core.config import DEFAULT_CONFIG, TAX_ADVANTAGED, TAXABLE, EngineConfig
from core.schema import UserProfile
from data_prep.profile_loader import ProfileLike, load_profile
from distributions.sampler import SeedLike

from .gap import GapAnalysis, analyze_gap, savings_goal
from .monte_carlo import MonteCarloSummary, run_monte_carlo
from .need_analysis import AidOutlook, NeedAnalysisResult, assess_aid, calculate_need_analysis
from .optimizer import ContributionPlan, optimize_contributions
from .tuition import TuitionProjection, project_tuition, resolve_base_cost
from .vehicles import VehicleResult, simulate_all_vehicles

logger = logging.getLogger(__name__)

MONTE_CARLO_VEHICLES = (TAX_ADVANTAGED, TAXABLE)


@dataclass(frozen=True)
class Timeline:
    horizon_years: int
    current_age: int
    start_date: date

    @property
    def start_year(self) -> int:
        return self.start_date.year


@dataclass(frozen=True)
class ScenarioResult:
    timeline: Timeline
    tuition: TuitionProjection
    vehicles: Dict[str, VehicleResult]
    need_analysis: NeedAnalysisResult
    gap: GapAnalysis
    aid: AidOutlook
    contribution_plan: ContributionPlan
    recommendations: RecommendationSet

    def vehicle_comparison(self) -> pd.DataFrame:
        """One row per vehicle: balance, contributions, growth, coverage, shortfall."""
        rows = []
        for name, result in self.vehicles.items():
            rows.append({
                "vehicle": name,
                "final_balance": result.final_balance,
                "total_contributions": result.total_contributions,
                "total_growth": result.total_growth,
                "total_tax_benefit": result.total_tax_benefit,
                "effective_return_pct": result.effective_return,
                "coverage_pct": self.gap.coverage[name],
                "shortfall": self.gap.shortfall[name],
            })
        return pd.DataFrame(rows)


class ScenarioEngine:
    """
    Runs scenarios against one immutable EngineConfig.

    Usage:
        engine = ScenarioEngine()
        result = engine.run({"currentAge": "8", "monthlyContribution": "15000", ...})
        result.gap.coverage["tax_advantaged"]
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def run(self, profile: ProfileLike, *, as_of: Optional[date] = None) -> ScenarioResult:
        cfg = self.config
        prof = load_profile(profile)
        as_of = as_of or date.today()

        horizon = prof.horizon_years(cfg.start_age)
        timeline = Timeline(
            horizon_years=horizon,
            current_age=prof.age,
            start_date=as_of + relativedelta(years=horizon),
        )

        # --- Tuition ---
        base_cost = resolve_base_cost(
            prof.school_type,
            prof.preferred_region,
            prof.home_region,
            prof.target_annual_cost,
            config=cfg,
        )
        tuition = project_tuition(
            base_cost, prof.inflation_rate, horizon, periods=cfg.schedule_periods
        )

        # --- Vehicles ---
        risk_return = cfg.risk_return(prof.risk_tier)
        vehicles = simulate_all_vehicles(
            prof.current_savings,
            prof.monthly_contribution,
            risk_return,
            horizon,
            config=cfg,
        )

        # --- Need analysis ---
        need = calculate_need_analysis(
            prof.income_bracket,
            prof.marital_status,
            prof.dependents,
            prof.current_savings,
            prof.guardian_age,
            params=cfg.need_analysis,
        )

        # --- Gap ---
        gap = analyze_gap(tuition.total_cost, prof.savings_goal_pct, vehicles)
        logger.debug(
            "scenario: horizon=%d total_cost=%.0f goal=%.0f",
            horizon, tuition.total_cost, gap.savings_goal,
        )

        # --- Aid ---
        aid = assess_aid(
            need,
            prof.academic_tier,
            tuition.total_cost,
            vehicles[TAX_ADVANTAGED].final_balance,
            params=cfg.need_analysis,
        )

        # --- Contribution plans ---
        plan = optimize_contributions(
            prof.current_savings,
            prof.monthly_contribution,
            risk_return,
            horizon,
            savings_goal(tuition.total_cost, prof.savings_goal_pct),
            gap.shortfall[TAX_ADVANTAGED],
            config=cfg,
        )

        # --- Recommendations ---
        ctx = AdvisorContext(
            profile=prof,
            horizon_years=horizon,
            vehicles=vehicles,
            need=need,
            gap=gap,
            thresholds=cfg.advisor,
            capped_annual_limit=cfg.capped_annual_limit,
        )
        recommendations = generate_recommendations(ctx)

        return ScenarioResult(
            timeline=timeline,
            tuition=tuition,
            vehicles=vehicles,
            need_analysis=need,
            gap=gap,
            aid=aid,
            contribution_plan=plan,
            recommendations=recommendations,
        )

    def run_monte_carlo(
        self,
        profile: ProfileLike,
        *,
        vehicle: str = TAX_ADVANTAGED,
        volatility: Optional[float] = None,
        simulations: Optional[int] = None,
        seed: SeedLike = None,
    ) -> MonteCarloSummary:
        """
        Monte Carlo risk view for one monthly-compounding vehicle of the profile.

        The expected return is the vehicle's deterministic return; volatility
        defaults to the configured value for the profile's risk tier. Only the
        monthly vehicles are supported; any other name raises ValueError.
        """
        if vehicle not in MONTE_CARLO_VEHICLES:
            raise ValueError(
                f"Monte Carlo supports {list(MONTE_CARLO_VEHICLES)}, got {vehicle!r}."
            )
        cfg = self.config
        prof = load_profile(profile)
        expected = cfg.taxable_return if vehicle == TAXABLE else cfg.risk_return(prof.risk_tier)
        vol = cfg.risk_volatility(prof.risk_tier) if volatility is None else volatility
        return run_monte_carlo(
            prof.current_savings,
            prof.monthly_contribution,
            expected,
            vol,
            prof.horizon_years(cfg.start_age),
            cfg.monte_carlo_trials if simulations is None else simulations,
            seed=seed,
            return_bounds=cfg.monte_carlo_return_bounds,
        )


def run_scenario(
    profile: ProfileLike,
    config: Optional[EngineConfig] = None,
    *,
    as_of: Optional[date] = None,
) -> ScenarioResult:
    """Run one deterministic scenario with the default (or given) configuration."""
    return ScenarioEngine(config or DEFAULT_CONFIG).run(profile, as_of=as_of)
