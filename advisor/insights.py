"""
Narrative insights — three short readings of the scenario that accompany the
recommendations: savings trajectory, aid eligibility, vehicle comparison.
"""

from __future__ import annotations

from typing import Tuple

from core.config import TAX_ADVANTAGED, TAXABLE

from .recommendations import Insight
from .rules import AdvisorContext


def confidence_level(coverage: float, *, high: float = 80.0, medium: float = 60.0) -> str:
    if coverage > high:
        return "high"
    if coverage > medium:
        return "medium"
    return "low"


def savings_trajectory_insight(ctx: AdvisorContext) -> Insight:
    t = ctx.thresholds
    coverage = ctx.gap.coverage[TAX_ADVANTAGED]
    if coverage >= t.on_track_coverage:
        narrative = "You're on track to meet your education savings goal. Consider optimizing for tax benefits."
    elif coverage >= t.progressing_coverage:
        narrative = "You're making good progress. Small adjustments can help you reach your goal."
    else:
        narrative = (
            "Significant action is needed to reach your savings goal. "
            "Consider increasing contributions or extending the timeline."
        )
    return Insight(
        id="savings-trajectory",
        title="Savings Trajectory Analysis",
        data={
            "on_track_pct": round(coverage),
            "projected_shortfall": ctx.gap.shortfall[TAX_ADVANTAGED],
            "years_to_goal": ctx.horizon_years,
            "confidence_level": confidence_level(
                coverage, high=t.confidence_high, medium=t.confidence_medium
            ),
        },
        narrative=narrative,
    )


def aid_eligibility_insight(ctx: AdvisorContext) -> Insight:
    need = ctx.need
    if need.grant_eligible:
        narrative = "You may qualify for need-based grants, which don't need to be repaid."
    else:
        narrative = (
            "Your contribution figure suggests limited need-based aid eligibility. "
            "Focus on merit scholarships and savings."
        )
    return Insight(
        id="financial-aid-impact",
        title="Financial Aid Eligibility",
        data={
            "contribution": need.contribution,
            "grant_eligible": need.grant_eligible,
            "estimated_need": need.estimated_need,
            "asset_impact": need.asset_contribution,
        },
        narrative=narrative,
    )


def vehicle_comparison_insight(ctx: AdvisorContext) -> Insight:
    advantaged = ctx.vehicles[TAX_ADVANTAGED]
    taxable = ctx.vehicles[TAXABLE]
    delta = advantaged.effective_return - taxable.effective_return
    return Insight(
        id="investment-efficiency",
        title="Investment Vehicle Comparison",
        data={
            "tax_advantaged_return": advantaged.effective_return,
            "taxable_return": taxable.effective_return,
            "return_delta": delta,
            "tax_benefit": advantaged.total_tax_benefit,
        },
        narrative=(
            f"Tax-advantaged plans offer {delta:.1f}% better returns than taxable savings, "
            f"plus tax benefits."
        ),
    )


def build_insights(ctx: AdvisorContext) -> Tuple[Insight, ...]:
    return (
        savings_trajectory_insight(ctx),
        aid_eligibility_insight(ctx),
        vehicle_comparison_insight(ctx),
    )
