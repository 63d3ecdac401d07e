"""
Recommendation rules — an ordered table of independent predicate -> builder pairs.

Each Rule reads the shared AdvisorContext and either emits one recommendation
or nothing. Rules never see each other's output, so any rule can be tested
alone with a hand-built context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Literal, Mapping, Optional, Tuple

from core.config import TAX_ADVANTAGED, TAXABLE, AdvisorThresholds
from core.schema import UserProfile
from core.utils import currency_round

from .recommendations import (
    AidAssetShift,
    CappedVehicleOption,
    ContributionIncrease,
    ExternalContributionNote,
    LiquidityReserve,
    Recommendation,
    RegionalTaxReview,
    RiskTierUpgrade,
    TaxAdvantagedSwitch,
)

if TYPE_CHECKING:
    from engine.gap import GapAnalysis
    from engine.need_analysis import NeedAnalysisResult
    from engine.vehicles import VehicleResult


Tier = Literal["primary", "secondary", "strategic"]


@dataclass(frozen=True)
class AdvisorContext:
    """Read-only inputs shared by every rule."""
    profile: UserProfile
    horizon_years: int
    vehicles: Mapping[str, VehicleResult]
    need: NeedAnalysisResult
    gap: GapAnalysis
    thresholds: AdvisorThresholds
    capped_annual_limit: float

    @property
    def monthly_contribution(self) -> float:
        return self.profile.monthly_contribution

    @property
    def annual_contribution(self) -> float:
        return self.profile.annual_contribution

    @property
    def months_remaining(self) -> int:
        return max(self.horizon_years, 1) * 12


@dataclass(frozen=True)
class Rule:
    name: str
    tier: Tier
    applies: Callable[[AdvisorContext], bool]
    build: Callable[[AdvisorContext], Recommendation]

    def evaluate(self, ctx: AdvisorContext) -> Optional[Recommendation]:
        return self.build(ctx) if self.applies(ctx) else None


def _fmt(amount: float) -> str:
    return f"{amount:,.0f}"


# ----- primary -----

def tax_advantaged_outperforms(ctx: AdvisorContext) -> bool:
    return ctx.gap.coverage[TAX_ADVANTAGED] > ctx.gap.coverage[TAXABLE]


def build_tax_advantaged_switch(ctx: AdvisorContext) -> TaxAdvantagedSwitch:
    tax_benefit = ctx.vehicles[TAX_ADVANTAGED].total_tax_benefit
    gain = currency_round(ctx.gap.coverage[TAX_ADVANTAGED] - ctx.gap.coverage[TAXABLE])
    return TaxAdvantagedSwitch(
        title="Maximize Tax-Advantaged Plan Benefits",
        description=(
            f"Switching to a tax-advantaged education plan saves approximately "
            f"{_fmt(tax_benefit)} in taxes over {ctx.horizon_years} years."
        ),
        action="Open a tax-advantaged education savings plan and transfer existing savings",
        impact="high",
        effort="low",
        benefits=(
            "Tax-free growth and withdrawals for qualified expenses",
            "Potential regional tax deductions",
            "Higher investment returns than taxable savings",
            "Professionally managed fund options",
        ),
        additional_savings=tax_benefit,
        coverage_gain=gain,
        horizon_years=ctx.horizon_years,
    )


def shortfall_exceeds_threshold(ctx: AdvisorContext) -> bool:
    return ctx.gap.shortfall[TAX_ADVANTAGED] > ctx.thresholds.min_shortfall


def build_contribution_increase(ctx: AdvisorContext) -> ContributionIncrease:
    gap = ctx.gap.shortfall[TAX_ADVANTAGED]
    additional = currency_round(gap / ctx.months_remaining)
    target = ctx.monthly_contribution + additional
    return ContributionIncrease(
        title="Increase Monthly Contributions",
        description=(
            f"Increase monthly savings by {_fmt(additional)} to reach your "
            f"{ctx.profile.savings_goal_pct:g}% coverage goal."
        ),
        action=(
            f"Adjust automatic contributions from {_fmt(ctx.monthly_contribution)} "
            f"to {_fmt(target)} monthly"
        ),
        impact="high",
        effort="medium",
        benefits=(
            "Reach the savings goal on schedule",
            "Reduce future financial stress",
            "Take advantage of compound growth",
        ),
        current_gap=gap,
        additional_monthly=additional,
        new_monthly_target=target,
        horizon_years=ctx.horizon_years,
    )


def conservative_with_long_horizon(ctx: AdvisorContext) -> bool:
    return (
        ctx.profile.risk_tier == "conservative"
        and ctx.horizon_years > ctx.thresholds.risk_upgrade_min_horizon
    )


def build_risk_tier_upgrade(ctx: AdvisorContext) -> RiskTierUpgrade:
    return RiskTierUpgrade(
        title="Consider a Moderate Risk Tier",
        description=(
            f"With {ctx.horizon_years} years until enrollment, a moderate risk approach "
            f"could increase your savings by 15-25%."
        ),
        action="Move the plan allocation to an age-based moderate portfolio",
        impact="high",
        effort="low",
        benefits=(
            "Higher potential returns over the long term",
            "Automatic age-based rebalancing",
            "Still conservative compared to aggressive options",
        ),
        current_tier=ctx.profile.risk_tier,
        suggested_tier="moderate",
        horizon_years=ctx.horizon_years,
    )


# ----- secondary -----

def always(ctx: AdvisorContext) -> bool:
    return True


def build_liquidity_reserve(ctx: AdvisorContext) -> LiquidityReserve:
    t = ctx.thresholds
    goal = ctx.gap.savings_goal
    reserve = ctx.monthly_contribution * t.liquidity_months
    liquid = min(reserve, goal * t.liquidity_max_pct / 100.0)
    liquid = max(liquid, 0.0)
    pct = liquid / goal * 100.0 if goal > 0 else 0.0
    return LiquidityReserve(
        title=f"Keep {pct:.0f}% in Liquid Savings",
        description=(
            f"Maintain {_fmt(liquid)} in liquid savings for emergencies while investing the rest."
        ),
        action=(
            f"Split savings: {100 - pct:.0f}% in the tax-advantaged plan, "
            f"{pct:.0f}% in high-yield savings"
        ),
        impact="medium",
        effort="low",
        benefits=(
            "Financial flexibility for unexpected expenses",
            "Avoid early withdrawal penalties",
            "Accessible funds without selling investments",
        ),
        liquid_amount=currency_round(liquid),
        invested_amount=currency_round(goal - liquid),
        liquidity_pct=pct,
    )


def assets_reduce_aid(ctx: AdvisorContext) -> bool:
    t = ctx.thresholds
    return (
        ctx.need.contribution > t.aid_contribution_threshold
        and ctx.need.asset_contribution > t.aid_asset_threshold
    )


def build_aid_asset_shift(ctx: AdvisorContext) -> AidAssetShift:
    impact = ctx.need.asset_contribution
    return AidAssetShift(
        title="Optimize Financial Aid Eligibility",
        description=(
            f"Your current assets may reduce aid by {_fmt(impact)}. "
            f"Consider guardian-owned tax-advantaged plans."
        ),
        action="Move student-held assets into guardian-owned plans before the final two years of school",
        impact="medium",
        effort="medium",
        benefits=(
            "Lower assessment rate on guardian-owned plan assets",
            "Potentially qualify for more need-based aid",
            "Keep control over education funds",
        ),
        potential_aid_increase=currency_round(impact * ctx.thresholds.aid_increase_rate),
        current_asset_impact=impact,
    )


def young_student_below_cap(ctx: AdvisorContext) -> bool:
    return (
        ctx.profile.age <= ctx.thresholds.capped_vehicle_max_age
        and ctx.annual_contribution < ctx.capped_annual_limit
    )


def build_capped_vehicle_option(ctx: AdvisorContext) -> CappedVehicleOption:
    return CappedVehicleOption(
        title="Consider a Contribution-Capped Plan for Early Flexibility",
        description=(
            "A contribution-capped plan can cover earlier schooling expenses "
            "while the main plan builds toward enrollment."
        ),
        action="Open a contribution-capped plan alongside the tax-advantaged plan",
        impact="medium",
        effort="medium",
        benefits=(
            "Tax-free withdrawals for earlier schooling expenses",
            "Broader investment options",
            "Hedge against private schooling costs",
        ),
        annual_limit=ctx.capped_annual_limit,
        current_contribution=ctx.annual_contribution,
    )


# ----- strategic -----

def long_enough_for_family_help(ctx: AdvisorContext) -> bool:
    return ctx.horizon_years > ctx.thresholds.external_contribution_min_horizon


def build_external_contribution_note(ctx: AdvisorContext) -> ExternalContributionNote:
    return ExternalContributionNote(
        title="Coordinate with Extended Family Plans",
        description=(
            "Plans owned by grandparents or other relatives can add savings "
            "without affecting aid initially."
        ),
        action="Discuss education savings coordination with extended family",
        impact="medium",
        effort="high",
        benefits=(
            "Additional funding source",
            "No aid impact until funds are used",
            "Estate planning benefits for relatives",
        ),
        timing="Implement 2+ years before enrollment",
        considerations=(
            "Coordinate timing of distributions",
            "May affect aid in later years",
            "Requires family communication",
        ),
    )


def build_regional_tax_review(ctx: AdvisorContext) -> RegionalTaxReview:
    return RegionalTaxReview(
        title="Maximize Regional Tax Benefits",
        description="Research your region's plan benefits and contribution limits for tax deductions.",
        action="Review region-specific plan benefits and compare in-region and out-of-region plans",
        impact="low",
        effort="medium",
        benefits=(
            "Regional tax deductions or credits",
            "Potential matching contributions",
            "Region-specific investment options",
        ),
        next_steps=(
            "Research regional tax benefits",
            "Compare in-region and national plans",
            "Consult a tax professional if needed",
        ),
    )


RULES: Tuple[Rule, ...] = (
    Rule("tax_advantaged_switch", "primary", tax_advantaged_outperforms, build_tax_advantaged_switch),
    Rule("contribution_increase", "primary", shortfall_exceeds_threshold, build_contribution_increase),
    Rule("risk_tier_upgrade", "primary", conservative_with_long_horizon, build_risk_tier_upgrade),
    Rule("liquidity_reserve", "secondary", always, build_liquidity_reserve),
    Rule("aid_asset_shift", "secondary", assets_reduce_aid, build_aid_asset_shift),
    Rule("capped_vehicle_option", "secondary", young_student_below_cap, build_capped_vehicle_option),
    Rule("external_contributions", "strategic", long_enough_for_family_help, build_external_contribution_note),
    Rule("regional_tax_review", "strategic", always, build_regional_tax_review),
)
