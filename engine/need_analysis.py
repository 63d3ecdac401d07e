"""
Need analysis — a simplified expected-family-contribution (EFC) figure.

This is an illustrative approximation, not an official aid formula:

  available income   = income - standard allowance - state/local tax - employment allowance
  income contribution = two-bracket progressive schedule on available income
  asset contribution  = (savings - asset protection allowance) * asset rate
  contribution        = max(0, round(income + asset contribution - family size offset))

Every subtraction is floored at 0; the calculator never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.config import DEFAULT_CONFIG, NeedAnalysisParams
from core.utils import currency_round


@dataclass(frozen=True)
class NeedAnalysisResult:
    contribution: float
    income_contribution: float
    asset_contribution: float
    family_size_offset: float
    estimated_need: float

    need_based_aid_eligible: bool
    grant_eligible: bool
    estimated_grant: float

    # breakdown
    available_income: float
    protected_assets: float
    assessable_assets: float


def representative_income(income_bracket: str, params: NeedAnalysisParams) -> float:
    """Bracket label -> midpoint income; unknown or missing labels use the default."""
    return params.income_brackets.get(income_bracket, params.default_income)


def progressive_income_contribution(available_income: float, params: NeedAnalysisParams) -> float:
    threshold = params.income_threshold
    if available_income < threshold:
        return available_income * params.lower_income_rate
    return threshold * params.lower_income_rate + (available_income - threshold) * params.upper_income_rate


def asset_protection_allowance(
    married: bool,
    guardian_age: int,
    params: NeedAnalysisParams,
) -> float:
    offset = guardian_age - params.reference_guardian_age
    if married:
        allowance = params.protection_base_married + offset * params.protection_step_married
    else:
        allowance = params.protection_base_other + offset * params.protection_step_other
    return max(0.0, allowance)


def calculate_need_analysis(
    income_bracket: str,
    marital_status: str,
    dependents: int,
    current_savings: float,
    guardian_age: Optional[int] = None,
    *,
    params: NeedAnalysisParams = DEFAULT_CONFIG.need_analysis,
) -> NeedAnalysisResult:
    """
    Compute the contribution figure and aid-eligibility flags.

    Parameters
    ----------
    income_bracket : str
        Household income bracket label, e.g. "50k-75k".
    marital_status : str
        Only "married" changes allowances; anything else uses the single-guardian values.
    dependents : int
        Number of dependents in the household (the student included).
    current_savings : float
        Assets considered for the asset contribution.
    guardian_age : int, optional
        Defaults to the reference age, which makes the age offset 0.
    """
    married = (marital_status or "").strip().lower() == "married"
    age = params.reference_guardian_age if guardian_age is None else guardian_age
    income = representative_income(income_bracket, params)

    standard_allowance = (
        params.standard_allowance_married if married else params.standard_allowance_other
    )
    state_local_tax = income * params.state_local_tax_rate
    employment_allowance = min(income * params.employment_allowance_rate, params.employment_allowance_cap)
    available_income = max(0.0, income - standard_allowance - state_local_tax - employment_allowance)

    income_contribution = progressive_income_contribution(available_income, params)

    allowance = asset_protection_allowance(married, age, params)
    protected_assets = min(current_savings, allowance)
    assessable_assets = max(0.0, current_savings - protected_assets)
    asset_contribution = assessable_assets * params.asset_rate

    family_size_offset = max(0.0, (dependents - 1) * params.per_dependent_offset)

    contribution = max(0.0, currency_round(income_contribution + asset_contribution - family_size_offset))

    estimated_need = max(0.0, params.reference_college_cost - contribution)
    grant_eligible = contribution <= params.grant_threshold
    estimated_grant = max(0.0, params.grant_cap - contribution) if grant_eligible else 0.0

    return NeedAnalysisResult(
        contribution=contribution,
        income_contribution=currency_round(income_contribution),
        asset_contribution=currency_round(asset_contribution),
        family_size_offset=currency_round(family_size_offset),
        estimated_need=estimated_need,
        need_based_aid_eligible=estimated_need > 0,
        grant_eligible=grant_eligible,
        estimated_grant=estimated_grant,
        available_income=currency_round(available_income),
        protected_assets=currency_round(max(0.0, protected_assets)),
        assessable_assets=currency_round(assessable_assets),
    )


@dataclass(frozen=True)
class AidOutlook:
    """Need analysis read together with academics and the projected savings."""
    merit_eligible: bool
    grant_eligible: bool
    estimated_need: float
    need_from_savings_gap: bool


def assess_aid(
    need: NeedAnalysisResult,
    academic_tier: str,
    total_cost: float,
    savings_at_start: float,
    *,
    params: NeedAnalysisParams = DEFAULT_CONFIG.need_analysis,
) -> AidOutlook:
    """
    Merit eligibility comes from the academic tier. When the contribution
    figure leaves no need, the need falls back to total cost minus savings.
    """
    merit = (academic_tier or "").strip().lower() in params.merit_tiers
    if need.estimated_need > 0:
        estimated, from_gap = need.estimated_need, False
    else:
        estimated, from_gap = currency_round(max(0.0, total_cost - savings_at_start)), True
    return AidOutlook(
        merit_eligible=merit,
        grant_eligible=merit or need.grant_eligible,
        estimated_need=estimated,
        need_from_savings_gap=from_gap,
    )
