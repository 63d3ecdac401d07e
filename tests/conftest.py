from __future__ import annotations

from datetime import date

import pytest

from advisor.rules import AdvisorContext
from core.config import CAPPED, DEFAULT_CONFIG, TAX_ADVANTAGED, TAXABLE
from core.schema import UserProfile
from engine.gap import GapAnalysis
from engine.need_analysis import NeedAnalysisResult
from engine.vehicles import simulate_vehicle


AS_OF = date(2026, 1, 1)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def ten_year_profile() -> dict:
    """Store-shaped record: age 8, moderate risk, 5% inflation, 70% goal."""
    return {
        "currentAge": "8",
        "currentSavings": "300000",
        "monthlyContribution": "15000",
        "riskTolerance": "moderate",
        "expectedTuitionIncrease": "5",
        "savingsGoalPercentage": "70",
        "preferredSchoolType": "public",
        "targetSchoolCost": "",
        "householdIncome": "75k-100k",
        "relationshipStatus": "married",
        "numberOfDependents": "2",
    }


def make_need(contribution: float = 10000.0, asset_contribution: float = 0.0) -> NeedAnalysisResult:
    grant_eligible = contribution <= 6500
    return NeedAnalysisResult(
        contribution=contribution,
        income_contribution=contribution - asset_contribution,
        asset_contribution=asset_contribution,
        family_size_offset=0.0,
        estimated_need=max(0.0, 30000 - contribution),
        need_based_aid_eligible=contribution < 30000,
        grant_eligible=grant_eligible,
        estimated_grant=max(0.0, 6500 - contribution) if grant_eligible else 0.0,
        available_income=0.0,
        protected_assets=0.0,
        assessable_assets=0.0,
    )


def make_context(
    *,
    profile: dict | None = None,
    horizon: int = 10,
    goal: float = 100000.0,
    coverage: dict | None = None,
    shortfall: dict | None = None,
    need: NeedAnalysisResult | None = None,
) -> AdvisorContext:
    """A hand-built context so each rule can be exercised alone."""
    prof = UserProfile(**(profile or {"age": 8, "monthly_contribution": 1000}))
    vehicles = {
        TAX_ADVANTAGED: simulate_vehicle(0, 100, 0.0, 2, tax_benefit_rate=0.05, name=TAX_ADVANTAGED),
        TAXABLE: simulate_vehicle(0, 100, 0.0, 2, name=TAXABLE),
        CAPPED: simulate_vehicle(0, 100, 0.0, 2, periods_per_year=1, annual_cap=2000, name=CAPPED),
    }
    gap = GapAnalysis(
        savings_goal=goal,
        shortfall=shortfall or {TAX_ADVANTAGED: 0.0, TAXABLE: 0.0, CAPPED: 0.0},
        coverage=coverage or {TAX_ADVANTAGED: 50.0, TAXABLE: 50.0, CAPPED: 50.0},
    )
    return AdvisorContext(
        profile=prof,
        horizon_years=horizon,
        vehicles=vehicles,
        need=need or make_need(),
        gap=gap,
        thresholds=DEFAULT_CONFIG.advisor,
        capped_annual_limit=DEFAULT_CONFIG.capped_annual_limit,
    )


@pytest.fixture
def need_factory():
    return make_need


@pytest.fixture
def context_factory():
    return make_context
