"""Tests for the simplified expected-family-contribution calculator."""

import itertools
from dataclasses import replace

import pytest

from core.config import DEFAULT_CONFIG
from engine.need_analysis import (
    asset_protection_allowance,
    assess_aid,
    calculate_need_analysis,
    progressive_income_contribution,
    representative_income,
)

PARAMS = DEFAULT_CONFIG.need_analysis


def test_low_income_single_household_is_grant_eligible():
    result = calculate_need_analysis("under-30k", "single", 1, 0)
    # 25000 - 12950 - 1250 - 4000
    assert result.available_income == 6800
    assert result.contribution == 1496
    assert result.asset_contribution == 0
    assert result.grant_eligible
    assert result.estimated_grant == 6500 - 1496
    assert result.estimated_need == 30000 - 1496
    assert result.need_based_aid_eligible


def test_high_income_married_household():
    result = calculate_need_analysis("over-250k", "married", 2, 100000)
    assert result.available_income == 255100
    assert result.income_contribution == 112072
    assert result.protected_assets == 30000
    assert result.assessable_assets == 70000
    assert result.asset_contribution == 8400
    assert result.family_size_offset == 2000
    assert result.contribution == 112072 + 8400 - 2000
    assert not result.grant_eligible
    assert result.estimated_grant == 0
    assert result.estimated_need == 0
    assert not result.need_based_aid_eligible


def test_unknown_bracket_uses_default_income():
    assert representative_income("", PARAMS) == PARAMS.default_income
    assert representative_income("lottery", PARAMS) == PARAMS.default_income
    assert representative_income("50k-75k", PARAMS) == 62500


def test_progressive_schedule_switches_rate_at_threshold():
    below = progressive_income_contribution(10000, PARAMS)
    above = progressive_income_contribution(PARAMS.income_threshold + 1000, PARAMS)
    assert below == pytest.approx(10000 * 0.22)
    assert above == pytest.approx(PARAMS.income_threshold * 0.22 + 1000 * 0.47)


def test_asset_protection_scales_with_guardian_age():
    assert asset_protection_allowance(True, 45, PARAMS) == 30000
    assert asset_protection_allowance(True, 50, PARAMS) == 33000
    assert asset_protection_allowance(False, 40, PARAMS) == 13000
    # floored at zero for very young guardians
    assert asset_protection_allowance(False, 0, PARAMS) == 0


def test_guardian_age_defaults_to_reference_age():
    implicit = calculate_need_analysis("50k-75k", "married", 1, 50000)
    explicit = calculate_need_analysis("50k-75k", "married", 1, 50000, 45)
    assert implicit == explicit


def test_large_family_offset_floors_contribution_at_zero():
    result = calculate_need_analysis("under-30k", "single", 10, 0)
    assert result.family_size_offset == 18000
    assert result.contribution == 0
    assert result.estimated_grant == 6500


def test_zero_income_table():
    params = replace(PARAMS, income_brackets={"none": 0.0})
    result = calculate_need_analysis("none", "married", 1, 0, params=params)
    assert result.available_income == 0
    assert result.contribution == 0
    assert result.grant_eligible


@pytest.mark.parametrize(
    "bracket, status, dependents, savings",
    list(itertools.product(
        ["under-30k", "75k-100k", "over-250k", ""],
        ["married", "single", ""],
        [0, 1, 10],
        [0, 1e9],
    )),
)
def test_figures_are_never_negative(bracket, status, dependents, savings):
    result = calculate_need_analysis(bracket, status, dependents, savings)
    for value in (
        result.contribution,
        result.estimated_need,
        result.estimated_grant,
        result.available_income,
        result.protected_assets,
        result.assessable_assets,
    ):
        assert value >= 0


def test_large_savings_dominate_contribution():
    result = calculate_need_analysis("under-30k", "single", 1, 1e9)
    assert result.asset_contribution > 1e8
    assert not result.grant_eligible


@pytest.mark.parametrize(
    "tier,merit",
    [("excellent", True), ("good", True), ("Good ", True), ("average", False), ("below-average", False), ("", False)],
)
def test_merit_follows_academic_tier(need_factory, tier, merit):
    outlook = assess_aid(need_factory(contribution=20000), tier, 1000000, 0)
    assert outlook.merit_eligible is merit
    assert outlook.grant_eligible is merit


def test_merit_makes_high_contribution_household_grant_eligible():
    need = calculate_need_analysis("over-250k", "married", 2, 100000)
    assert not need.grant_eligible
    assert assess_aid(need, "excellent", 1000000, 0).grant_eligible
    assert not assess_aid(need, "average", 1000000, 0).grant_eligible


def test_need_falls_back_to_savings_gap_when_contribution_covers_reference_cost():
    need = calculate_need_analysis("over-250k", "married", 2, 100000)
    assert need.estimated_need == 0
    outlook = assess_aid(need, "average", 1200000, 450000.4)
    assert outlook.need_from_savings_gap
    assert outlook.estimated_need == 750000


def test_savings_beyond_cost_leave_no_fallback_need():
    need = calculate_need_analysis("over-250k", "married", 2, 100000)
    outlook = assess_aid(need, "average", 400000, 500000)
    assert outlook.estimated_need == 0
    assert outlook.need_from_savings_gap


def test_positive_need_is_kept(need_factory):
    outlook = assess_aid(need_factory(contribution=10000), "average", 1000000, 0)
    assert outlook.estimated_need == 20000
    assert not outlook.need_from_savings_gap


def test_custom_merit_tiers(need_factory):
    params = replace(PARAMS, merit_tiers=("excellent",))
    assert not assess_aid(need_factory(contribution=20000), "good", 0, 0, params=params).merit_eligible
