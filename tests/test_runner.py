"""End-to-end tests for the scenario runner."""

from dataclasses import replace
from datetime import date

import pytest

from core.config import CAPPED, DEFAULT_CONFIG, TAX_ADVANTAGED, TAXABLE
from core.schema import UserProfile
from engine import ScenarioEngine, run_scenario


def test_ten_year_scenario(ten_year_profile, as_of):
    result = run_scenario(ten_year_profile, as_of=as_of)

    assert result.timeline.horizon_years == 10
    assert result.timeline.current_age == 8
    assert result.timeline.start_date == date(2036, 1, 1)
    assert result.timeline.start_year == 2036

    assert result.tuition.current_annual_cost == 250000
    assert result.tuition.future_annual_cost == pytest.approx(250000 * 1.05 ** 10, abs=1)
    assert len(result.tuition.schedule.entries) == 4
    assert result.tuition.total_cost == sum(e.cost for e in result.tuition.schedule.entries)

    adv = result.vehicles[TAX_ADVANTAGED]
    taxable = result.vehicles[TAXABLE]
    assert adv.final_balance > taxable.final_balance
    assert result.gap.coverage[TAX_ADVANTAGED] >= result.gap.coverage[TAXABLE]
    assert result.gap.savings_goal == pytest.approx(result.tuition.total_cost * 0.7, abs=1)

    for vehicle in result.vehicles.values():
        assert vehicle.final_balance == vehicle.total_contributions + vehicle.total_growth
        assert len(vehicle.periods) == 10
        assert 0 <= result.gap.coverage[vehicle.name] <= 100

    assert len(result.recommendations.insights) == 3


def test_student_at_start_age_has_one_year_horizon(as_of):
    result = run_scenario({"currentAge": "18", "monthlyContribution": "500"}, as_of=as_of)
    assert result.timeline.horizon_years == 1
    assert len(result.tuition.schedule.entries) == 4
    assert all(len(v.periods) == 1 for v in result.vehicles.values())


def test_same_input_gives_equal_results(ten_year_profile, as_of):
    engine = ScenarioEngine()
    assert engine.run(ten_year_profile, as_of=as_of) == engine.run(ten_year_profile, as_of=as_of)


def test_model_and_record_inputs_agree(ten_year_profile, as_of):
    model = UserProfile.model_validate(ten_year_profile)
    assert run_scenario(model, as_of=as_of) == run_scenario(ten_year_profile, as_of=as_of)


def test_empty_profile_runs_with_defaults(as_of):
    result = run_scenario({}, as_of=as_of)
    assert result.timeline.horizon_years == 18
    assert result.gap.savings_goal == 0
    assert all(c == 0 for c in result.gap.coverage.values())
    assert all(v.final_balance == 0 for v in result.vehicles.values())
    assert result.recommendations.summary.total_recommendations == len(result.recommendations.all())


def test_malformed_profile_still_runs(as_of):
    result = run_scenario(
        {"currentAge": "", "currentSavings": "NaN", "monthlyContribution": "abc", "riskTolerance": "?"},
        as_of=as_of,
    )
    assert result.vehicles[TAX_ADVANTAGED].final_balance == 0


def test_custom_cost_overrides_baseline(as_of):
    result = run_scenario(
        {
            "currentAge": "10",
            "preferredSchoolType": "private",
            "targetSchoolCost": "100000",
            "expectedTuitionIncrease": "0",
            "savingsGoalPercentage": "50",
        },
        as_of=as_of,
    )
    assert result.tuition.total_cost == 400000
    assert result.gap.savings_goal == 200000


def test_out_of_region_public_cost(as_of):
    result = run_scenario(
        {"preferredSchoolType": "public", "preferredState": "TX", "homeState": "OH"},
        as_of=as_of,
    )
    assert result.tuition.current_annual_cost == 450000


def test_store_record_with_preferred_state_only(as_of):
    # the profile form carries no home state
    result = run_scenario(
        {"preferredSchoolType": "public", "preferredState": "California"},
        as_of=as_of,
    )
    assert result.tuition.current_annual_cost == 450000


def test_any_preferred_state_stays_in_region(as_of):
    result = run_scenario(
        {"preferredSchoolType": "public", "preferredState": "any"},
        as_of=as_of,
    )
    assert result.tuition.current_annual_cost == 250000


def test_low_income_household_is_grant_eligible(as_of):
    result = run_scenario(
        {"householdIncome": "under-30k", "relationshipStatus": "single", "numberOfDependents": "1"},
        as_of=as_of,
    )
    assert result.need_analysis.grant_eligible
    assert result.need_analysis.estimated_grant > 0


def test_injected_config_is_used(ten_year_profile, as_of):
    cfg = replace(DEFAULT_CONFIG, tax_benefit_rate=0.0, capped_annual_limit=500.0)
    result = ScenarioEngine(cfg).run(ten_year_profile, as_of=as_of)
    assert result.vehicles[TAX_ADVANTAGED].total_tax_benefit == 0
    assert result.vehicles[CAPPED].periods[0].contributions == 500


def test_vehicle_comparison_frame(ten_year_profile, as_of):
    df = run_scenario(ten_year_profile, as_of=as_of).vehicle_comparison()
    assert list(df["vehicle"]) == [TAX_ADVANTAGED, TAXABLE, CAPPED]
    assert {"final_balance", "coverage_pct", "shortfall"} <= set(df.columns)


def test_engine_monte_carlo_is_seedable(ten_year_profile):
    engine = ScenarioEngine()
    a = engine.run_monte_carlo(ten_year_profile, simulations=200, seed=21)
    b = engine.run_monte_carlo(ten_year_profile, simulations=200, seed=21)
    assert a == b
    assert a.n_trials == 200
    assert a.worst_case <= a.median <= a.best_case


def test_engine_monte_carlo_without_volatility_matches_vehicle(ten_year_profile, as_of):
    engine = ScenarioEngine()
    deterministic = engine.run(ten_year_profile, as_of=as_of).vehicles[TAXABLE]
    mc = engine.run_monte_carlo(ten_year_profile, vehicle=TAXABLE, volatility=0.0, simulations=5, seed=0)
    assert mc.median == pytest.approx(deterministic.final_balance, abs=1)


@pytest.mark.parametrize("vehicle", [CAPPED, "tax-advantaged", ""])
def test_engine_monte_carlo_rejects_other_vehicles(ten_year_profile, vehicle):
    with pytest.raises(ValueError):
        ScenarioEngine().run_monte_carlo(ten_year_profile, vehicle=vehicle, simulations=5, seed=0)
