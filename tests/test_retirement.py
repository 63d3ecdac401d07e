"""Tests for the retirement corpus projection."""

import pytest

from engine import RetirementParams, project_retirement


def small(**kw) -> RetirementParams:
    base = dict(
        current_age=30, retirement_age=32, life_expectancy=34,
        current_corpus=1000.0, monthly_contribution=100.0,
        return_pre=0.10, return_post=0.0, inflation=0.0, monthly_expense=10.0,
    )
    base.update(kw)
    return RetirementParams(**base)


def test_accumulation_and_drawdown_by_year():
    proj = project_retirement(small(), start_year=2026)
    assert [h.corpus for h in proj.phase("pre")] == [1000, 2300, 3730]
    assert [h.corpus for h in proj.phase("post")] == [3610, 3490]
    assert [h.age for h in proj.history] == [30, 31, 32, 33, 34]
    assert [h.year for h in proj.history] == [2026, 2027, 2028, 2029, 2030]
    assert proj.corpus_at_retirement == 3730
    assert proj.final_corpus == 3490
    assert proj.shortfall_year is None
    assert proj.shortfall_age is None


def test_depleted_corpus_stays_at_zero():
    params = small(
        retirement_age=30, life_expectancy=33, monthly_contribution=0.0, monthly_expense=50.0
    )
    proj = project_retirement(params, start_year=2026)
    assert [h.corpus for h in proj.phase("post")] == [400, 0, 0]
    assert proj.shortfall_year == 2
    assert proj.shortfall_age == 32
    assert proj.final_corpus == 0


def test_suggested_corpus_uses_real_return():
    params = small(
        retirement_age=30, life_expectancy=31, return_post=0.06, inflation=0.05, monthly_expense=1000.0
    )
    proj = project_retirement(params, start_year=2026)
    assert proj.annual_need_at_retirement == 12000
    assert proj.suggested_corpus == 1200000
    assert proj.corpus_gap == 1200000 - 1000


@pytest.mark.parametrize("post,inflation", [(0.05, 0.05), (0.04, 0.06)])
def test_no_suggested_corpus_without_positive_real_return(post, inflation):
    proj = project_retirement(small(return_post=post, inflation=inflation), start_year=2026)
    assert proj.suggested_corpus is None
    assert proj.corpus_gap is None


def test_expense_inflates_to_retirement():
    proj = project_retirement(small(inflation=0.05, monthly_expense=1000.0), start_year=2026)
    assert proj.expense_at_retirement == 1103


def test_default_household_runs_out_before_life_expectancy():
    proj = project_retirement(RetirementParams(), start_year=2026)
    assert proj.years_to_retirement == 30
    assert proj.years_in_retirement == 25
    assert len(proj.history) == 31 + 25
    assert proj.corpus_at_retirement > 0
    assert proj.shortfall_year is not None
    assert 60 < proj.shortfall_age <= 85
    assert proj.corpus_gap > 0
    assert all(h.corpus >= 0 for h in proj.history)


def test_retiring_later_than_life_expectancy_has_no_drawdown():
    proj = project_retirement(small(life_expectancy=31), start_year=2026)
    assert proj.years_in_retirement == 0
    assert proj.phase("post") == ()
    assert proj.final_corpus == proj.corpus_at_retirement


def test_form_record_uses_percent_rates_and_defaults():
    params = RetirementParams.from_mapping(
        {"currentAge": "40", "expectedReturnPre": "8", "inflationRate": "", "currentCorpus": "abc"}
    )
    assert params.current_age == 40
    assert params.return_pre == pytest.approx(0.08)
    assert params.inflation == pytest.approx(0.05)
    assert params.current_corpus == 300000
    assert params.retirement_age == 60


def test_projection_frame():
    df = project_retirement(small(), start_year=2026).to_dataframe()
    assert list(df.columns) == ["year", "age", "corpus", "phase"]
    assert list(df["phase"]) == ["pre", "pre", "pre", "post", "post"]
