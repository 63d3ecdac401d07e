"""Tests for the per-vehicle gap analysis."""

from engine.gap import analyze_gap, coverage_pct, savings_goal
from engine.vehicles import simulate_vehicle


def _flat(balance):
    return simulate_vehicle(balance, 0, 0.0, 0)


def test_savings_goal_is_share_of_total_cost():
    assert savings_goal(1000, 50) == 500
    assert savings_goal(1000, 0) == 0


def test_coverage_is_clamped():
    assert coverage_pct(250, 500) == 50
    assert coverage_pct(900, 500) == 100
    assert coverage_pct(-100, 500) == 0


def test_zero_goal_has_zero_coverage():
    assert coverage_pct(1000, 0) == 0
    gap = analyze_gap(1000, 0, {"a": _flat(1000)})
    assert gap.savings_goal == 0
    assert gap.coverage["a"] == 0
    assert gap.shortfall["a"] == 0


def test_analyze_gap_per_vehicle():
    gap = analyze_gap(1000, 50, {"low": _flat(250), "high": _flat(800)})
    assert gap.savings_goal == 500
    assert gap.shortfall_for("low") == 250
    assert gap.shortfall_for("high") == 0
    assert gap.coverage_for("low") == 50
    assert gap.coverage_for("high") == 100


def test_negative_balance_widens_shortfall():
    gap = analyze_gap(1000, 50, {"a": _flat(-100)})
    assert gap.shortfall["a"] == 600
    assert gap.coverage["a"] == 0


def test_goal_above_hundred_percent():
    gap = analyze_gap(1000, 150, {"a": _flat(1000)})
    assert gap.savings_goal == 1500
    assert gap.shortfall["a"] == 500
    assert round(gap.coverage["a"], 6) == round(1000 / 1500 * 100, 6)
