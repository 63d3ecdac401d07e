"""
Gap analysis — how far each vehicle's projected balance is from the savings goal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

from core.utils import clamp, currency_round

from .vehicles import VehicleResult


@dataclass(frozen=True)
class GapAnalysis:
    savings_goal: float
    shortfall: Dict[str, float]
    coverage: Dict[str, float]

    def shortfall_for(self, vehicle: str) -> float:
        return self.shortfall[vehicle]

    def coverage_for(self, vehicle: str) -> float:
        return self.coverage[vehicle]


def savings_goal(total_cost: float, goal_pct: float) -> float:
    return total_cost * goal_pct / 100.0


def coverage_pct(balance: float, goal: float) -> float:
    """balance / goal as a percentage in [0, 100]; 0 when the goal is 0."""
    if goal == 0:
        return 0.0
    return clamp(balance / goal * 100.0, 0.0, 100.0)


def analyze_gap(
    total_cost: float,
    goal_pct: float,
    vehicles: Mapping[str, VehicleResult],
) -> GapAnalysis:
    goal = savings_goal(total_cost, goal_pct)
    shortfall = {
        name: currency_round(max(0.0, goal - result.final_balance))
        for name, result in vehicles.items()
    }
    coverage = {
        name: coverage_pct(result.final_balance, goal)
        for name, result in vehicles.items()
    }
    return GapAnalysis(
        savings_goal=currency_round(goal),
        shortfall=shortfall,
        coverage=coverage,
    )
