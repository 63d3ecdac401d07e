"""
Scenario engine — tuition projection, vehicle simulation, need and gap analysis,
aid outlook, contribution plans, Monte Carlo risk view, and the runner that
composes them. The retirement projection sits beside it for the guardian's
own corpus.
"""

from .runner import ScenarioEngine, ScenarioResult, run_scenario
from .monte_carlo import run_monte_carlo
from .need_analysis import AidOutlook, assess_aid
from .optimizer import ContributionPlan, optimize_contributions
from .retirement import RetirementParams, RetirementProjection, project_retirement

__all__ = [
    "ScenarioEngine",
    "ScenarioResult",
    "run_scenario",
    "run_monte_carlo",
    "AidOutlook",
    "assess_aid",
    "ContributionPlan",
    "optimize_contributions",
    "RetirementParams",
    "RetirementProjection",
    "project_retirement",
]
