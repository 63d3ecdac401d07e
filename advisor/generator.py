"""
Recommendation generator — runs the rule table and assembles the report.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from .insights import build_insights
from .recommendations import Recommendation, RecommendationSet, RecommendationSummary
from .rules import RULES, AdvisorContext, Rule


def estimate_impact(primary: Sequence[Recommendation]) -> float:
    """Sum of each primary item's declared additional savings (0 where absent)."""
    return float(sum(rec.metrics().get("additional_savings", 0.0) for rec in primary))


def summarize(
    primary: Sequence[Recommendation],
    secondary: Sequence[Recommendation],
    strategic: Sequence[Recommendation],
) -> RecommendationSummary:
    everything = list(primary) + list(secondary) + list(strategic)
    return RecommendationSummary(
        total_recommendations=len(everything),
        high_priority_count=sum(1 for rec in everything if rec.priority == "high"),
        estimated_impact=estimate_impact(primary),
    )


def generate_recommendations(
    ctx: AdvisorContext,
    *,
    rules: Sequence[Rule] = RULES,
) -> RecommendationSet:
    """Evaluate every rule in order and bucket the results by tier."""
    buckets: Dict[str, List[Recommendation]] = {"primary": [], "secondary": [], "strategic": []}
    for rule in rules:
        rec = rule.evaluate(ctx)
        if rec is not None:
            buckets[rule.tier].append(rec)

    primary = tuple(buckets["primary"])
    secondary = tuple(buckets["secondary"])
    strategic = tuple(buckets["strategic"])
    return RecommendationSet(
        primary=primary,
        secondary=secondary,
        strategic=strategic,
        insights=build_insights(ctx),
        summary=summarize(primary, secondary, strategic),
    )
