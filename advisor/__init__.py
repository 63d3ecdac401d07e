"""
Advisor outputs — recommendation rules, narrative insights, and the summary digest.
"""

from .generator import generate_recommendations
from .recommendations import Insight, Recommendation, RecommendationSet, RecommendationSummary
from .rules import RULES, AdvisorContext, Rule

__all__ = [
    "generate_recommendations",
    "Insight",
    "Recommendation",
    "RecommendationSet",
    "RecommendationSummary",
    "RULES",
    "AdvisorContext",
    "Rule",
]
