"""
Recommendation types — one frozen dataclass per rule outcome.

Every variant shares the header fields (title, description, action, impact,
effort, benefits). The identifier, category and priority are fixed per variant
as class attributes; each variant carries only the metrics meaningful to it and
reports them through metrics().
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Literal, Tuple


Priority = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class Recommendation:
    id: ClassVar[str] = ""
    category: ClassVar[str] = ""
    priority: ClassVar[Priority] = "low"

    title: str
    description: str
    action: str
    impact: str
    effort: str
    benefits: Tuple[str, ...]

    def metrics(self) -> Dict[str, float]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        payload = {"id": self.id, "category": self.category, "priority": self.priority}
        payload.update(asdict(self))
        payload["benefits"] = list(self.benefits)
        payload["metrics"] = self.metrics()
        return payload


@dataclass(frozen=True)
class TaxAdvantagedSwitch(Recommendation):
    id: ClassVar[str] = "invest-tax-advantaged"
    category: ClassVar[str] = "investment"
    priority: ClassVar[Priority] = "high"

    additional_savings: float
    coverage_gain: float
    horizon_years: int

    def metrics(self) -> Dict[str, float]:
        return {
            "additional_savings": self.additional_savings,
            "coverage_gain": self.coverage_gain,
        }


@dataclass(frozen=True)
class ContributionIncrease(Recommendation):
    id: ClassVar[str] = "increase-contributions"
    category: ClassVar[str] = "contribution"
    priority: ClassVar[Priority] = "high"

    current_gap: float
    additional_monthly: float
    new_monthly_target: float
    horizon_years: int

    def metrics(self) -> Dict[str, float]:
        return {
            "current_gap": self.current_gap,
            "additional_monthly": self.additional_monthly,
            "new_monthly_target": self.new_monthly_target,
        }


@dataclass(frozen=True)
class RiskTierUpgrade(Recommendation):
    id: ClassVar[str] = "optimize-risk"
    category: ClassVar[str] = "strategy"
    priority: ClassVar[Priority] = "high"

    current_tier: str
    suggested_tier: str
    horizon_years: int

    def metrics(self) -> Dict[str, float]:
        return {"horizon_years": float(self.horizon_years)}


@dataclass(frozen=True)
class LiquidityReserve(Recommendation):
    id: ClassVar[str] = "liquidity-balance"
    category: ClassVar[str] = "strategy"
    priority: ClassVar[Priority] = "medium"

    liquid_amount: float
    invested_amount: float
    liquidity_pct: float

    def metrics(self) -> Dict[str, float]:
        return {
            "liquid_amount": self.liquid_amount,
            "invested_amount": self.invested_amount,
            "liquidity_pct": self.liquidity_pct,
        }


@dataclass(frozen=True)
class AidAssetShift(Recommendation):
    id: ClassVar[str] = "financial-aid-strategy"
    category: ClassVar[str] = "planning"
    priority: ClassVar[Priority] = "medium"

    potential_aid_increase: float
    current_asset_impact: float

    def metrics(self) -> Dict[str, float]:
        return {
            "potential_aid_increase": self.potential_aid_increase,
            "current_asset_impact": self.current_asset_impact,
        }


@dataclass(frozen=True)
class CappedVehicleOption(Recommendation):
    id: ClassVar[str] = "capped-vehicle"
    category: ClassVar[str] = "investment"
    priority: ClassVar[Priority] = "medium"

    annual_limit: float
    current_contribution: float

    def metrics(self) -> Dict[str, float]:
        return {
            "annual_limit": self.annual_limit,
            "current_contribution": self.current_contribution,
        }


@dataclass(frozen=True)
class ExternalContributionNote(Recommendation):
    id: ClassVar[str] = "coordinate-external-contributions"
    category: ClassVar[str] = "family-strategy"
    priority: ClassVar[Priority] = "low"

    timing: str
    considerations: Tuple[str, ...]


@dataclass(frozen=True)
class RegionalTaxReview(Recommendation):
    id: ClassVar[str] = "regional-tax-review"
    category: ClassVar[str] = "tax-strategy"
    priority: ClassVar[Priority] = "low"

    next_steps: Tuple[str, ...]


@dataclass(frozen=True)
class Insight:
    id: str
    title: str
    data: Dict[str, Any]
    narrative: str


@dataclass(frozen=True)
class RecommendationSummary:
    total_recommendations: int
    high_priority_count: int
    estimated_impact: float
    implementation_timeframe: str = "2-4 weeks for priority actions"


@dataclass(frozen=True)
class RecommendationSet:
    primary: Tuple[Recommendation, ...]
    secondary: Tuple[Recommendation, ...]
    strategic: Tuple[Recommendation, ...]
    insights: Tuple[Insight, ...]
    summary: RecommendationSummary = field(
        default_factory=lambda: RecommendationSummary(0, 0, 0.0)
    )

    def all(self) -> Tuple[Recommendation, ...]:
        return self.primary + self.secondary + self.strategic

    def by_id(self, rec_id: str) -> Recommendation:
        for rec in self.all():
            if rec.id == rec_id:
                return rec
        raise KeyError(f"No recommendation '{rec_id}' in this set.")
