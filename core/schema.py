"""
UserProfile — the one typed record the engine reads.

Profiles arrive from the profile store as loosely-typed text (form values).
Coercion happens here, once: missing or malformed numbers become 0 (or the
documented default), unknown enum values become the default tier.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import coerce_number, normalize_label


RISK_TIERS: Tuple[str, ...] = ("conservative", "moderate", "aggressive")
ACADEMIC_TIERS: Tuple[str, ...] = ("excellent", "good", "average", "below-average")
SCHOOL_TYPES: Tuple[str, ...] = ("public", "private", "community", "trade", "mixed")
MARITAL_STATUSES: Tuple[str, ...] = ("married", "single", "divorced", "widowed")

DEFAULT_RISK_TIER = "moderate"
DEFAULT_ACADEMIC_TIER = "average"
DEFAULT_SCHOOL_TYPE = "public"


class UserProfile(BaseModel):
    """Student, family and financial attributes for one scenario run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # student
    age: int = Field(0, alias="currentAge", ge=0)
    academic_tier: str = Field(DEFAULT_ACADEMIC_TIER, alias="academicPerformance")
    school_type: str = Field(DEFAULT_SCHOOL_TYPE, alias="preferredSchoolType")
    preferred_region: str = Field("", alias="preferredState")
    home_region: str = Field("", alias="homeState")

    # family
    income_bracket: str = Field("", alias="householdIncome")
    marital_status: str = Field("", alias="relationshipStatus")
    dependents: int = Field(0, alias="numberOfDependents", ge=0)
    guardian_age: Optional[int] = Field(None, alias="parentAge")

    # financial
    current_savings: float = Field(0.0, alias="currentSavings", ge=0)
    monthly_contribution: float = Field(0.0, alias="monthlyContribution", ge=0)
    risk_tier: str = Field(DEFAULT_RISK_TIER, alias="riskTolerance")
    target_annual_cost: Optional[float] = Field(None, alias="targetSchoolCost")
    savings_goal_pct: float = Field(0.0, alias="savingsGoalPercentage", ge=0)
    inflation_pct: float = Field(0.0, alias="expectedTuitionIncrease")

    @field_validator("age", "dependents", mode="before")
    @classmethod
    def _whole_number(cls, v: Any) -> int:
        return int(coerce_number(v))

    @field_validator("current_savings", "monthly_contribution", "savings_goal_pct", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator("inflation_pct", mode="before")
    @classmethod
    def _rate(cls, v: Any) -> float:
        # deflation is allowed
        return coerce_number(v, minimum=None)

    @field_validator("target_annual_cost", mode="before")
    @classmethod
    def _optional_amount(cls, v: Any) -> Optional[float]:
        number = coerce_number(v, default=float("nan"))
        return None if number != number else number

    @field_validator("guardian_age", mode="before")
    @classmethod
    def _optional_age(cls, v: Any) -> Optional[int]:
        number = coerce_number(v, default=float("nan"))
        return None if number != number else int(number)

    @field_validator("risk_tier", mode="before")
    @classmethod
    def _risk_tier(cls, v: Any) -> str:
        label = normalize_label(v)
        return label if label in RISK_TIERS else DEFAULT_RISK_TIER

    @field_validator("academic_tier", mode="before")
    @classmethod
    def _academic_tier(cls, v: Any) -> str:
        label = normalize_label(v)
        return label if label in ACADEMIC_TIERS else DEFAULT_ACADEMIC_TIER

    @field_validator("school_type", mode="before")
    @classmethod
    def _school_type(cls, v: Any) -> str:
        label = normalize_label(v)
        return label or DEFAULT_SCHOOL_TYPE

    @field_validator(
        "preferred_region", "home_region", "income_bracket", "marital_status", mode="before"
    )
    @classmethod
    def _label(cls, v: Any) -> str:
        return normalize_label(v)

    def horizon_years(self, start_age: int = 18) -> int:
        """Years until the projected start of higher education, floored at 1."""
        return max(1, start_age - self.age)

    @property
    def inflation_rate(self) -> float:
        return self.inflation_pct / 100.0

    @property
    def annual_contribution(self) -> float:
        return self.monthly_contribution * 12
