"""
Data quality validation for raw profile records before they enter the engine.

The engine always runs: malformed values are coerced to defaults at the
boundary. This report says which fields were coerced, so the application can
ask the user to fix them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from core.schema import (
    ACADEMIC_TIERS,
    MARITAL_STATUSES,
    RISK_TIERS,
    SCHOOL_TYPES,
    UserProfile,
)
from core.utils import coerce_number, normalize_label


NUMERIC_FIELDS = (
    "age",
    "dependents",
    "current_savings",
    "monthly_contribution",
    "savings_goal_pct",
    "inflation_pct",
)
OPTIONAL_NUMERIC_FIELDS = ("target_annual_cost", "guardian_age")
ENUM_FIELDS = {
    "risk_tier": RISK_TIERS,
    "academic_tier": ACADEMIC_TIERS,
    "school_type": SCHOOL_TYPES,
    "marital_status": MARITAL_STATUSES,
}


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a profile."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def raw_value(raw: Mapping[str, Any], name: str) -> Optional[Any]:
    """Look a field up by its snake_case name or its store alias."""
    if name in raw:
        return raw[name]
    alias = UserProfile.model_fields[name].alias
    if alias and alias in raw:
        return raw[alias]
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def validate_profile(raw: Any) -> ValidationResult:
    """
    Run all checks on a raw profile record.
    Returns a ValidationResult with errors (record unusable) and warnings (value coerced).
    """
    result = ValidationResult()

    if isinstance(raw, UserProfile):
        return result
    if not isinstance(raw, Mapping):
        result.errors.append(f"Profile must be a mapping, got {type(raw).__name__}.")
        return result

    # --- Numbers ---
    for name in NUMERIC_FIELDS:
        value = raw_value(raw, name)
        if _is_blank(value):
            result.warnings.append(f"{name} is missing; using 0.")
            continue
        number = coerce_number(value, default=float("nan"), minimum=None)
        if number != number:
            result.warnings.append(f"{name}={value!r} is not a number; using 0.")
        elif number < 0 and name != "inflation_pct":
            result.warnings.append(f"{name}={value!r} is negative; using 0.")

    for name in OPTIONAL_NUMERIC_FIELDS:
        value = raw_value(raw, name)
        if _is_blank(value):
            continue
        number = coerce_number(value, default=float("nan"))
        if number != number:
            result.warnings.append(f"{name}={value!r} is not a non-negative number; ignoring it.")

    # --- Enumerations ---
    for name, allowed in ENUM_FIELDS.items():
        value = raw_value(raw, name)
        if _is_blank(value):
            continue
        if normalize_label(value) not in allowed:
            result.warnings.append(f"{name}={value!r} is not one of {list(allowed)}; using the default.")

    # --- Ranges ---
    age = coerce_number(raw_value(raw, "age"))
    if age >= 18:
        result.warnings.append(f"age={age:g} is past the start age; the horizon is clamped to 1 year.")

    goal = coerce_number(raw_value(raw, "savings_goal_pct"))
    if goal > 100:
        result.warnings.append(f"savings_goal_pct={goal:g} exceeds 100%.")

    return result
