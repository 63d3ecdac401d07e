"""
Data preparation — coercing raw profile records and reporting what was fixed.
"""

from .profile_loader import load_profile
from .validators import ValidationResult, validate_profile

__all__ = [
    "load_profile",
    "ValidationResult",
    "validate_profile",
]
