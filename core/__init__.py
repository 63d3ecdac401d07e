"""
Core package — configuration tables, the profile schema, and shared utilities.
No business logic lives here.
"""

from . import collaborators
from .collaborators import AssistantClient, AuthProvider, ProfileStore
from .config import DEFAULT_CONFIG, EngineConfig, VehicleSpec
from .schema import UserProfile
from .utils import clamp, coerce_number, currency_round

__all__ = [
    "collaborators",
    "AssistantClient",
    "AuthProvider",
    "ProfileStore",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "VehicleSpec",
    "UserProfile",
    "clamp",
    "coerce_number",
    "currency_round",
]
