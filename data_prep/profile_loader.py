from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from core.schema import UserProfile

from .validators import validate_profile

logger = logging.getLogger(__name__)


ProfileLike = Union[UserProfile, Mapping[str, Any]]


def load_profile(raw: ProfileLike) -> UserProfile:
    """
    Coerce a store record (camelCase keys, text values) into a UserProfile.

    Never raises for bad values; coerced fields are logged as warnings.
    A record that is not a mapping at all yields the all-defaults profile.
    """
    if isinstance(raw, UserProfile):
        return raw

    report = validate_profile(raw)
    for message in report.errors:
        logger.warning("profile rejected: %s", message)
    for message in report.warnings:
        logger.warning("profile field coerced: %s", message)

    if not report.is_valid:
        return UserProfile()
    return UserProfile.model_validate(dict(raw))
