from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.conf import settings

DEFAULTS = {
    "MAX_UNITS": 18,
    "PRIMARY_MIN": 1,
    "PRIMARY_MAX": 15,
    "DEFAULT_TARGET_PER_UNIT": "4",
    "IDENTITY_BACKEND": "cardcore.apps.accounts.identity.ProfileIdentity",
}


def scorecard_setting(name: str) -> Any:
    """Lee settings.SCORECARD[name] con fallback a DEFAULTS (permite override_settings en tests)."""
    conf = getattr(settings, "SCORECARD", {}) or {}
    if name in conf:
        return conf[name]
    return DEFAULTS[name]


def default_target_per_unit() -> Decimal:
    return Decimal(str(scorecard_setting("DEFAULT_TARGET_PER_UNIT")))
