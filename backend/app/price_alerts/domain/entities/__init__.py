"""Domain entities for the price alert pipeline.

This module exports the core business entities used throughout the domain layer.
"""

from app.price_alerts.domain.entities.alert import (
    MAX_THRESHOLD_PERCENT,
    MIN_THRESHOLD_PERCENT,
    Alert,
    AlertDirection,
    normalize_symbol,
    parse_threshold,
)
from app.price_alerts.domain.entities.email_preferences import EmailPreferences

__all__ = [
    "Alert",
    "AlertDirection",
    "EmailPreferences",
    "MAX_THRESHOLD_PERCENT",
    "MIN_THRESHOLD_PERCENT",
    "normalize_symbol",
    "parse_threshold",
]
