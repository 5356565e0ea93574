"""Repository interfaces implemented by the infrastructure layer."""

from app.price_alerts.domain.repositories.alert_repository import AlertRepository
from app.price_alerts.domain.repositories.preference_repository import (
    EmailPreferenceRepository,
)

__all__ = [
    "AlertRepository",
    "EmailPreferenceRepository",
]
