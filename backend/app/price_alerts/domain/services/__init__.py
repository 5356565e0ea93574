"""Domain services - pure business logic with no infrastructure dependencies."""

from app.price_alerts.domain.services.alert_policy import AlertPolicy

__all__ = ["AlertPolicy"]
