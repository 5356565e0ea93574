"""Application services shared by the use cases."""

from app.price_alerts.application.services.circuit_breaker import CircuitBreaker, CircuitState
from app.price_alerts.application.services.eligibility_gate import EligibilityGate, PreferenceCache
from app.price_alerts.application.services.notifier import (
    AlertEmailParams,
    AlertNotifier,
    NotificationOutcome,
)

__all__ = [
    "AlertEmailParams",
    "AlertNotifier",
    "CircuitBreaker",
    "CircuitState",
    "EligibilityGate",
    "NotificationOutcome",
    "PreferenceCache",
]
