"""Application use cases."""

from app.price_alerts.application.use_cases.evaluate_alerts import EvaluateAlertsUseCase
from app.price_alerts.application.use_cases.manage_alerts import (
    DeleteAlertsForSymbolUseCase,
    GetAlertForSymbolUseCase,
    UpsertAlertUseCase,
)
from app.price_alerts.application.use_cases.manage_preferences import UnsubscribeUseCase

__all__ = [
    "DeleteAlertsForSymbolUseCase",
    "EvaluateAlertsUseCase",
    "GetAlertForSymbolUseCase",
    "UnsubscribeUseCase",
    "UpsertAlertUseCase",
]
