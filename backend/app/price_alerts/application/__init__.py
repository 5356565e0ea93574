"""Application layer - use cases and orchestration.

This layer contains:
- DTOs: Data Transfer Objects for API input/output and pass results
- Interfaces: contracts for market data and email delivery
- Services: eligibility gate, circuit breaker, notifier, preference links
- Use Cases: the evaluation pass and the alert-management operations
- Exceptions: Application-level error types
"""

from app.price_alerts.application.dto import AlertDTO, EvaluationPassResult, UpsertAlertRequest
from app.price_alerts.application.exceptions import (
    AlertNotFoundError,
    AlertStoreUnavailableError,
    ApplicationError,
    EmailDeliveryError,
    InvalidAlertError,
    MarketDataError,
)
from app.price_alerts.application.use_cases import (
    DeleteAlertsForSymbolUseCase,
    EvaluateAlertsUseCase,
    GetAlertForSymbolUseCase,
    UnsubscribeUseCase,
    UpsertAlertUseCase,
)

__all__ = [
    # DTOs
    "AlertDTO",
    "EvaluationPassResult",
    "UpsertAlertRequest",
    # Use Cases
    "EvaluateAlertsUseCase",
    "UpsertAlertUseCase",
    "GetAlertForSymbolUseCase",
    "DeleteAlertsForSymbolUseCase",
    "UnsubscribeUseCase",
    # Exceptions
    "ApplicationError",
    "AlertNotFoundError",
    "AlertStoreUnavailableError",
    "EmailDeliveryError",
    "InvalidAlertError",
    "MarketDataError",
]
