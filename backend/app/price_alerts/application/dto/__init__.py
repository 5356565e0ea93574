"""Data Transfer Objects for the application layer."""

from app.price_alerts.application.dto.alert_dto import (
    AlertDTO,
    EvaluationPassResult,
    UpsertAlertRequest,
)

__all__ = [
    "AlertDTO",
    "EvaluationPassResult",
    "UpsertAlertRequest",
]
