"""Data Transfer Objects for alert-related API requests and responses.

These DTOs represent the external contract for alert management exposed
through the API layer. They are decoupled from domain entities and
optimized for JSON serialization.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.price_alerts.domain.entities.alert import Alert, AlertDirection


class UpsertAlertRequest(BaseModel):
    """Request payload for creating or replacing the alert on a symbol."""

    model_config = ConfigDict(
        json_encoders={Decimal: lambda v: float(v)},
    )

    direction: AlertDirection = Field(description="UP fires on gains, DOWN on losses")
    threshold_percent: Decimal = Field(
        ge=Decimal("0.1"),
        le=Decimal("100"),
        description="Percent move that fires the alert (e.g., 5 means +5% or -5%)",
    )


class AlertDTO(BaseModel):
    """Response representation of a stored alert."""

    model_config = ConfigDict(
        from_attributes=True,
        json_encoders={Decimal: lambda v: float(v)},
    )

    id: int
    symbol: str
    direction: AlertDirection
    threshold_percent: Decimal
    active: bool
    created_at: datetime
    last_notified_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, alert: Alert) -> "AlertDTO":
        """Build the DTO from a saved Alert entity."""
        return cls(
            id=alert.id,  # type: ignore[arg-type]
            symbol=alert.symbol,
            direction=alert.direction,
            threshold_percent=alert.threshold_percent,
            active=alert.active,
            created_at=alert.created_at,
            last_notified_at=alert.last_notified_at,
        )


@dataclass
class EvaluationPassResult:
    """Summary of one evaluation pass, returned as the task result.

    Attributes:
        success: True once the pass ran to completion, even with isolated
            failures. A pass that cannot load its alerts raises
            AlertStoreUnavailableError instead of returning a result.
        message: Short human-readable outcome.
        alerts_checked: Active alerts loaded at the start of the pass.
        symbols_processed: Symbol groups whose quote was fetched.
        alerts_triggered: Alerts whose condition was met.
        emails_sent: Notifications accepted by the transport.
        emails_suppressed: Notifications refused by the eligibility gate.
        alerts_deactivated: Alerts this pass flipped inactive.
        errors: One entry per isolated failure.
        timestamp: When the pass started (ISO-8601).
    """

    success: bool = True
    message: str = ""
    alerts_checked: int = 0
    symbols_processed: int = 0
    alerts_triggered: int = 0
    emails_sent: int = 0
    emails_suppressed: int = 0
    alerts_deactivated: int = 0
    errors: list[str] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
