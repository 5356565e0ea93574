"""Alert entity representing a user's standing price-movement alert."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from app.price_alerts.domain.value_objects.email_address import EmailAddress

MIN_THRESHOLD_PERCENT = Decimal("0.1")
MAX_THRESHOLD_PERCENT = Decimal("100")
THRESHOLD_QUANTUM = Decimal("0.01")


class AlertDirection(Enum):
    """Which way the price has to move for the alert to fire."""

    UP = "UP"
    DOWN = "DOWN"


def normalize_symbol(symbol: str) -> str:
    """Trim and uppercase a ticker symbol."""
    return (symbol or "").strip().upper()


def parse_threshold(value: object) -> Decimal:
    """Coerce a threshold to a two-decimal Decimal and enforce the allowed range.

    Rounding happens before the range check, so the stored value is the
    value that was validated.

    Raises:
        ValueError: If the value is not a finite number in [0.1, 100].
    """
    try:
        threshold = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Threshold is not a number: {value!r}") from e

    if not threshold.is_finite():
        raise ValueError("Threshold must be finite")
    try:
        threshold = threshold.quantize(THRESHOLD_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Threshold is out of range: {value!r}") from e
    if threshold < MIN_THRESHOLD_PERCENT or threshold > MAX_THRESHOLD_PERCENT:
        raise ValueError(
            f"Threshold must be between {MIN_THRESHOLD_PERCENT} and {MAX_THRESHOLD_PERCENT}"
        )
    return threshold


@dataclass
class Alert:
    """Domain entity for a one-shot price alert.

    The threshold is always a positive magnitude; ``direction`` carries the
    sign. An alert leaves the active set once, through the store's conditional
    deactivation after a sent notification, and is never reactivated.

    Attributes:
        id: Store identifier (None for unsaved entities).
        user_id: Owner of the alert.
        email: Owner's address, denormalized for delivery.
        symbol: Ticker symbol, trimmed and uppercased.
        direction: UP or DOWN.
        threshold_percent: Percent move that fires the alert.
        active: Only active alerts are evaluated.
        created_at: Creation timestamp.
        last_notified_at: Set once, when the alert fires.
    """

    id: Optional[int]
    user_id: str
    email: EmailAddress
    symbol: str
    direction: AlertDirection
    threshold_percent: Decimal
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_notified_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.symbol = normalize_symbol(self.symbol)
        if not self.symbol:
            raise ValueError("Symbol is required")
        if not self.user_id:
            raise ValueError("User id is required")
        if not isinstance(self.direction, AlertDirection):
            try:
                self.direction = AlertDirection(str(self.direction).upper())
            except ValueError as e:
                raise ValueError(f"Invalid direction: {self.direction!r}") from e
        self.threshold_percent = parse_threshold(self.threshold_percent)

    @property
    def threshold(self) -> float:
        """Threshold as a float, for comparison with market data."""
        return float(self.threshold_percent)
