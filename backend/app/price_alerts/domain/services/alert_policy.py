"""Alert policy domain service for trigger evaluation and target pricing.

Pure functions over an alert's stored configuration and one market-data
snapshot. No hysteresis and no debounce: the active flag is the only state.
"""

import math
from typing import Optional

from app.price_alerts.domain.entities.alert import Alert, AlertDirection


def _finite(value: Optional[float]) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class AlertPolicy:
    """Domain service deciding whether an alert fires for a percent change.

    UP fires when ``change_percent >= threshold``; DOWN fires when
    ``change_percent <= -threshold``. Both bounds are inclusive.
    """

    def should_trigger(self, alert: Alert, change_percent: float) -> bool:
        """Determine if an active alert fires for the given percent change.

        Args:
            alert: The alert configuration to evaluate.
            change_percent: Today's percent change for the alert's symbol.

        Returns:
            True if the alert should trigger, False otherwise.
        """
        if not alert.active or not _finite(change_percent):
            return False

        threshold = alert.threshold
        if alert.direction == AlertDirection.UP:
            return change_percent >= threshold
        return change_percent <= -threshold

    def estimate_reference_price(
        self,
        current_price: Optional[float],
        change_percent: float,
    ) -> Optional[float]:
        """Invert the percent change to estimate the previous close.

        Returns:
            ``current / (1 + change/100)``, or None when the current price is
            missing or the result would not be finite.
        """
        if not _finite(current_price) or not _finite(change_percent):
            return None

        divisor = 1 + change_percent / 100
        if divisor == 0:
            return None

        reference = current_price / divisor
        return reference if math.isfinite(reference) else None

    def target_price(
        self,
        reference_price: Optional[float],
        alert: Alert,
    ) -> Optional[float]:
        """Price at which the alert's threshold is crossed.

        Returns:
            The reference moved by the threshold in the alert's direction,
            or None without a usable reference.
        """
        if not _finite(reference_price):
            return None

        factor = alert.threshold / 100
        if alert.direction == AlertDirection.UP:
            return reference_price * (1 + factor)
        return reference_price * (1 - factor)
