"""Use case running one evaluation pass over all active price alerts.

Implements the alert pipeline by orchestrating:
- Active alert loading via AlertRepository
- One quote per distinct symbol via MarketDataGateway
- Trigger evaluation via AlertPolicy
- Gated delivery via AlertNotifier
- Conditional deactivation via AlertRepository

Failures are isolated: a bad symbol skips its group, a bad alert skips
itself. Only failing to load the alert list aborts the pass.
"""

import asyncio
import logging
import math
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from app.price_alerts.application.dto.alert_dto import EvaluationPassResult
from app.price_alerts.application.exceptions import AlertStoreUnavailableError
from app.price_alerts.application.interfaces.market_data import MarketDataGateway, Quote
from app.price_alerts.application.services.notifier import (
    AlertEmailParams,
    AlertNotifier,
    NotificationOutcome,
)
from app.price_alerts.domain.entities.alert import Alert, normalize_symbol
from app.price_alerts.domain.repositories.alert_repository import AlertRepository
from app.price_alerts.domain.services.alert_policy import AlertPolicy

logger = logging.getLogger(__name__)


def group_by_symbol(alerts: Iterable[Alert]) -> dict[str, list[Alert]]:
    """Partition alerts by normalized symbol, keeping load order per group."""
    groups: dict[str, list[Alert]] = defaultdict(list)
    for alert in alerts:
        groups[normalize_symbol(alert.symbol)].append(alert)
    return dict(groups)


def usable_change_percent(quote: Quote) -> float:
    """Percent change from a quote, or 0 when the provider gave nothing usable."""
    change = quote.change_percent
    if isinstance(change, bool) or not isinstance(change, (int, float)):
        return 0.0
    return float(change) if math.isfinite(change) else 0.0


class EvaluateAlertsUseCase:
    """Application service for one best-effort evaluation pass.

    Symbol groups are processed concurrently, bounded by a semaphore. Every
    external call carries its own timeout and a timeout counts as a failure
    at that call site.
    """

    def __init__(
        self,
        alert_repository: AlertRepository,
        market_data: MarketDataGateway,
        notifier: AlertNotifier,
        policy: Optional[AlertPolicy] = None,
        max_concurrent_symbols: int = 5,
        market_data_timeout_seconds: float = 10.0,
        store_timeout_seconds: float = 5.0,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """Initialize the use case with required dependencies.

        Args:
            alert_repository: Source of active alerts and target of deactivation.
            market_data: Quote provider, called once per distinct symbol.
            notifier: Sends the alert email (eligibility-gated).
            policy: Trigger and target-price rules.
            max_concurrent_symbols: Symbol groups evaluated at the same time.
            market_data_timeout_seconds: Timeout for one quote fetch.
            store_timeout_seconds: Timeout for one alert store call.
            clock: Source of notification timestamps.
        """
        self._alert_repository = alert_repository
        self._market_data = market_data
        self._notifier = notifier
        self._policy = policy or AlertPolicy()
        self._max_concurrent_symbols = max(1, max_concurrent_symbols)
        self._market_data_timeout_seconds = market_data_timeout_seconds
        self._store_timeout_seconds = store_timeout_seconds
        self._clock = clock

    async def execute(self) -> EvaluationPassResult:
        """Run one evaluation pass.

        Returns:
            Summary of the pass. Partial failures are listed in ``errors``.

        Raises:
            AlertStoreUnavailableError: If the active alerts cannot be loaded.
        """
        result = EvaluationPassResult()

        try:
            alerts = await asyncio.wait_for(
                self._alert_repository.get_all_active(),
                timeout=self._store_timeout_seconds,
            )
        except Exception as e:
            logger.error("Failed to load active alerts: %r", e)
            raise AlertStoreUnavailableError(repr(e)) from e

        if not alerts:
            result.message = "No active alerts"
            logger.info("No active alerts to evaluate")
            return result

        result.alerts_checked = len(alerts)
        groups = group_by_symbol(alerts)
        logger.info("Evaluating %d active alerts across %d symbols", len(alerts), len(groups))

        semaphore = asyncio.Semaphore(self._max_concurrent_symbols)

        async def _bounded(symbol: str, group: list[Alert]) -> None:
            async with semaphore:
                await self._process_symbol(symbol, group, result)

        await asyncio.gather(*(_bounded(symbol, group) for symbol, group in groups.items()))

        result.message = (
            f"{result.alerts_checked} checked, {result.alerts_triggered} triggered, "
            f"{result.emails_sent} sent, {len(result.errors)} errors"
        )
        return result

    async def _process_symbol(
        self,
        symbol: str,
        alerts: list[Alert],
        result: EvaluationPassResult,
    ) -> None:
        """Fetch one quote and evaluate every alert on the symbol."""
        try:
            quote = await asyncio.wait_for(
                self._market_data.get_quote(symbol),
                timeout=self._market_data_timeout_seconds,
            )
        except Exception as e:
            error_msg = f"Market data fetch failed for {symbol}: {e!r}"
            logger.error(error_msg)
            result.errors.append(error_msg)
            return

        result.symbols_processed += 1
        change_percent = usable_change_percent(quote)

        for alert in alerts:
            try:
                await self._process_alert(symbol, alert, quote, change_percent, result)
            except Exception as e:
                error_msg = f"Error processing alert {alert.id} ({symbol}): {e!r}"
                logger.error(error_msg)
                result.errors.append(error_msg)

    async def _process_alert(
        self,
        symbol: str,
        alert: Alert,
        quote: Quote,
        change_percent: float,
        result: EvaluationPassResult,
    ) -> None:
        if not self._policy.should_trigger(alert, change_percent):
            return

        result.alerts_triggered += 1
        logger.info(
            "Alert %s triggered for %s: change %.2f%% vs %s %s%%",
            alert.id,
            symbol,
            change_percent,
            alert.direction.value,
            alert.threshold_percent,
        )

        # An overlapping pass may have notified and deactivated it already
        still_active = await asyncio.wait_for(
            self._alert_repository.is_active(alert.id),  # type: ignore[arg-type]
            timeout=self._store_timeout_seconds,
        )
        if not still_active:
            logger.info("Alert %s already handled by another pass, skipping", alert.id)
            return

        reference = self._policy.estimate_reference_price(quote.current_price, change_percent)
        target = self._policy.target_price(reference, alert)
        notified_at = self._clock()

        outcome = await self._notifier.send_alert_email(
            AlertEmailParams(
                email=alert.email.value,
                symbol=symbol,
                direction=alert.direction,
                company=quote.company_name,
                timestamp=notified_at,
                current_price=quote.current_price,
                target_price=target,
            )
        )

        if outcome is NotificationOutcome.SUPPRESSED:
            result.emails_suppressed += 1
            return

        result.emails_sent += 1

        deactivated = await asyncio.wait_for(
            self._alert_repository.deactivate(alert.id, notified_at),  # type: ignore[arg-type]
            timeout=self._store_timeout_seconds,
        )
        if deactivated:
            result.alerts_deactivated += 1
        else:
            logger.info("Alert %s already handled by another pass", alert.id)
