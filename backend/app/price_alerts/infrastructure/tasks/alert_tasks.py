"""Celery tasks for the stock price alert pipeline."""

import asyncio
import logging
from typing import Any

from app.price_alerts.infrastructure.db.session import dispose_engine
from app.price_alerts.infrastructure.tasks.celery_app import celery_app
from app.price_alerts.infrastructure.wiring import alert_pipeline

logger = logging.getLogger(__name__)

CHECK_STOCK_ALERTS_TASK = "app.price_alerts.infrastructure.tasks.alert_tasks.check_stock_alerts"


async def _check_stock_alerts_async() -> dict[str, Any]:
    """Async implementation of one evaluation pass.

    Returns:
        Summary of the pass as a JSON-serializable dict.
    """
    try:
        async with alert_pipeline() as use_case:
            result = await use_case.execute()
    finally:
        # The engine's connections belong to this run's event loop
        await dispose_engine()

    logger.info(
        f"Alert pass complete: {result.alerts_checked} checked, "
        f"{result.symbols_processed} symbols, {result.alerts_triggered} triggered, "
        f"{result.emails_sent} emails sent, {result.emails_suppressed} suppressed, "
        f"{len(result.errors)} errors"
    )
    return result.to_dict()


@celery_app.task(bind=True, name=CHECK_STOCK_ALERTS_TASK)
def check_stock_alerts(self) -> dict:
    """Evaluate all active stock alerts against live quotes.

    Runs on the beat schedule (every 10 minutes by default) or on demand
    via ``POST /api/jobs/check-stock-alerts``:
    1. Loads all active alerts
    2. Fetches one quote per distinct symbol
    3. Evaluates each alert's UP/DOWN threshold
    4. Sends gated notifications for triggered alerts
    5. Deactivates alerts whose notification was sent

    Returns:
        Summary of the pass.

    Raises:
        AlertStoreUnavailableError: If active alerts could not be loaded.
    """
    logger.info("Starting check_stock_alerts task")
    try:
        return asyncio.run(_check_stock_alerts_async())
    except Exception as e:
        logger.exception(f"check_stock_alerts failed: {e}")
        raise
