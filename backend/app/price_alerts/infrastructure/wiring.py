"""Composition of the alert pipeline from configured infrastructure.

The preference cache and circuit breaker are process-wide singletons; the
HTTP clients and repositories are created per run because they are bound to
the event loop that uses them.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import get_settings
from app.price_alerts.application.services.circuit_breaker import CircuitBreaker
from app.price_alerts.application.services.eligibility_gate import (
    EligibilityGate,
    PreferenceCache,
)
from app.price_alerts.application.services.notifier import AlertNotifier
from app.price_alerts.application.use_cases.evaluate_alerts import EvaluateAlertsUseCase
from app.price_alerts.infrastructure.db.session import get_async_session_local
from app.price_alerts.infrastructure.external.finnhub_client import FinnhubClient
from app.price_alerts.infrastructure.external.postmark_transport import PostmarkTransport
from app.price_alerts.infrastructure.repositories.sql_alert_repository import (
    SqlAlertRepository,
)
from app.price_alerts.infrastructure.repositories.sql_preference_repository import (
    SqlEmailPreferenceRepository,
)


@lru_cache
def get_preference_breaker() -> CircuitBreaker:
    """Process-wide breaker guarding the preference store."""
    settings = get_settings()
    return CircuitBreaker(
        "preference-store",
        failure_threshold=settings.preference_failure_threshold,
        cooldown_seconds=settings.preference_cooldown_seconds,
    )


@lru_cache
def get_preference_cache() -> PreferenceCache:
    """Process-wide eligibility cache."""
    return PreferenceCache(ttl_seconds=get_settings().preference_cache_ttl_seconds)


def build_eligibility_gate(
    session_factory: async_sessionmaker[AsyncSession],
) -> EligibilityGate:
    """Gate over the SQL preference store sharing the process-wide state."""
    return EligibilityGate(
        preference_repository=SqlEmailPreferenceRepository(session_factory),
        breaker=get_preference_breaker(),
        cache=get_preference_cache(),
        lookup_timeout_seconds=get_settings().store_timeout_seconds,
    )


@asynccontextmanager
async def alert_pipeline(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncIterator[EvaluateAlertsUseCase]:
    """Yield a fully wired EvaluateAlertsUseCase and close its clients after."""
    settings = get_settings()
    session_factory = session_factory or get_async_session_local()

    market_data = FinnhubClient(
        api_key=settings.finnhub_api_key,
        base_url=settings.finnhub_base_url,
        timeout=settings.market_data_timeout_seconds,
    )
    transport = PostmarkTransport(
        api_token=settings.postmark_api_token,
        timeout=settings.email_timeout_seconds,
    )
    notifier = AlertNotifier(
        transport=transport,
        eligibility_gate=build_eligibility_gate(session_factory),
        from_address=settings.alert_from_email,
        send_timeout_seconds=settings.email_timeout_seconds,
    )

    try:
        yield EvaluateAlertsUseCase(
            alert_repository=SqlAlertRepository(session_factory),
            market_data=market_data,
            notifier=notifier,
            max_concurrent_symbols=settings.alert_max_concurrent_symbols,
            market_data_timeout_seconds=settings.market_data_timeout_seconds,
            store_timeout_seconds=settings.store_timeout_seconds,
        )
    finally:
        await market_data.close()
        await transport.close()
