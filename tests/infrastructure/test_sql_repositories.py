"""Tests for the SQL repositories against a real async SQLite database."""

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.price_alerts.domain.entities.alert import Alert, AlertDirection
from app.price_alerts.domain.value_objects.email_address import EmailAddress
from app.price_alerts.infrastructure.db.models import Base, StockAlertModel, UserModel
from app.price_alerts.infrastructure.repositories.sql_alert_repository import SqlAlertRepository
from app.price_alerts.infrastructure.repositories.sql_preference_repository import (
    SqlEmailPreferenceRepository,
)

NOW = datetime(2026, 5, 1, 15, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Create a fresh SQLite database with the alert schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'alerts.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def alert_repository(session_factory: async_sessionmaker[AsyncSession]) -> SqlAlertRepository:
    """Create the alert repository over the test database."""
    return SqlAlertRepository(session_factory)


@pytest.fixture
def preference_repository(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlEmailPreferenceRepository:
    """Create the preference repository over the test database."""
    return SqlEmailPreferenceRepository(session_factory)


def new_alert(
    symbol: str = "AAPL",
    direction: AlertDirection = AlertDirection.UP,
    threshold: str = "5",
    user_id: str = "user-1",
) -> Alert:
    return Alert(
        id=None,
        user_id=user_id,
        email=EmailAddress("trader@example.com"),
        symbol=symbol,
        direction=direction,
        threshold_percent=Decimal(threshold),
        created_at=NOW,
    )


class TestSqlAlertRepository:
    """Tests for SqlAlertRepository."""

    @pytest.mark.asyncio
    async def test_deactivate_only_succeeds_once(self, alert_repository: SqlAlertRepository) -> None:
        saved = await alert_repository.replace_for_symbol(new_alert())

        assert await alert_repository.is_active(saved.id) is True
        assert await alert_repository.deactivate(saved.id, NOW) is True
        assert await alert_repository.deactivate(saved.id, NOW) is False
        assert await alert_repository.is_active(saved.id) is False
        assert await alert_repository.get_all_active() == []

    @pytest.mark.asyncio
    async def test_deactivate_leaves_sibling_alerts_alone(
        self, alert_repository: SqlAlertRepository
    ) -> None:
        first = await alert_repository.replace_for_symbol(new_alert("AAPL"))
        second = await alert_repository.replace_for_symbol(new_alert("MSFT"))

        await alert_repository.deactivate(first.id, NOW)

        active = await alert_repository.get_all_active()
        assert [a.id for a in active] == [second.id]

    @pytest.mark.asyncio
    async def test_replace_keeps_one_alert_per_user_and_symbol(
        self, alert_repository: SqlAlertRepository
    ) -> None:
        await alert_repository.replace_for_symbol(new_alert("AAPL", AlertDirection.UP, "5"))
        await alert_repository.replace_for_symbol(new_alert("AAPL", AlertDirection.DOWN, "3"))
        await alert_repository.replace_for_symbol(new_alert("AAPL", user_id="user-2"))

        active = await alert_repository.get_all_active()
        mine = [a for a in active if a.user_id == "user-1"]
        assert len(mine) == 1
        assert mine[0].direction == AlertDirection.DOWN
        assert mine[0].threshold_percent == Decimal("3")
        assert len(active) == 2

        current = await alert_repository.get_active_for_symbol("user-1", "aapl")
        assert current is not None
        assert current.id == mine[0].id

    @pytest.mark.asyncio
    async def test_invalid_records_are_skipped(
        self,
        alert_repository: SqlAlertRepository,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        valid = await alert_repository.replace_for_symbol(new_alert())
        async with session_factory() as session, session.begin():
            session.add(
                StockAlertModel(
                    user_id="user-9",
                    email="not-an-email",
                    symbol="TSLA",
                    direction=AlertDirection.UP,
                    threshold_percent=Decimal("2"),
                    active=True,
                    created_at=NOW,
                )
            )

        active = await alert_repository.get_all_active()

        assert [a.id for a in active] == [valid.id]

    @pytest.mark.asyncio
    async def test_delete_for_symbol_and_user(self, alert_repository: SqlAlertRepository) -> None:
        await alert_repository.replace_for_symbol(new_alert("AAPL"))
        await alert_repository.replace_for_symbol(new_alert("MSFT"))
        await alert_repository.replace_for_symbol(new_alert("MSFT", user_id="user-2"))

        assert await alert_repository.delete_for_symbol("user-1", "aapl") == 1
        assert await alert_repository.delete_for_symbol("user-1", "AAPL") == 0
        assert await alert_repository.delete_for_user("user-1") == 1
        assert len(await alert_repository.get_all_active()) == 1

    @pytest.mark.asyncio
    async def test_threshold_round_trips_at_stored_precision(
        self, alert_repository: SqlAlertRepository
    ) -> None:
        saved = await alert_repository.replace_for_symbol(new_alert(threshold="0.105"))

        loaded = await alert_repository.get_active_for_symbol("user-1", "AAPL")

        assert saved.threshold_percent == Decimal("0.11")
        assert loaded is not None
        assert loaded.threshold_percent == Decimal("0.11")


class TestSqlEmailPreferenceRepository:
    """Tests for SqlEmailPreferenceRepository."""

    @pytest.mark.asyncio
    async def test_unknown_address_gets_defaults(
        self, preference_repository: SqlEmailPreferenceRepository
    ) -> None:
        prefs = await preference_repository.get_by_email("nobody@example.com")

        assert prefs.unsubscribed is False
        assert prefs.daily_news_enabled is True
        assert await preference_repository.unsubscribe_all("nobody@example.com") is False

    @pytest.mark.asyncio
    async def test_opt_outs_are_stored(
        self,
        preference_repository: SqlEmailPreferenceRepository,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        async with session_factory() as session, session.begin():
            session.add(UserModel(id="user-1", email="trader@example.com"))

        assert await preference_repository.set_daily_news("trader@example.com", False) is True
        prefs = await preference_repository.get_by_email("trader@example.com")
        assert prefs.daily_news_enabled is False
        assert prefs.unsubscribed is False

        assert await preference_repository.unsubscribe_all("trader@example.com") is True
        prefs = await preference_repository.get_by_email("trader@example.com")
        assert prefs.unsubscribed is True
