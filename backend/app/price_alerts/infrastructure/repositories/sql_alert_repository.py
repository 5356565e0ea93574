"""SQLAlchemy implementation of AlertRepository.

Provides async database operations for Alert entities using SQLAlchemy 2.0
async patterns. Each method runs in its own short-lived session and
transaction.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.price_alerts.domain.entities.alert import Alert, normalize_symbol
from app.price_alerts.domain.repositories.alert_repository import AlertRepository
from app.price_alerts.domain.value_objects.email_address import EmailAddress
from app.price_alerts.infrastructure.db.models import StockAlertModel

logger = logging.getLogger(__name__)


class SqlAlertRepository(AlertRepository):
    """SQLAlchemy-based implementation of the AlertRepository interface."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory producing async SQLAlchemy sessions.
        """
        self._session_factory = session_factory

    async def get_all_active(self) -> List[Alert]:
        """Retrieve every active alert, skipping records that fail validation."""
        stmt = select(StockAlertModel).where(StockAlertModel.active.is_(True))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        alerts: List[Alert] = []
        for model in models:
            alert = self._to_entity_or_none(model)
            if alert is not None:
                alerts.append(alert)
        return alerts

    async def is_active(self, alert_id: int) -> bool:
        """Check whether the alert still exists and is active."""
        stmt = select(StockAlertModel.active).where(StockAlertModel.id == alert_id)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return bool(result.scalar_one_or_none())

    async def deactivate(self, alert_id: int, notified_at: datetime) -> bool:
        """Flip one alert inactive, only if it is still active."""
        stmt = (
            update(StockAlertModel)
            .where(StockAlertModel.id == alert_id, StockAlertModel.active.is_(True))
            .values(active=False, last_notified_at=notified_at)
        )
        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)
            return result.rowcount == 1

    async def get_active_for_symbol(self, user_id: str, symbol: str) -> Optional[Alert]:
        """Retrieve the user's active alert for a symbol."""
        stmt = (
            select(StockAlertModel)
            .where(
                StockAlertModel.user_id == user_id,
                StockAlertModel.symbol == normalize_symbol(symbol),
                StockAlertModel.active.is_(True),
            )
            .order_by(StockAlertModel.created_at.desc())
            .limit(1)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def replace_for_symbol(self, alert: Alert) -> Alert:
        """Delete the user's alerts for the symbol and insert the new one."""
        model = self._to_model(alert)
        async with self._session_factory() as session, session.begin():
            await session.execute(
                delete(StockAlertModel).where(
                    StockAlertModel.user_id == alert.user_id,
                    StockAlertModel.symbol == alert.symbol,
                )
            )
            session.add(model)
            await session.flush()
            await session.refresh(model)
            return self._to_entity(model)

    async def delete_for_symbol(self, user_id: str, symbol: str) -> int:
        """Delete all of a user's alerts for a symbol."""
        stmt = delete(StockAlertModel).where(
            StockAlertModel.user_id == user_id,
            StockAlertModel.symbol == normalize_symbol(symbol),
        )
        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)
            return result.rowcount or 0

    async def delete_for_user(self, user_id: str) -> int:
        """Delete every alert owned by a user."""
        stmt = delete(StockAlertModel).where(StockAlertModel.user_id == user_id)
        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)
            return result.rowcount or 0

    def _to_entity_or_none(self, model: StockAlertModel) -> Optional[Alert]:
        try:
            return self._to_entity(model)
        except ValueError as e:
            logger.warning(f"Skipping invalid alert record id={model.id}: {e}")
            return None

    def _to_entity(self, model: StockAlertModel) -> Alert:
        """Convert a StockAlertModel to an Alert domain entity."""
        return Alert(
            id=model.id,
            user_id=model.user_id,
            email=EmailAddress(str(model.email)),
            symbol=model.symbol,
            direction=model.direction,
            threshold_percent=model.threshold_percent,
            active=model.active,
            created_at=model.created_at,
            last_notified_at=model.last_notified_at,
        )

    def _to_model(self, entity: Alert) -> StockAlertModel:
        """Convert an Alert domain entity to a StockAlertModel."""
        return StockAlertModel(
            id=entity.id,
            user_id=entity.user_id,
            email=entity.email.value,
            symbol=entity.symbol,
            direction=entity.direction,
            threshold_percent=entity.threshold_percent,
            active=entity.active,
            created_at=entity.created_at,
            last_notified_at=entity.last_notified_at,
        )
