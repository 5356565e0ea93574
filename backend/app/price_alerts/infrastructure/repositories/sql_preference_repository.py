"""SQLAlchemy implementation of EmailPreferenceRepository.

Reads and writes the opt-out columns on the users table.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.price_alerts.domain.entities.email_preferences import EmailPreferences
from app.price_alerts.domain.repositories.preference_repository import (
    EmailPreferenceRepository,
)
from app.price_alerts.infrastructure.db.models import UserModel


class SqlEmailPreferenceRepository(EmailPreferenceRepository):
    """SQLAlchemy-based implementation of the EmailPreferenceRepository interface."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_email(self, email: str) -> EmailPreferences:
        """Load the opt-out flags, or defaults when no user has the address."""
        stmt = select(UserModel.email_unsubscribed, UserModel.daily_news_enabled).where(
            UserModel.email == email
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.one_or_none()

        if row is None:
            return EmailPreferences(email=email)
        return EmailPreferences(
            email=email,
            unsubscribed=bool(row.email_unsubscribed),
            # NULL means never opted out
            daily_news_enabled=row.daily_news_enabled is not False,
        )

    async def unsubscribe_all(self, email: str) -> bool:
        """Set the global unsubscribe flag for the address."""
        return await self._update(email, email_unsubscribed=True)

    async def set_daily_news(self, email: str, enabled: bool) -> bool:
        """Toggle the daily news digest for the address."""
        return await self._update(email, daily_news_enabled=enabled)

    async def _update(self, email: str, **values: bool) -> bool:
        stmt = update(UserModel).where(UserModel.email == email).values(**values)
        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)
            return result.rowcount > 0
