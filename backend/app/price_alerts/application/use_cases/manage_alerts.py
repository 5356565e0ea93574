"""Use cases for the user-facing alert management path.

Creation and editing converge on upsert-by-replace: saving an alert for a
symbol deletes the user's previous alerts for that symbol first, leaving one
active alert per (user, symbol).
"""

import logging
from typing import Optional

from app.price_alerts.application.dto.alert_dto import AlertDTO, UpsertAlertRequest
from app.price_alerts.application.exceptions import AlertNotFoundError, InvalidAlertError
from app.price_alerts.domain.entities.alert import Alert, normalize_symbol
from app.price_alerts.domain.repositories.alert_repository import AlertRepository
from app.price_alerts.domain.value_objects.email_address import EmailAddress

logger = logging.getLogger(__name__)


class UpsertAlertUseCase:
    """Application service saving the single alert a user keeps per symbol."""

    def __init__(self, alert_repository: AlertRepository) -> None:
        """Initialize the use case with required dependencies.

        Args:
            alert_repository: Repository for alert persistence.
        """
        self._alert_repository = alert_repository

    async def execute(
        self,
        user_id: str,
        email: str,
        symbol: str,
        request: UpsertAlertRequest,
    ) -> AlertDTO:
        """Create or replace the user's alert for ``symbol``.

        Args:
            user_id: The acting user.
            email: The acting user's address, stored for delivery.
            symbol: Ticker to watch; trimmed and uppercased.
            request: Direction and threshold.

        Returns:
            AlertDTO representing the saved alert.

        Raises:
            InvalidAlertError: If the symbol, email, direction or threshold
                is not acceptable.
        """
        try:
            alert = Alert(
                id=None,  # Will be assigned by the database
                user_id=user_id,
                email=EmailAddress(email),
                symbol=symbol,
                direction=request.direction,
                threshold_percent=request.threshold_percent,
            )
        except ValueError as e:
            raise InvalidAlertError(str(e)) from e

        saved = await self._alert_repository.replace_for_symbol(alert)
        logger.info(
            "Saved %s alert for user %s on %s at %s%%",
            saved.direction.value,
            user_id,
            saved.symbol,
            saved.threshold_percent,
        )
        return AlertDTO.from_entity(saved)


class GetAlertForSymbolUseCase:
    """Application service returning the user's active alert for a symbol."""

    def __init__(self, alert_repository: AlertRepository) -> None:
        self._alert_repository = alert_repository

    async def execute(self, user_id: str, symbol: str) -> Optional[AlertDTO]:
        clean_symbol = normalize_symbol(symbol)
        if not clean_symbol:
            raise InvalidAlertError("Symbol is required")

        alert = await self._alert_repository.get_active_for_symbol(user_id, clean_symbol)
        return AlertDTO.from_entity(alert) if alert else None


class DeleteAlertsForSymbolUseCase:
    """Application service removing every alert a user has on a symbol."""

    def __init__(self, alert_repository: AlertRepository) -> None:
        self._alert_repository = alert_repository

    async def execute(self, user_id: str, symbol: str) -> int:
        """Delete the user's alerts for ``symbol``.

        Returns:
            Number of deleted alerts.

        Raises:
            AlertNotFoundError: If the user had no alert on the symbol.
        """
        clean_symbol = normalize_symbol(symbol)
        if not clean_symbol:
            raise InvalidAlertError("Symbol is required")

        deleted = await self._alert_repository.delete_for_symbol(user_id, clean_symbol)
        if deleted == 0:
            raise AlertNotFoundError(clean_symbol)
        return deleted
