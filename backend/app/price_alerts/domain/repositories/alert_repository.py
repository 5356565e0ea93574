"""Abstract repository interface for Alert entities."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..entities.alert import Alert


class AlertRepository(ABC):
    """Abstract repository for Alert persistence operations.

    The evaluation pass only needs the first three methods; the rest serve
    the alert-management path. All methods are async to support non-blocking
    I/O in the infrastructure layer.
    """

    @abstractmethod
    async def get_all_active(self) -> List[Alert]:
        """Retrieve every alert with ``active == True``.

        Returns:
            List of active Alert entities, in no particular order.
        """
        pass

    @abstractmethod
    async def is_active(self, alert_id: int) -> bool:
        """Check whether the alert still exists and is active.

        Used right before sending so that an overlapping pass which already
        deactivated the alert is not followed by a second email.
        """
        pass

    @abstractmethod
    async def deactivate(self, alert_id: int, notified_at: datetime) -> bool:
        """Conditionally flip one alert inactive and stamp ``last_notified_at``.

        The update matches by id and only while the record is still active,
        so sibling alerts are never touched.

        Args:
            alert_id: The alert that was notified.
            notified_at: Timestamp of the successful notification.

        Returns:
            True if this call deactivated the alert, False if it was already
            inactive or gone.
        """
        pass

    @abstractmethod
    async def get_active_for_symbol(self, user_id: str, symbol: str) -> Optional[Alert]:
        """Retrieve the user's active alert for a symbol, if any."""
        pass

    @abstractmethod
    async def replace_for_symbol(self, alert: Alert) -> Alert:
        """Delete the user's alerts for ``alert.symbol`` and insert ``alert``.

        Both steps run in one transaction so a user always ends up with a
        single active alert per symbol.

        Returns:
            The saved Alert entity with its ID populated.
        """
        pass

    @abstractmethod
    async def delete_for_symbol(self, user_id: str, symbol: str) -> int:
        """Delete all of a user's alerts for a symbol.

        Returns:
            Number of deleted alerts.
        """
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: str) -> int:
        """Delete every alert owned by a user (account deletion cascade).

        Returns:
            Number of deleted alerts.
        """
        pass
