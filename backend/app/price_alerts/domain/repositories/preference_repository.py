"""Abstract repository interface for per-address email preferences."""

from abc import ABC, abstractmethod

from ..entities.email_preferences import EmailPreferences


class EmailPreferenceRepository(ABC):
    """Read/write access to the opt-out flags kept on user records.

    Addresses passed in are already normalized (trimmed, lowercased).
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> EmailPreferences:
        """Load the preferences for an address.

        Returns:
            The stored flags, or defaults when no user has this address.
        """
        pass

    @abstractmethod
    async def unsubscribe_all(self, email: str) -> bool:
        """Set the global unsubscribe flag.

        Returns:
            True if a user record was updated.
        """
        pass

    @abstractmethod
    async def set_daily_news(self, email: str, enabled: bool) -> bool:
        """Enable or disable the daily news digest.

        Returns:
            True if a user record was updated.
        """
        pass
