"""Per-address email preferences as read from the user store."""

from dataclasses import dataclass

from app.price_alerts.domain.value_objects.email_category import EmailCategory


@dataclass(frozen=True)
class EmailPreferences:
    """Snapshot of what an address has opted out of.

    A user with no stored record gets the defaults: subscribed, with the
    daily news digest enabled.
    """

    email: str
    unsubscribed: bool = False
    daily_news_enabled: bool = True

    def allows(self, category: EmailCategory) -> bool:
        """Whether mail of ``category`` may go to this address."""
        if self.unsubscribed:
            return False
        if category == EmailCategory.NEWS:
            return self.daily_news_enabled
        return True
