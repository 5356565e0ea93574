"""Use case applying a signed one-click unsubscribe link."""

import logging
from typing import Optional

from app.price_alerts.application.services.preference_links import (
    PreferenceScope,
    verify_preferences,
)
from app.price_alerts.domain.repositories.preference_repository import (
    EmailPreferenceRepository,
)
from app.price_alerts.domain.value_objects.email_address import normalize_email

logger = logging.getLogger(__name__)


class UnsubscribeUseCase:
    """Verify an unsubscribe link and record the opt-out.

    Workers holding a cached answer for the address pick the change up once
    their preference cache entry expires.
    """

    def __init__(
        self,
        preference_repository: EmailPreferenceRepository,
        secret: Optional[str] = None,
    ) -> None:
        """Initialize the use case.

        Args:
            preference_repository: Store holding the opt-out flags.
            secret: Overrides the configured signing secret.
        """
        self._preference_repository = preference_repository
        self._secret = secret

    async def execute(self, email: str, scope: str, signature: str) -> bool:
        """Apply the opt-out described by a signed link.

        Returns:
            True if the signature was valid and the opt-out was stored.
        """
        normalized = normalize_email(email)
        if not verify_preferences(normalized, scope, signature, secret=self._secret):
            logger.warning("Rejected unsubscribe link with invalid signature for %s", normalized)
            return False

        if PreferenceScope(scope) == PreferenceScope.NEWS:
            updated = await self._preference_repository.set_daily_news(normalized, False)
        else:
            updated = await self._preference_repository.unsubscribe_all(normalized)

        logger.info("Unsubscribed %s from %s mail (user found: %s)", normalized, scope, updated)
        return True
