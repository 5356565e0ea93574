"""Eligibility gate deciding whether an address may receive a category of mail.

Wraps the preference store with a short-lived in-memory cache and a circuit
breaker. When the truth is unknown the gate answers False: under-delivery is
preferred over mailing someone who unsubscribed.

Cache and breaker are separate objects so one process can share them across
gates built for different event loops (each Celery run gets its own).
Entries are never invalidated, so a changed preference reaches a process
within one cache TTL.
"""

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from app.price_alerts.application.services.circuit_breaker import CircuitBreaker
from app.price_alerts.domain.entities.email_preferences import EmailPreferences
from app.price_alerts.domain.repositories.preference_repository import (
    EmailPreferenceRepository,
)
from app.price_alerts.domain.value_objects.email_address import EmailAddress
from app.price_alerts.domain.value_objects.email_category import EmailCategory

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300.0
DEFAULT_LOOKUP_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class _CacheEntry:
    preferences: EmailPreferences
    fetched_at: float


class PreferenceCache:
    """Thread-safe per-address preference snapshots with a fixed TTL."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get_fresh(self, email: str) -> Optional[EmailPreferences]:
        """Return the entry for ``email`` if it is younger than the TTL."""
        with self._lock:
            entry = self._entries.get(email)
            if entry is None:
                return None
            if self._clock() - entry.fetched_at >= self._ttl_seconds:
                return None
            return entry.preferences

    def put(self, email: str, preferences: EmailPreferences) -> None:
        with self._lock:
            self._entries[email] = _CacheEntry(preferences, self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class EligibilityGate:
    """Cached, circuit-broken ``can_send`` check. Never raises."""

    def __init__(
        self,
        preference_repository: EmailPreferenceRepository,
        breaker: Optional[CircuitBreaker] = None,
        cache: Optional[PreferenceCache] = None,
        lookup_timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the gate.

        Args:
            preference_repository: Store holding the opt-out flags.
            breaker: Guards the store; a fresh one is created when omitted.
            cache: Preference snapshots; a fresh one is created when omitted.
            lookup_timeout_seconds: Upper bound for one store lookup.
        """
        self._preference_repository = preference_repository
        self._breaker = breaker if breaker is not None else CircuitBreaker("preference-store")
        self._cache = cache if cache is not None else PreferenceCache()
        self._lookup_timeout_seconds = lookup_timeout_seconds

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    @property
    def cache(self) -> PreferenceCache:
        return self._cache

    async def can_send(
        self,
        address: str,
        category: Union[EmailCategory, str] = EmailCategory.OTHER,
    ) -> bool:
        """Answer whether ``category`` mail may go to ``address`` right now.

        Args:
            address: Recipient address; normalized before lookup.
            category: news, alerts or other. Unknown values count as other.

        Returns:
            True only when fresh preferences say the address accepts mail.
        """
        email = EmailAddress.parse(address)
        if email is None:
            return False
        category = self._coerce_category(category)

        if not self._breaker.allow_request():
            return self._answer_from_cache(email.value, category, reason="breaker open")

        try:
            preferences = await asyncio.wait_for(
                self._preference_repository.get_by_email(email.value),
                timeout=self._lookup_timeout_seconds,
            )
        except Exception as e:
            self._breaker.record_failure()
            logger.warning(
                "Preference lookup failed for %s (category=%s, failures=%d): %r",
                email.value,
                category.value,
                self._breaker.failure_count,
                e,
            )
            return self._answer_from_cache(email.value, category, reason="lookup failed")

        self._breaker.record_success()
        self._cache.put(email.value, preferences)
        return preferences.allows(category)

    def _answer_from_cache(self, email: str, category: EmailCategory, reason: str) -> bool:
        preferences = self._cache.get_fresh(email)
        if preferences is None:
            logger.info(
                "No fresh preferences for %s (%s); refusing %s mail",
                email,
                reason,
                category.value,
            )
            return False
        return preferences.allows(category)

    @staticmethod
    def _coerce_category(category: Union[EmailCategory, str]) -> EmailCategory:
        if isinstance(category, EmailCategory):
            return category
        try:
            return EmailCategory(str(category).lower())
        except ValueError:
            return EmailCategory.OTHER
