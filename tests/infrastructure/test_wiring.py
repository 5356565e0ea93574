"""Tests for composing the alert pipeline from settings."""

from unittest.mock import MagicMock

from app.core.config import get_settings
from app.price_alerts.infrastructure.wiring import (
    build_eligibility_gate,
    get_preference_breaker,
    get_preference_cache,
)


class TestBuildEligibilityGate:
    """Tests for build_eligibility_gate."""

    def test_gates_share_process_wide_cache_and_breaker(self) -> None:
        first = build_eligibility_gate(MagicMock())
        second = build_eligibility_gate(MagicMock())

        assert first.cache is get_preference_cache()
        assert second.cache is first.cache
        assert first.breaker is get_preference_breaker()
        assert second.breaker is first.breaker

    def test_cache_uses_configured_ttl(self) -> None:
        assert get_preference_cache().ttl_seconds == get_settings().preference_cache_ttl_seconds
