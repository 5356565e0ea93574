"""Unit tests for AlertPolicy trigger and target-price rules."""

import math
from decimal import Decimal

import pytest

from app.price_alerts.domain.entities.alert import Alert, AlertDirection
from app.price_alerts.domain.services.alert_policy import AlertPolicy
from app.price_alerts.domain.value_objects.email_address import EmailAddress


@pytest.fixture
def policy() -> AlertPolicy:
    """Create the default alert policy."""
    return AlertPolicy()


def _alert(direction: AlertDirection, threshold: str, active: bool = True) -> Alert:
    return Alert(
        id=1,
        user_id="user-1",
        email=EmailAddress("trader@example.com"),
        symbol="AAPL",
        direction=direction,
        threshold_percent=Decimal(threshold),
        active=active,
    )


class TestShouldTrigger:
    """Tests for the UP/DOWN trigger predicate."""

    @pytest.mark.parametrize(
        "change, expected",
        [(7.2, True), (5.0, True), (4.9, False), (-7.2, False), (0.0, False)],
    )
    def test_up_alert(self, policy: AlertPolicy, change: float, expected: bool) -> None:
        alert = _alert(AlertDirection.UP, "5")

        assert policy.should_trigger(alert, change) is expected

    @pytest.mark.parametrize(
        "change, expected",
        [(-4.0, True), (-3.0, True), (-2.99, False), (4.0, False), (0.0, False)],
    )
    def test_down_alert(self, policy: AlertPolicy, change: float, expected: bool) -> None:
        alert = _alert(AlertDirection.DOWN, "3")

        assert policy.should_trigger(alert, change) is expected

    def test_mixed_directions_on_same_snapshot(self, policy: AlertPolicy) -> None:
        up = _alert(AlertDirection.UP, "5")
        down = _alert(AlertDirection.DOWN, "3")

        assert policy.should_trigger(up, -4.0) is False
        assert policy.should_trigger(down, -4.0) is True

    def test_inactive_alert_never_triggers(self, policy: AlertPolicy) -> None:
        alert = _alert(AlertDirection.UP, "1", active=False)

        assert policy.should_trigger(alert, 50.0) is False

    def test_non_finite_change_never_triggers(self, policy: AlertPolicy) -> None:
        alert = _alert(AlertDirection.DOWN, "1")

        assert policy.should_trigger(alert, float("-inf")) is False
        assert policy.should_trigger(alert, float("nan")) is False


class TestReferenceAndTargetPrice:
    """Tests for previous-close estimation and target price."""

    def test_reference_inverts_percent_change(self, policy: AlertPolicy) -> None:
        reference = policy.estimate_reference_price(110.0, 10.0)

        assert reference == pytest.approx(100.0)

    @pytest.mark.parametrize("price", [None, float("nan"), float("inf")])
    def test_reference_unavailable_without_usable_price(
        self, policy: AlertPolicy, price
    ) -> None:
        assert policy.estimate_reference_price(price, 3.0) is None

    def test_reference_unavailable_for_total_loss(self, policy: AlertPolicy) -> None:
        assert policy.estimate_reference_price(0.0, -100.0) is None

    def test_up_target_above_reference(self, policy: AlertPolicy) -> None:
        alert = _alert(AlertDirection.UP, "5")

        assert policy.target_price(100.0, alert) == pytest.approx(105.0)

    def test_down_target_below_reference(self, policy: AlertPolicy) -> None:
        alert = _alert(AlertDirection.DOWN, "3")

        assert policy.target_price(100.0, alert) == pytest.approx(97.0)

    def test_target_unavailable_without_reference(self, policy: AlertPolicy) -> None:
        alert = _alert(AlertDirection.UP, "5")

        assert policy.target_price(None, alert) is None
        assert policy.target_price(math.nan, alert) is None
