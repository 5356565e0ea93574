"""Unit tests for the alert management use cases."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.price_alerts.application.dto.alert_dto import UpsertAlertRequest
from app.price_alerts.application.exceptions import AlertNotFoundError, InvalidAlertError
from app.price_alerts.application.use_cases.manage_alerts import (
    DeleteAlertsForSymbolUseCase,
    GetAlertForSymbolUseCase,
    UpsertAlertUseCase,
)
from app.price_alerts.domain.entities.alert import Alert, AlertDirection
from app.price_alerts.domain.value_objects.email_address import EmailAddress


@pytest.fixture
def mock_alert_repository() -> AsyncMock:
    """Create a mock alert repository."""
    return AsyncMock()


@pytest.fixture
def saved_alert() -> Alert:
    """Create an alert as the repository returns it after saving."""
    return Alert(
        id=42,
        user_id="user-1",
        email=EmailAddress("trader@example.com"),
        symbol="AAPL",
        direction=AlertDirection.UP,
        threshold_percent=Decimal("5"),
        created_at=datetime.now(timezone.utc),
    )


class TestUpsertAlertUseCase:
    """Tests for UpsertAlertUseCase."""

    @pytest.mark.asyncio
    async def test_replaces_alert_for_symbol(
        self, mock_alert_repository: AsyncMock, saved_alert: Alert
    ) -> None:
        mock_alert_repository.replace_for_symbol.return_value = saved_alert
        use_case = UpsertAlertUseCase(alert_repository=mock_alert_repository)
        request = UpsertAlertRequest(direction=AlertDirection.UP, threshold_percent=Decimal("5"))

        dto = await use_case.execute("user-1", "Trader@Example.com", " aapl ", request)

        assert dto.id == 42
        assert dto.symbol == "AAPL"
        assert dto.active is True
        alert = mock_alert_repository.replace_for_symbol.call_args[0][0]
        assert alert.id is None
        assert alert.symbol == "AAPL"
        assert alert.email.value == "trader@example.com"

    @pytest.mark.asyncio
    async def test_invalid_symbol_rejected(self, mock_alert_repository: AsyncMock) -> None:
        use_case = UpsertAlertUseCase(alert_repository=mock_alert_repository)
        request = UpsertAlertRequest(direction=AlertDirection.DOWN, threshold_percent=Decimal("3"))

        with pytest.raises(InvalidAlertError):
            await use_case.execute("user-1", "trader@example.com", "   ", request)

        mock_alert_repository.replace_for_symbol.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, mock_alert_repository: AsyncMock) -> None:
        use_case = UpsertAlertUseCase(alert_repository=mock_alert_repository)
        request = UpsertAlertRequest(direction=AlertDirection.DOWN, threshold_percent=Decimal("3"))

        with pytest.raises(InvalidAlertError):
            await use_case.execute("user-1", "not-an-email", "AAPL", request)

    def test_request_enforces_threshold_range(self) -> None:
        with pytest.raises(ValueError):
            UpsertAlertRequest(direction=AlertDirection.UP, threshold_percent=Decimal("0.05"))
        with pytest.raises(ValueError):
            UpsertAlertRequest(direction=AlertDirection.UP, threshold_percent=Decimal("101"))


class TestGetAlertForSymbolUseCase:
    """Tests for GetAlertForSymbolUseCase."""

    @pytest.mark.asyncio
    async def test_returns_active_alert(
        self, mock_alert_repository: AsyncMock, saved_alert: Alert
    ) -> None:
        mock_alert_repository.get_active_for_symbol.return_value = saved_alert
        use_case = GetAlertForSymbolUseCase(alert_repository=mock_alert_repository)

        dto = await use_case.execute("user-1", "aapl")

        assert dto is not None
        assert dto.threshold_percent == Decimal("5")
        mock_alert_repository.get_active_for_symbol.assert_awaited_once_with("user-1", "AAPL")

    @pytest.mark.asyncio
    async def test_returns_none_without_alert(self, mock_alert_repository: AsyncMock) -> None:
        mock_alert_repository.get_active_for_symbol.return_value = None
        use_case = GetAlertForSymbolUseCase(alert_repository=mock_alert_repository)

        assert await use_case.execute("user-1", "AAPL") is None


class TestDeleteAlertsForSymbolUseCase:
    """Tests for DeleteAlertsForSymbolUseCase."""

    @pytest.mark.asyncio
    async def test_deletes_alerts(self, mock_alert_repository: AsyncMock) -> None:
        mock_alert_repository.delete_for_symbol.return_value = 2
        use_case = DeleteAlertsForSymbolUseCase(alert_repository=mock_alert_repository)

        assert await use_case.execute("user-1", "msft") == 2
        mock_alert_repository.delete_for_symbol.assert_awaited_once_with("user-1", "MSFT")

    @pytest.mark.asyncio
    async def test_nothing_to_delete(self, mock_alert_repository: AsyncMock) -> None:
        mock_alert_repository.delete_for_symbol.return_value = 0
        use_case = DeleteAlertsForSymbolUseCase(alert_repository=mock_alert_repository)

        with pytest.raises(AlertNotFoundError, match="not found"):
            await use_case.execute("user-1", "MSFT")
