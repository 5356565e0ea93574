"""Tests for the alerts API router.

Tests the per-symbol upsert/get/delete endpoints for stock alerts.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.price_alerts.application.dto.alert_dto import AlertDTO
from app.price_alerts.application.exceptions import AlertNotFoundError, InvalidAlertError
from app.price_alerts.domain.entities.alert import AlertDirection
from app.price_alerts.infrastructure.db.session import get_async_session_local
from app.price_alerts.presentation.api.alerts import router

USER_HEADERS = {"X-User-Id": "user-1", "X-User-Email": "trader@example.com"}


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with the alerts router."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_async_session_local] = lambda: MagicMock()
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def mock_alert_dto() -> AlertDTO:
    """Create a mock AlertDTO for testing."""
    return AlertDTO(
        id=1,
        symbol="AAPL",
        direction=AlertDirection.UP,
        threshold_percent=Decimal("5"),
        active=True,
        created_at=datetime.now(timezone.utc),
        last_notified_at=None,
    )


class TestUpsertAlert:
    """Tests for PUT /api/alerts/{symbol}."""

    def test_upsert_alert_success(self, client: TestClient, mock_alert_dto: AlertDTO) -> None:
        """Test saving an alert for a symbol."""
        with patch(
            "app.price_alerts.presentation.api.alerts.UpsertAlertUseCase"
        ) as mock_use_case_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.return_value = mock_alert_dto
            mock_use_case_class.return_value = mock_use_case

            response = client.put(
                "/api/alerts/aapl",
                json={"direction": "UP", "threshold_percent": 5},
                headers=USER_HEADERS,
            )

            assert response.status_code == 200
            data = response.json()
            assert data["symbol"] == "AAPL"
            assert data["direction"] == "UP"
            assert data["active"] is True
            args = mock_use_case.execute.call_args[0]
            assert args[:3] == ("user-1", "trader@example.com", "aapl")

    def test_upsert_alert_requires_user(self, client: TestClient) -> None:
        """Test 401 response without the auth headers."""
        response = client.put(
            "/api/alerts/AAPL",
            json={"direction": "UP", "threshold_percent": 5},
        )

        assert response.status_code == 401

    @pytest.mark.parametrize("threshold", [0, 0.05, 150])
    def test_upsert_alert_threshold_out_of_range(self, client: TestClient, threshold) -> None:
        """Test 422 response for thresholds outside 0.1-100."""
        response = client.put(
            "/api/alerts/AAPL",
            json={"direction": "DOWN", "threshold_percent": threshold},
            headers=USER_HEADERS,
        )

        assert response.status_code == 422

    def test_upsert_alert_invalid_direction(self, client: TestClient) -> None:
        """Test 422 response for an unknown direction."""
        response = client.put(
            "/api/alerts/AAPL",
            json={"direction": "SIDEWAYS", "threshold_percent": 5},
            headers=USER_HEADERS,
        )

        assert response.status_code == 422

    def test_upsert_alert_invalid_alert(self, client: TestClient) -> None:
        """Test 400 response when the use case rejects the alert."""
        with patch(
            "app.price_alerts.presentation.api.alerts.UpsertAlertUseCase"
        ) as mock_use_case_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.side_effect = InvalidAlertError("Invalid email address")
            mock_use_case_class.return_value = mock_use_case

            response = client.put(
                "/api/alerts/AAPL",
                json={"direction": "UP", "threshold_percent": 5},
                headers=USER_HEADERS,
            )

            assert response.status_code == 400
            assert "email" in response.json()["detail"].lower()


class TestGetAlert:
    """Tests for GET /api/alerts/{symbol}."""

    def test_get_alert_found(self, client: TestClient, mock_alert_dto: AlertDTO) -> None:
        """Test reading the active alert."""
        with patch(
            "app.price_alerts.presentation.api.alerts.GetAlertForSymbolUseCase"
        ) as mock_use_case_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.return_value = mock_alert_dto
            mock_use_case_class.return_value = mock_use_case

            response = client.get("/api/alerts/AAPL", headers=USER_HEADERS)

            assert response.status_code == 200
            assert float(response.json()["threshold_percent"]) == 5

    def test_get_alert_none(self, client: TestClient) -> None:
        """Test null body when the user has no alert on the symbol."""
        with patch(
            "app.price_alerts.presentation.api.alerts.GetAlertForSymbolUseCase"
        ) as mock_use_case_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.return_value = None
            mock_use_case_class.return_value = mock_use_case

            response = client.get("/api/alerts/AAPL", headers=USER_HEADERS)

            assert response.status_code == 200
            assert response.json() is None


class TestDeleteAlert:
    """Tests for DELETE /api/alerts/{symbol}."""

    def test_delete_alert_success(self, client: TestClient) -> None:
        """Test successful deletion."""
        with patch(
            "app.price_alerts.presentation.api.alerts.DeleteAlertsForSymbolUseCase"
        ) as mock_use_case_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.return_value = 1
            mock_use_case_class.return_value = mock_use_case

            response = client.delete("/api/alerts/AAPL", headers=USER_HEADERS)

            assert response.status_code == 204
            mock_use_case.execute.assert_awaited_once_with("user-1", "AAPL")

    def test_delete_alert_not_found(self, client: TestClient) -> None:
        """Test 404 response when there is nothing to delete."""
        with patch(
            "app.price_alerts.presentation.api.alerts.DeleteAlertsForSymbolUseCase"
        ) as mock_use_case_class:
            mock_use_case = AsyncMock()
            mock_use_case.execute.side_effect = AlertNotFoundError("AAPL")
            mock_use_case_class.return_value = mock_use_case

            response = client.delete("/api/alerts/AAPL", headers=USER_HEADERS)

            assert response.status_code == 404
            assert "not found" in response.json()["detail"].lower()
