"""Stock alert management API endpoints.

One alert per symbol per user:
- PUT /api/alerts/{symbol} - Create or replace the alert on a symbol
- GET /api/alerts/{symbol} - Get the active alert on a symbol
- DELETE /api/alerts/{symbol} - Delete the alerts on a symbol
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.price_alerts.application.dto.alert_dto import AlertDTO, UpsertAlertRequest
from app.price_alerts.application.exceptions import AlertNotFoundError, InvalidAlertError
from app.price_alerts.application.use_cases.manage_alerts import (
    DeleteAlertsForSymbolUseCase,
    GetAlertForSymbolUseCase,
    UpsertAlertUseCase,
)
from app.price_alerts.infrastructure.db.session import get_async_session_local
from app.price_alerts.infrastructure.repositories.sql_alert_repository import SqlAlertRepository
from app.price_alerts.presentation.api.dependencies import CurrentUser, get_current_user

router = APIRouter()

SymbolPath = Annotated[str, Path(min_length=1, max_length=20, description="Ticker symbol")]


@router.put("/alerts/{symbol}", response_model=AlertDTO)
async def upsert_alert(
    symbol: SymbolPath,
    request: UpsertAlertRequest,
    user: CurrentUser = Depends(get_current_user),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_async_session_local),
) -> AlertDTO:
    """Create or replace the user's alert for a symbol.

    Any previous alert the user had on the symbol is removed, so editing and
    creating both leave exactly one active alert.

    Raises:
        HTTPException: 400 if the alert is invalid.
    """
    use_case = UpsertAlertUseCase(alert_repository=SqlAlertRepository(session_factory))

    try:
        return await use_case.execute(user.id, user.email, symbol, request)
    except InvalidAlertError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e


@router.get("/alerts/{symbol}", response_model=Optional[AlertDTO])
async def get_alert(
    symbol: SymbolPath,
    user: CurrentUser = Depends(get_current_user),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_async_session_local),
) -> Optional[AlertDTO]:
    """Return the user's active alert for a symbol, or null."""
    use_case = GetAlertForSymbolUseCase(alert_repository=SqlAlertRepository(session_factory))

    try:
        return await use_case.execute(user.id, symbol)
    except InvalidAlertError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e


@router.delete("/alerts/{symbol}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_alert(
    symbol: SymbolPath,
    user: CurrentUser = Depends(get_current_user),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_async_session_local),
) -> None:
    """Delete every alert the user has on a symbol.

    Raises:
        HTTPException: 404 if the user had no alert on the symbol.
    """
    use_case = DeleteAlertsForSymbolUseCase(alert_repository=SqlAlertRepository(session_factory))

    try:
        await use_case.execute(user.id, symbol)
    except AlertNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        ) from e
    except InvalidAlertError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
