"""One-click unsubscribe endpoint for links embedded in outgoing mail.

Always ends on the profile settings page, where users manage their email
preferences; a valid signature applies the opt-out on the way.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import get_settings
from app.price_alerts.application.use_cases.manage_preferences import UnsubscribeUseCase
from app.price_alerts.infrastructure.db.session import get_async_session_local
from app.price_alerts.infrastructure.repositories.sql_preference_repository import (
    SqlEmailPreferenceRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/unsubscribe", status_code=status.HTTP_302_FOUND)
async def unsubscribe(
    email: Annotated[Optional[str], Query(description="Recipient address")] = None,
    scope: Annotated[str, Query(description="all or news")] = "all",
    sig: Annotated[Optional[str], Query(description="Link signature")] = None,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_async_session_local),
) -> RedirectResponse:
    """Apply a signed opt-out and redirect to the profile settings page."""
    target = f"{get_settings().public_base_url}/settings/profile"

    if not email or not sig:
        return RedirectResponse(target, status_code=status.HTTP_302_FOUND)

    use_case = UnsubscribeUseCase(
        preference_repository=SqlEmailPreferenceRepository(session_factory),
    )

    try:
        applied = await use_case.execute(email, scope, sig)
    except Exception as e:
        logger.error(f"Unsubscribe failed for {email}: {e!r}")
        applied = False

    if applied:
        target = f"{target}?from=unsubscribe"
    return RedirectResponse(target, status_code=status.HTTP_302_FOUND)
