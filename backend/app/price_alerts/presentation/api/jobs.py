"""On-demand trigger for the alert evaluation pass."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from app.price_alerts.infrastructure.tasks.alert_tasks import check_stock_alerts

router = APIRouter()


class JobAcceptedResponse(BaseModel):
    """Response for an enqueued job."""

    task_id: str
    status: str


@router.post(
    "/jobs/check-stock-alerts",
    response_model=JobAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def trigger_stock_alert_check() -> JobAcceptedResponse:
    """Enqueue one evaluation pass outside the regular schedule."""
    async_result = check_stock_alerts.delay()
    return JobAcceptedResponse(task_id=str(async_result.id), status="queued")
