# FastAPI routers - alerts, unsubscribe, jobs, health
from app.price_alerts.presentation.api import alerts, health, jobs, unsubscribe

__all__ = ["alerts", "health", "jobs", "unsubscribe"]
