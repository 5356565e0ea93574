"""Infrastructure repository implementations.

This module exports concrete repository implementations that fulfill
the abstract interfaces defined in the domain layer.
"""

from app.price_alerts.infrastructure.repositories.sql_alert_repository import (
    SqlAlertRepository,
)
from app.price_alerts.infrastructure.repositories.sql_preference_repository import (
    SqlEmailPreferenceRepository,
)

__all__ = [
    "SqlAlertRepository",
    "SqlEmailPreferenceRepository",
]
