"""Database infrastructure components.

This module exports SQLAlchemy models, session management utilities,
and the Base class for ORM model definitions.
"""

from app.price_alerts.infrastructure.db.models import (
    Base,
    StockAlertModel,
    UserModel,
)
from app.price_alerts.infrastructure.db.session import (
    dispose_engine,
    get_async_session_local,
    get_engine,
)

__all__ = [
    # Base class
    "Base",
    # Models
    "StockAlertModel",
    "UserModel",
    # Session utilities
    "dispose_engine",
    "get_engine",
    "get_async_session_local",
]
