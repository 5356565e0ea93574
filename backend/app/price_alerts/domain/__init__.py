# Domain layer - pure business rules, no framework dependencies

from app.price_alerts.domain.entities import Alert, AlertDirection, EmailPreferences
from app.price_alerts.domain.services import AlertPolicy
from app.price_alerts.domain.value_objects import EmailAddress, EmailCategory

__all__ = [
    "Alert",
    "AlertDirection",
    "AlertPolicy",
    "EmailAddress",
    "EmailCategory",
    "EmailPreferences",
]
