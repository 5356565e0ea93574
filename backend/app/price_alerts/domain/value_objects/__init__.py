"""Domain value objects."""

from app.price_alerts.domain.value_objects.email_address import EmailAddress, normalize_email
from app.price_alerts.domain.value_objects.email_category import EmailCategory

__all__ = [
    "EmailAddress",
    "EmailCategory",
    "normalize_email",
]
