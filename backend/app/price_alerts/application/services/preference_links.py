"""Signed, per-recipient links for managing email preferences.

Signatures are HMAC-SHA256 over ``"{email}.{scope}"``, so a link is
deterministic for a recipient and can be verified without a database hit.
"""

import hashlib
import hmac
from enum import Enum
from typing import Optional
from urllib.parse import urlencode

from app.core.config import get_settings
from app.price_alerts.domain.value_objects.email_address import normalize_email


class PreferenceScope(str, Enum):
    """What an unsubscribe link opts the recipient out of."""

    ALL = "all"
    NEWS = "news"


def _secret(secret: Optional[str]) -> bytes:
    return (secret if secret is not None else get_settings().unsubscribe_secret).encode("utf-8")


def sign_preferences(
    email: str,
    scope: PreferenceScope = PreferenceScope.ALL,
    secret: Optional[str] = None,
) -> str:
    """Return the hex signature for an address and scope."""
    payload = f"{normalize_email(email)}.{PreferenceScope(scope).value}".encode("utf-8")
    return hmac.new(_secret(secret), payload, hashlib.sha256).hexdigest()


def verify_preferences(
    email: str,
    scope: str,
    signature: str,
    secret: Optional[str] = None,
) -> bool:
    """Check a signature produced by :func:`sign_preferences`."""
    if not email or not signature:
        return False
    try:
        parsed_scope = PreferenceScope(scope)
    except ValueError:
        return False
    expected = sign_preferences(email, parsed_scope, secret=secret)
    return hmac.compare_digest(expected, signature)


def _signed_query(email: str, scope: PreferenceScope, secret: Optional[str]) -> str:
    normalized = normalize_email(email)
    return urlencode(
        {
            "email": normalized,
            "scope": scope.value,
            "sig": sign_preferences(normalized, scope, secret=secret),
        }
    )


def build_manage_preferences_url(
    email: str,
    base_url: Optional[str] = None,
    secret: Optional[str] = None,
) -> str:
    """Link to the profile settings page, personalized for the recipient."""
    base = base_url or get_settings().public_base_url
    return f"{base}/settings/profile?{_signed_query(email, PreferenceScope.ALL, secret)}"


def build_unsubscribe_url(
    email: str,
    scope: PreferenceScope = PreferenceScope.ALL,
    base_url: Optional[str] = None,
    secret: Optional[str] = None,
) -> str:
    """One-click unsubscribe link handled by ``GET /api/unsubscribe``."""
    base = base_url or get_settings().public_base_url
    return f"{base}/api/unsubscribe?{_signed_query(email, PreferenceScope(scope), secret)}"
