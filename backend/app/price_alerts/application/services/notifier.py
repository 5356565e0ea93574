"""Alert notifier: renders and sends one price-alert email per call.

Every send is gated by the eligibility gate first. A denied send is a normal
outcome, not an error; transport failures propagate to the caller.
"""

import asyncio
import logging
import math
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.price_alerts.application.interfaces.email_transport import EmailMessage, EmailTransport
from app.price_alerts.application.services.eligibility_gate import EligibilityGate
from app.price_alerts.application.services.preference_links import (
    build_manage_preferences_url,
    build_unsubscribe_url,
)
from app.price_alerts.domain.entities.alert import AlertDirection
from app.price_alerts.domain.value_objects.email_category import EmailCategory

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

_TEMPLATES_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))),  # price_alerts/
    "templates",
    "email",
)

_TEMPLATE_BY_DIRECTION = {
    AlertDirection.UP: "stock_alert_upper.html",
    AlertDirection.DOWN: "stock_alert_lower.html",
}


class NotificationOutcome(Enum):
    """Result of a notifier call that did not raise."""

    SENT = "sent"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True)
class AlertEmailParams:
    """Everything needed to render one alert email.

    Optional fields degrade to ``N/A`` (or the current time for the
    timestamp) instead of failing the send.
    """

    email: str
    symbol: str
    direction: AlertDirection
    company: Optional[str] = None
    timestamp: Optional[Union[datetime, str]] = None
    current_price: Optional[float] = None
    target_price: Optional[float] = None


def format_price(value: Optional[float]) -> str:
    """Two decimals, or ``N/A`` for missing or non-finite values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return NOT_AVAILABLE
    if not math.isfinite(value):
        return NOT_AVAILABLE
    return f"{value:.2f}"


def format_timestamp(value: Optional[Union[datetime, str]]) -> str:
    """ISO-8601 UTC timestamp, falling back to now for missing/invalid input."""
    ts: Optional[datetime] = None
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str) and value.strip():
        try:
            ts = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            ts = None

    if ts is None:
        ts = datetime.now(timezone.utc)
    elif ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat()


def _build_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(_TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
    )


class AlertNotifier:
    """Application service sending templated price-alert emails."""

    def __init__(
        self,
        transport: EmailTransport,
        eligibility_gate: EligibilityGate,
        from_address: str,
        send_timeout_seconds: float = 10.0,
        templates: Optional[Environment] = None,
        base_url: Optional[str] = None,
        link_secret: Optional[str] = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            transport: Email delivery backend.
            eligibility_gate: Consulted before every send.
            from_address: Sender shown on alert emails.
            send_timeout_seconds: Upper bound for one transport call.
            templates: Jinja2 environment; defaults to the bundled templates.
            base_url: Overrides the configured public base URL for links.
            link_secret: Overrides the configured signing secret for links.
        """
        self._transport = transport
        self._eligibility_gate = eligibility_gate
        self._from_address = from_address
        self._send_timeout_seconds = send_timeout_seconds
        self._templates = templates or _build_environment()
        self._base_url = base_url
        self._link_secret = link_secret

    async def send_alert_email(self, params: AlertEmailParams) -> NotificationOutcome:
        """Send one alert email unless the recipient may not receive alerts.

        Returns:
            SENT after the transport accepted the message, SUPPRESSED when
            the eligibility gate refused.

        Raises:
            EmailDeliveryError: Transport failure.
            asyncio.TimeoutError: The transport did not answer in time.
        """
        allowed = await self._eligibility_gate.can_send(params.email, EmailCategory.ALERTS)
        if not allowed:
            logger.info(
                "Skipping %s alert email for %s: recipient not eligible",
                params.symbol,
                params.email,
            )
            return NotificationOutcome.SUPPRESSED

        message = self.render(params)
        await asyncio.wait_for(
            self._transport.send(message),
            timeout=self._send_timeout_seconds,
        )
        logger.info("Alert email sent to %s for %s (%s)", params.email, params.symbol, params.direction.value)
        return NotificationOutcome.SENT

    def render(self, params: AlertEmailParams) -> EmailMessage:
        """Render subject, text and HTML bodies for an alert email."""
        company = (str(params.company).strip() if params.company else "") or NOT_AVAILABLE
        timestamp = format_timestamp(params.timestamp)
        current = format_price(params.current_price)
        target = format_price(params.target_price)
        manage_url = build_manage_preferences_url(
            params.email, base_url=self._base_url, secret=self._link_secret
        )
        unsubscribe_url = build_unsubscribe_url(
            params.email, base_url=self._base_url, secret=self._link_secret
        )

        template = self._templates.get_template(_TEMPLATE_BY_DIRECTION[params.direction])
        html_body = template.render(
            symbol=params.symbol,
            company=company,
            timestamp=timestamp,
            current_price=current,
            target_price=target,
            manage_preferences_url=manage_url,
            unsubscribe_url=unsubscribe_url,
        )

        if params.direction == AlertDirection.UP:
            subject = f"Price Alert: {params.symbol} hit upper target"
        else:
            subject = f"Price Alert: {params.symbol} hit lower target"

        text_body = "\n".join(
            [
                f"Price alert for {params.symbol}: {params.direction.value}",
                f"Company: {company}",
                f"Time: {timestamp}",
                f"Current Price: {current}",
                f"Target Price: {target}",
                "",
                f"Manage email preferences: {manage_url}",
            ]
        )

        return EmailMessage(
            to=params.email,
            subject=subject,
            text_body=text_body,
            html_body=html_body,
            from_address=self._from_address,
        )
