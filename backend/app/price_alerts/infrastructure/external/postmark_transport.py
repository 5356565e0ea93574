"""Postmark email transport.

Without an API token the transport runs in dev mode and only logs the
message, so local runs never send real mail.
"""

import logging
from typing import Optional

import httpx

from app.price_alerts.application.exceptions import EmailDeliveryError
from app.price_alerts.application.interfaces.email_transport import EmailMessage, EmailTransport

logger = logging.getLogger(__name__)

POSTMARK_API_URL = "https://api.postmarkapp.com"


class PostmarkTransport(EmailTransport):
    """Send rendered messages through the Postmark HTTP API."""

    def __init__(
        self,
        api_token: str,
        timeout: float = 10.0,
        base_url: str = POSTMARK_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_token = api_token
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @property
    def is_dev_mode(self) -> bool:
        return not self._api_token

    async def send(self, message: EmailMessage) -> None:
        """Deliver one message, or log it in dev mode.

        Raises:
            EmailDeliveryError: On HTTP errors or a non-200 Postmark answer.
        """
        if self.is_dev_mode:
            logger.info(
                f"[DEV MODE] Email to {message.to}:\n"
                f"  Subject: {message.subject}\n"
                f"{message.text_body}"
            )
            return

        try:
            response = await self._client.post(
                "/email",
                headers={"X-Postmark-Server-Token": self._api_token},
                json={
                    "From": message.from_address,
                    "To": message.to,
                    "Subject": message.subject,
                    "HtmlBody": message.html_body,
                    "TextBody": message.text_body,
                    "MessageStream": "outbound",  # Default transactional stream
                },
            )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(message.to, f"request failed: {e!r}") from e

        if response.status_code != 200:
            logger.error(f"Postmark error: {response.status_code} - {response.text}")
            raise EmailDeliveryError(message.to, f"Postmark returned {response.status_code}")

        logger.debug(f"Postmark accepted email to {message.to}: {message.subject}")

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
