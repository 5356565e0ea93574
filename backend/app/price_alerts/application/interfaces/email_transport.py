"""Email transport interface for delivering fully rendered messages."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    """A rendered message ready for delivery."""

    to: str
    subject: str
    text_body: str
    html_body: str
    from_address: str


class EmailTransport(ABC):
    """Abstract base class for email delivery backends.

    Transports do not retry; the next evaluation pass is the retry.
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Deliver one message.

        Raises:
            EmailDeliveryError: If the message could not be delivered.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
