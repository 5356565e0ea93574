# External clients - Finnhub market data, Postmark email

from .finnhub_client import FinnhubClient
from .postmark_transport import PostmarkTransport

__all__ = [
    "FinnhubClient",
    "PostmarkTransport",
]
